"""Shared plumbing for outbound calls: error type and read-once body decoding."""
import json
from typing import Any, Optional

import requests

from ..utils import get_logger, log_upstream_failure

logger = get_logger(__name__)


class UpstreamError(Exception):
    """
    An upstream call failed: non-2xx status, malformed body, or network error.

    Attributes:
        message: Short, caller-facing summary
        status: Upstream HTTP status, None for network-level failures
        details: Best-effort detail (parsed error, raw text, or templated message)
    """

    def __init__(self, message: str, status: Optional[int] = None, details: str = ""):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details

    def to_payload(self) -> dict:
        payload = {"error": self.message}
        if self.status is not None:
            payload["status"] = self.status
        payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        if self.status is not None:
            return f"{self.message} (HTTP {self.status}): {self.details}"
        return f"{self.message}: {self.details}"


def error_detail(parsed: Any, text: str, status: int, max_chars: int = 100) -> str:
    """Pick the most useful detail string for a failed response."""
    if isinstance(parsed, dict):
        err = parsed.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str) and err:
            return err
        if parsed.get("message"):
            return str(parsed["message"])
    if text and text.strip():
        return text.strip()[:max_chars]
    return f"Upstream API returned HTTP {status}"


def read_json_response(response: requests.Response, source: str, max_chars: int = 100) -> Any:
    """
    Decode an upstream response, reading its body exactly once.

    The body is pulled as text a single time and then parsed, so a parse
    failure never triggers a second read of the stream.

    Raises:
        UpstreamError: On non-2xx status or an unparsable 2xx body
    """
    text = response.text
    status = response.status_code

    try:
        parsed = json.loads(text)
        parse_error = None
    except ValueError as e:
        parsed = None
        parse_error = e

    if not 200 <= status < 300:
        details = error_detail(parsed, text, status, max_chars)
        log_upstream_failure(f"{source} returned HTTP {status}: {details}")
        raise UpstreamError(f"Failed to fetch data from {source}", status=status, details=details)

    if parse_error is not None:
        if text and text.strip():
            details = f"Failed to parse upstream response as JSON: {text.strip()[:max_chars]}"
        else:
            details = "Failed to parse upstream response as JSON: empty body"
        log_upstream_failure(f"{source} returned a malformed body: {parse_error}")
        raise UpstreamError(f"Malformed response from {source}", status=status, details=details)

    return parsed


def send(session: requests.Session, method: str, url: str, source: str, timeout: float, **kwargs) -> requests.Response:
    """Issue one outbound request, converting network failures to UpstreamError."""
    logger.debug(f"{method} {url} ({source})")
    try:
        return session.request(method, url, timeout=timeout, **kwargs)
    except requests.RequestException as e:
        log_upstream_failure(f"{source} unreachable: {e}")
        raise UpstreamError(f"Failed to reach {source}", details=str(e)) from e
