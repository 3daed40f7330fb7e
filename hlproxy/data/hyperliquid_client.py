"""Hyperliquid info API client."""
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..utils import get_logger
from ..utils.config import DEFAULT_RPC_URL
from .upstream import UpstreamError, read_json_response, send

logger = get_logger(__name__)

SOURCE = "Hyperliquid API"


@dataclass
class BatchItem:
    """One sub-query result of a batch call, matched back to its request."""
    request_id: int
    result: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def rpc_body(method: str, params: Any, request_id: int = 1) -> dict:
    """Build a JSON-RPC request body."""
    return {
        "method": method,
        "params": params,
        "id": request_id,
        "jsonrpc": "2.0",
    }


def _rpc_error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(error)


def _normalize_id(value: Any) -> Any:
    """Match "1" and 1 as the same request id."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return value


def unwrap_result(payload: Any) -> Any:
    """
    Take the result out of a JSON-RPC envelope.

    Any object with a `result` key is treated as an envelope. Other
    payloads are returned as-is, which is how the info API answers plain
    (non-RPC) queries.

    Raises:
        UpstreamError: If the envelope carries an error
    """
    if isinstance(payload, dict):
        if payload.get("error") is not None and "result" not in payload:
            raise UpstreamError(
                f"{SOURCE} returned an error",
                status=200,
                details=_rpc_error_message(payload["error"]),
            )
        if "result" in payload:
            return payload["result"]
    return payload


class HyperliquidClient:
    """Client for the Hyperliquid info endpoint."""

    def __init__(
        self,
        rpc_url: str = DEFAULT_RPC_URL,
        timeout: float = 10.0,
        details_max_chars: int = 100,
        session: Optional[requests.Session] = None,
    ):
        self.rpc_url = rpc_url
        self.timeout = float(timeout)
        self.details_max_chars = int(details_max_chars)
        self.sess = session or requests.Session()

    def _post(self, body: Any) -> Any:
        response = send(
            self.sess,
            "POST",
            self.rpc_url,
            SOURCE,
            self.timeout,
            json=body,
            headers={"Content-Type": "application/json"},
        )
        return read_json_response(response, SOURCE, self.details_max_chars)

    def call(self, method: str, params: Any, request_id: int = 1) -> Any:
        """Issue a single query and return its result."""
        return unwrap_result(self._post(rpc_body(method, params, request_id)))

    def batch(self, calls: list[tuple[str, Any]]) -> list[BatchItem]:
        """
        Issue several independent sub-queries in one request.

        Sub-queries get ids 1..N. Responses are matched by id, and by list
        position for entries that carry no id. The returned list is in
        request order; failed or missing sub-queries come back with `error` set.

        Raises:
            UpstreamError: If the call as a whole fails or is not a list
        """
        if not calls:
            return []

        bodies = [rpc_body(method, params, i + 1) for i, (method, params) in enumerate(calls)]
        entries = self._post(bodies)

        if not isinstance(entries, list):
            raise UpstreamError(
                f"Malformed response from {SOURCE}",
                status=200,
                details=f"Expected a list of {len(bodies)} batch results",
            )

        by_id = {}
        for entry in entries:
            if isinstance(entry, dict) and "id" in entry:
                by_id[_normalize_id(entry["id"])] = entry

        items = []
        for index, body in enumerate(bodies):
            request_id = body["id"]
            if request_id in by_id:
                entry = by_id[request_id]
            elif index < len(entries) and not (isinstance(entries[index], dict) and "id" in entries[index]):
                entry = entries[index]
            else:
                logger.warning(f"No batch result for sub-query {request_id}")
                items.append(BatchItem(request_id, error="missing from batch response"))
                continue

            try:
                items.append(BatchItem(request_id, result=unwrap_result(entry)))
            except UpstreamError as e:
                logger.warning(f"Sub-query {request_id} failed: {e.details}")
                items.append(BatchItem(request_id, error=e.details))

        return items

    def meta_and_asset_ctxs(self) -> Any:
        return self.call("metaAndAssetCtxs", {})

    def all_mids(self) -> Any:
        return self.call("allMids", {})

    def exchange_snapshot(self, symbols: list[str]) -> Any:
        return self.call("exchangeSnapshot", [{"type": "spot"}, list(symbols)])

    def leaderboard(self, limit: int) -> Any:
        return self.call("leaderboard", {"limit": limit})

    def clearinghouse_states(self, wallets: list[str]) -> list[BatchItem]:
        """Fetch every wallet's clearinghouse state in one batch, in wallet order."""
        logger.info(f"Fetching clearinghouse state for {len(wallets)} wallets")
        return self.batch([("clearinghouseState", {"user": wallet}) for wallet in wallets])
