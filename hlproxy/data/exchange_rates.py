"""Secondary price source backed by a USD exchange-rate API."""
from typing import Optional

import requests

from ..utils import get_logger
from ..utils.config import DEFAULT_RATES_URL
from .parsers import parse_exchange_rates
from .upstream import read_json_response, send

logger = get_logger(__name__)

SOURCE = "exchange rate API"


class ExchangeRatesClient:
    """Fetch USD-quoted rates and invert them into prices."""

    def __init__(
        self,
        url: str = DEFAULT_RATES_URL,
        timeout: float = 10.0,
        details_max_chars: int = 100,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = float(timeout)
        self.details_max_chars = int(details_max_chars)
        self.sess = session or requests.Session()

    def get_prices(self, symbols: Optional[list[str]] = None) -> dict[str, float]:
        """
        Get USD prices for the given symbols (all symbols when None).

        Raises:
            UpstreamError: On HTTP, network or body failure
        """
        response = send(self.sess, "GET", self.url, SOURCE, self.timeout)
        payload = read_json_response(response, SOURCE, self.details_max_chars)
        prices = parse_exchange_rates(payload)

        if symbols is not None:
            wanted = {s.upper() for s in symbols}
            prices = {s: p for s, p in prices.items() if s in wanted}

        logger.info(f"Fetched {len(prices)} prices from {SOURCE}")
        return prices
