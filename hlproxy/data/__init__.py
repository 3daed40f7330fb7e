from .upstream import UpstreamError
from .hyperliquid_client import HyperliquidClient, BatchItem
from .exchange_rates import ExchangeRatesClient

__all__ = [
    "UpstreamError",
    "HyperliquidClient",
    "BatchItem",
    "ExchangeRatesClient",
]
