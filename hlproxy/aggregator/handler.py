"""Proxy/aggregator request handler."""
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..data import ExchangeRatesClient, HyperliquidClient, UpstreamError
from ..utils import get_logger
from .mock_data import mock_positions
from .models import HandlerResponse, Position, success_payload
from .sources import build_markets, clearinghouse_positions, fetch_prices, leaderboard_wallets
from .strategies import FailurePolicy, PositionSource, ProxySettings

logger = get_logger(__name__)


@dataclass
class RequestContext:
    """State for a single invocation, never shared between requests."""
    wallets: list[str]
    prices: dict[str, float] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    prices_failed: bool = False


class UpstreamFailure(Exception):
    """Raised inside a request to short-circuit into a 502."""

    def __init__(self, error: UpstreamError):
        super().__init__(str(error))
        self.error = error


class ProxyHandler:
    """
    Fetches prices and positions, then shapes them into the dashboard payload.

    The handler is safe to reuse across requests: all per-request data lives
    in a RequestContext built at the start of `handle`.
    """

    def __init__(
        self,
        settings: Optional[ProxySettings] = None,
        hl_client: Optional[HyperliquidClient] = None,
        rates_client: Optional[ExchangeRatesClient] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.settings = settings or ProxySettings()
        self.hl = hl_client or HyperliquidClient(
            rpc_url=self.settings.rpc_url,
            timeout=self.settings.timeout,
            details_max_chars=self.settings.details_max_chars,
        )
        self.rates = rates_client or ExchangeRatesClient(
            url=self.settings.exchange_rates_url,
            timeout=self.settings.timeout,
            details_max_chars=self.settings.details_max_chars,
        )
        self.clock = clock

    def handle(self, method: Optional[str] = "GET") -> HandlerResponse:
        """Answer one inbound request."""
        if (method or "GET").upper() == "OPTIONS":
            return HandlerResponse(200)

        try:
            return self._aggregate()
        except UpstreamFailure as e:
            return HandlerResponse(502, e.error.to_payload())
        except Exception as e:
            logger.exception(f"Serverless function execution failed: {e}")
            return HandlerResponse(500, {
                "error": "Internal Server Error during execution",
                "details": str(e),
            })

    def _upstream_failed(self, ctx: RequestContext, error: UpstreamError, warning: str) -> None:
        """Apply the failure policy: raise for SURFACE, record a warning for DEGRADE."""
        logger.error(f"{warning}: {error}")
        if self.settings.failure_policy is FailurePolicy.SURFACE:
            raise UpstreamFailure(error)
        ctx.warnings.append(f"{warning}: {error.details or error.message}")

    def _aggregate(self) -> HandlerResponse:
        settings = self.settings
        ctx = RequestContext(wallets=list(settings.tracked_wallets))
        timestamp = int(self.clock() * 1000)

        try:
            ctx.prices = fetch_prices(settings, self.hl, self.rates)
        except UpstreamError as e:
            self._upstream_failed(ctx, e, "Price data unavailable, using fallback prices")
            ctx.prices_failed = True

        markets = build_markets(settings.markets, ctx.prices, timestamp)
        positions = self._positions(ctx)

        warning = "; ".join(ctx.warnings) or None
        logger.info(f"Returning {len(markets)} markets, {len(positions)} positions")
        return HandlerResponse(200, success_payload(markets, positions, warning))

    def _positions(self, ctx: RequestContext) -> list[Position]:
        source = self.settings.position_source

        if source is PositionSource.MOCK:
            # Mock positions are only shown against live prices
            if ctx.prices_failed:
                return []
            return mock_positions(ctx.prices)

        if source is PositionSource.LEADERBOARD:
            try:
                ctx.wallets = leaderboard_wallets(self.hl, self.settings.leaderboard_limit)
            except UpstreamError as e:
                self._upstream_failed(ctx, e, "Leaderboard unavailable, using tracked wallets")

        try:
            return clearinghouse_positions(self.hl, ctx.wallets, ctx.prices)
        except UpstreamError as e:
            self._upstream_failed(ctx, e, "Position data unavailable")
            return []
