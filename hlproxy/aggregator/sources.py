"""Price and position sources, one function per strategy."""
from typing import Callable

from ..data import ExchangeRatesClient, HyperliquidClient
from ..data.parsers import (
    parse_all_mids,
    parse_clearinghouse_positions,
    parse_leaderboard,
    parse_meta,
    parse_snapshot,
)
from ..utils import get_logger
from .models import Market, Position
from .pnl import is_dust, round_usd, side_for_size, unrealized_pnl
from .strategies import MarketDefinition, PriceStrategy, ProxySettings

logger = get_logger(__name__)


def _meta_prices(settings: ProxySettings, hl: HyperliquidClient, rates: ExchangeRatesClient) -> dict[str, float]:
    return parse_meta(hl.meta_and_asset_ctxs())


def _all_mids_prices(settings: ProxySettings, hl: HyperliquidClient, rates: ExchangeRatesClient) -> dict[str, float]:
    return parse_all_mids(hl.all_mids())


def _snapshot_prices(settings: ProxySettings, hl: HyperliquidClient, rates: ExchangeRatesClient) -> dict[str, float]:
    return parse_snapshot(hl.exchange_snapshot(settings.tracked_symbols))


def _exchange_rate_prices(settings: ProxySettings, hl: HyperliquidClient, rates: ExchangeRatesClient) -> dict[str, float]:
    return rates.get_prices(settings.tracked_symbols)


PRICE_FETCHERS: dict[PriceStrategy, Callable] = {
    PriceStrategy.META: _meta_prices,
    PriceStrategy.ALL_MIDS: _all_mids_prices,
    PriceStrategy.SNAPSHOT: _snapshot_prices,
    PriceStrategy.EXCHANGE_RATES: _exchange_rate_prices,
}


def fetch_prices(settings: ProxySettings, hl: HyperliquidClient, rates: ExchangeRatesClient) -> dict[str, float]:
    """
    Build the price map with the configured strategy.

    Raises:
        UpstreamError: If the source fails or returns an unexpected shape
    """
    prices = PRICE_FETCHERS[settings.price_strategy](settings, hl, rates)
    logger.info(f"Fetched {len(prices)} prices via {settings.price_strategy.value}")
    return prices


def build_markets(definitions: tuple[MarketDefinition, ...], prices: dict[str, float], timestamp: int) -> list[Market]:
    """Quote each simulated market on its asset's price, or its fallback."""
    markets = []
    for definition in definitions:
        price = prices.get(definition.asset)
        if price is None:
            logger.warning(f"No price for {definition.asset}, using fallback {definition.fallback_price}")
            price = definition.fallback_price
        markets.append(Market(
            market_id=definition.market_id,
            title=definition.title,
            odds_yes=definition.odds_yes,
            odds_no=definition.odds_no,
            current_price=price,
            timestamp=timestamp,
        ))
    return markets


def leaderboard_wallets(hl: HyperliquidClient, limit: int) -> list[str]:
    """Top `limit` wallets from the leaderboard, in rank order."""
    wallets = parse_leaderboard(hl.leaderboard(limit))[:limit]
    logger.info(f"Leaderboard returned {len(wallets)} wallets")
    return wallets


def clearinghouse_positions(hl: HyperliquidClient, wallets: list[str], prices: dict[str, float]) -> list[Position]:
    """
    Decode every wallet's open positions from one clearinghouse batch.

    Output keeps wallet order. Wallets whose sub-query failed, and
    positions below the dust threshold, are left out.

    Raises:
        UpstreamError: If the batch call itself fails
    """
    items = hl.clearinghouse_states(wallets)

    positions = []
    for wallet, item in zip(wallets, items):
        if not item.ok:
            logger.warning(f"Skipping wallet {wallet}: {item.error}")
            continue

        for raw in parse_clearinghouse_positions(item.result):
            if is_dust(raw.szi):
                continue

            quantity = abs(raw.szi)
            side = side_for_size(raw.szi)

            current_price = prices.get(raw.coin)
            if current_price is None and raw.position_value:
                current_price = raw.position_value / quantity
            if current_price is None:
                current_price = raw.entry_px

            positions.append(Position(
                wallet=wallet,
                asset=raw.coin,
                side=side,
                size_usd=round_usd(quantity * raw.entry_px),
                entry_price=raw.entry_px,
                current_price=current_price,
                liquidation_price=raw.liquidation_px or 0.0,
                unrealized_pnl=round_usd(unrealized_pnl(side, raw.entry_px, current_price, quantity)),
            ))

    logger.info(f"Decoded {len(positions)} open positions across {len(wallets)} wallets")
    return positions
