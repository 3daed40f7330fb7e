"""Parsers for each upstream payload shape.

Every parser either returns normalized data or raises UpstreamError, so an
unexpected shape takes the same failure path as an HTTP error.
"""
from dataclasses import dataclass
from typing import Any, Optional

from ..utils import get_logger
from .upstream import UpstreamError

logger = get_logger(__name__)


@dataclass
class WalletPosition:
    """A perp position decoded from a clearinghouseState payload."""
    coin: str
    szi: float
    entry_px: float
    position_value: Optional[float] = None
    liquidation_px: Optional[float] = None


def to_float(value: Any) -> Optional[float]:
    """Parse a numeric or numeric-string field, None when absent or invalid."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _shape_error(what: str, payload: Any) -> UpstreamError:
    return UpstreamError(
        "Unexpected response shape from upstream API",
        details=f"Expected {what}, got {type(payload).__name__}",
    )


def parse_all_mids(result: Any) -> dict[str, float]:
    """allMids: {"BTC": "61000.5", ...}."""
    if not isinstance(result, dict):
        raise _shape_error("an object of symbol to mid price", result)

    prices = {}
    for symbol, raw in result.items():
        price = to_float(raw)
        if price is None:
            logger.debug(f"Skipping unparsable mid for {symbol}: {raw!r}")
            continue
        prices[symbol] = price
    return prices


def parse_snapshot(result: Any) -> dict[str, float]:
    """exchangeSnapshot: [{"coin": "ETH", "price": "3950.1"}, ...]."""
    if not isinstance(result, list):
        raise _shape_error("a list of {coin, price} records", result)

    prices = {}
    for item in result:
        if not isinstance(item, dict) or "coin" not in item:
            continue
        price = to_float(item.get("price"))
        if price is not None:
            prices[item["coin"]] = price
    return prices


def parse_meta(result: Any) -> dict[str, float]:
    """
    metaAndAssetCtxs: universe entries and asset contexts are index-aligned.

    Accepts either `[{"universe": [...]}, [ctx, ...]]` or
    `{"universe": [...], "assetCtxs": [ctx, ...]}`. A context's price is its
    `midPx`, falling back to `markPx`.
    """
    if isinstance(result, list) and len(result) == 2 and isinstance(result[0], dict):
        universe = result[0].get("universe")
        ctxs = result[1]
    elif isinstance(result, dict):
        universe = result.get("universe")
        ctxs = result.get("assetCtxs")
    else:
        raise _shape_error("market metadata with asset contexts", result)

    if not isinstance(universe, list) or not isinstance(ctxs, list):
        raise _shape_error("universe and assetCtxs lists", result)

    prices = {}
    for asset, ctx in zip(universe, ctxs):
        if not isinstance(asset, dict) or not isinstance(ctx, dict):
            continue
        name = asset.get("name")
        price = to_float(ctx.get("midPx"))
        if price is None:
            price = to_float(ctx.get("markPx"))
        if name and price is not None:
            prices[name] = price
    return prices


def parse_exchange_rates(payload: Any) -> dict[str, float]:
    """{"data": {"rates": {"BTC": "0.0000164"}}} or {"rates": {...}}; price = 1 / rate."""
    rates = None
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, dict) and isinstance(data.get("rates"), dict):
            rates = data["rates"]
        elif isinstance(payload.get("rates"), dict):
            rates = payload["rates"]

    if rates is None:
        raise _shape_error("a rates object", payload)

    prices = {}
    for symbol, raw in rates.items():
        rate = to_float(raw)
        if not rate:
            continue
        prices[symbol.upper()] = 1 / rate
    return prices


def parse_leaderboard(result: Any) -> list[str]:
    """
    Ranked wallet identifiers, in rank order.

    Rows may be plain address strings or records carrying `ethAddress`,
    `user` or `wallet`, optionally wrapped in `{"leaderboardRows": [...]}`.
    """
    if isinstance(result, dict):
        result = result.get("leaderboardRows")
    if not isinstance(result, list):
        raise _shape_error("a list of leaderboard rows", result)

    wallets = []
    for row in result:
        if isinstance(row, str):
            wallet = row
        elif isinstance(row, dict):
            wallet = row.get("ethAddress") or row.get("user") or row.get("wallet")
        else:
            wallet = None
        if wallet and wallet not in wallets:
            wallets.append(wallet)
    return wallets


def parse_clearinghouse_positions(state: Any) -> list[WalletPosition]:
    """clearinghouseState: {"assetPositions": [{"position": {...}}, ...]}."""
    if not isinstance(state, dict):
        raise _shape_error("a clearinghouse state object", state)

    positions = []
    for entry in state.get("assetPositions") or []:
        raw = entry.get("position") if isinstance(entry, dict) else None
        if not isinstance(raw, dict):
            continue

        szi = to_float(raw.get("szi"))
        entry_px = to_float(raw.get("entryPx"))
        if not raw.get("coin") or szi is None or entry_px is None:
            logger.debug(f"Skipping incomplete position: {raw}")
            continue

        positions.append(WalletPosition(
            coin=raw["coin"],
            szi=szi,
            entry_px=entry_px,
            position_value=to_float(raw.get("positionValue")),
            liquidation_px=to_float(raw.get("liquidationPx")),
        ))
    return positions
