"""Fixed mock positions and fallback prices for the simulated dashboard."""
from .models import Position
from .pnl import LONG, SHORT, is_dust, quantity_from_notional, round_usd, unrealized_pnl

# Used when no live price is available
FALLBACK_PRICES = {
    "BTC": 61000.00,
    "ETH": 3950.00,
    "SOL": 160.00,
}

# (asset, side, size_usd, entry_price, liquidation_price)
MOCK_POSITIONS = (
    ("BTC", LONG, 5000.00, 58500.25, 52000.00),
    ("ETH", LONG, 1250.00, 3850.50, 3600.00),
    ("SOL", SHORT, 500.00, 155.00, 170.00),
)


def mock_positions(prices: dict[str, float]) -> list[Position]:
    """
    Build the mock positions priced off `prices`.

    Assets missing from `prices` keep their fallback price.
    """
    positions = []
    for asset, side, size_usd, entry_price, liquidation_price in MOCK_POSITIONS:
        current_price = prices.get(asset) or FALLBACK_PRICES[asset]
        quantity = quantity_from_notional(size_usd, entry_price)
        if is_dust(quantity):
            continue
        positions.append(Position(
            asset=asset,
            side=side,
            size_usd=size_usd,
            entry_price=entry_price,
            current_price=current_price,
            liquidation_price=liquidation_price,
            unrealized_pnl=round_usd(unrealized_pnl(side, entry_price, current_price, quantity)),
        ))
    return positions
