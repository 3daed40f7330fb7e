"""Unrealized PnL math."""
from typing import Optional

LONG = "Long"
SHORT = "Short"

ZERO_SIZE_EPSILON = 0.001


def side_for_size(szi: float) -> str:
    """Signed size to side: positive is Long, otherwise Short."""
    return LONG if szi > 0 else SHORT


def quantity_from_notional(size_usd: float, entry_price: float) -> float:
    """Quantity implied by a USD notional at the entry price."""
    if entry_price == 0:
        return 0.0
    return size_usd / entry_price


def unrealized_pnl(side: str, entry_price: float, current_price: float, quantity: float) -> float:
    """
    PnL of closing `quantity` at `current_price`.

    Long:  (current - entry) * quantity
    Short: (entry - current) * quantity
    """
    quantity = abs(quantity)
    if side == LONG:
        return (current_price - entry_price) * quantity
    if side == SHORT:
        return (entry_price - current_price) * quantity
    raise ValueError(f"Unknown position side: {side!r}")


def is_dust(quantity: Optional[float]) -> bool:
    """True for sizes too small to show as an open position."""
    return quantity is None or abs(quantity) < ZERO_SIZE_EPSILON


def round_usd(value: float) -> float:
    return round(value, 2)
