"""Value types returned to the dashboard."""
import json
from dataclasses import dataclass, field
from typing import Optional

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@dataclass(frozen=True)
class Market:
    """A simulated prediction-market quote on a live or fallback price."""
    market_id: str
    title: str
    odds_yes: float
    odds_no: float
    current_price: float
    timestamp: int  # epoch ms

    def to_dict(self) -> dict:
        return {
            "MarketID": self.market_id,
            "Title": self.title,
            "OddsYes": self.odds_yes,
            "OddsNo": self.odds_no,
            "CurrentPrice": self.current_price,
            "Timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class Position:
    """
    An open position, mocked or decoded from a wallet's clearinghouse state.

    Attributes:
        asset: Coin symbol
        side: "Long" or "Short"
        size_usd: Notional size at entry
        entry_price: Average entry price
        current_price: Latest fetched price
        liquidation_price: Forced-close price (0.0 when unknown)
        unrealized_pnl: PnL if closed at current_price
        wallet: Owning wallet, only for upstream positions
    """
    asset: str
    side: str
    size_usd: float
    entry_price: float
    current_price: float
    liquidation_price: float
    unrealized_pnl: float
    wallet: Optional[str] = None

    def to_dict(self) -> dict:
        data = {}
        if self.wallet is not None:
            data["Wallet"] = self.wallet
        data.update({
            "Asset": self.asset,
            "Side": self.side,
            "SizeUSD": self.size_usd,
            "EntryPrice": self.entry_price,
            "CurrentPrice": self.current_price,
            "LiquidationPrice": self.liquidation_price,
            "UnrealizedPnL": self.unrealized_pnl,
        })
        return data


@dataclass
class HandlerResponse:
    """Status, headers and optional JSON body, independent of the HTTP runtime."""
    status: int
    body: Optional[dict] = None
    headers: dict = field(default_factory=lambda: dict(CORS_HEADERS))

    def __post_init__(self):
        if self.body is not None:
            self.headers.setdefault("Content-Type", "application/json")

    def encoded_body(self) -> bytes:
        if self.body is None:
            return b""
        return json.dumps(self.body).encode()


def success_payload(markets: list[Market], positions: list[Position], warning: Optional[str] = None) -> dict:
    payload = {
        "markets": [m.to_dict() for m in markets],
        "openPositions": [p.to_dict() for p in positions],
    }
    if warning:
        payload["warning"] = warning
    return payload
