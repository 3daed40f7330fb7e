from .models import Market, Position, HandlerResponse, CORS_HEADERS
from .strategies import (
    PriceStrategy, PositionSource, FailurePolicy, MarketDefinition, ProxySettings
)
from .handler import ProxyHandler

__all__ = [
    "Market",
    "Position",
    "HandlerResponse",
    "CORS_HEADERS",
    "PriceStrategy",
    "PositionSource",
    "FailurePolicy",
    "MarketDefinition",
    "ProxySettings",
    "ProxyHandler",
]
