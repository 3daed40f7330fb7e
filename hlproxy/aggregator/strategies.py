"""Strategy selection and per-deployment settings."""
from dataclasses import dataclass, field
from enum import Enum

from ..utils.config import Config, DEFAULT_RATES_URL, DEFAULT_RPC_URL


class PriceStrategy(Enum):
    """Where the price map comes from."""
    META = "meta"
    ALL_MIDS = "all_mids"
    SNAPSHOT = "snapshot"
    EXCHANGE_RATES = "exchange_rates"


class PositionSource(Enum):
    """Where open positions come from."""
    MOCK = "mock"
    BATCH_CLEARINGHOUSE = "batch_clearinghouse"
    LEADERBOARD = "leaderboard"


class FailurePolicy(Enum):
    """
    What an upstream failure does to the response.

    SURFACE returns a 502 with the upstream error. DEGRADE keeps a 200,
    substitutes fallback data and adds a `warning`.
    """
    SURFACE = "surface"
    DEGRADE = "degrade"


def _parse_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    normalized = str(value).strip().lower().replace("-", "_")
    try:
        return enum_cls(normalized)
    except ValueError:
        choices = ", ".join(e.value for e in enum_cls)
        raise ValueError(f"Invalid {enum_cls.__name__} {value!r}, expected one of: {choices}")


@dataclass(frozen=True)
class MarketDefinition:
    """A simulated prediction market quoted off one asset's price."""
    market_id: str
    title: str
    asset: str
    odds_yes: float
    odds_no: float
    fallback_price: float

    @classmethod
    def from_dict(cls, data: dict) -> "MarketDefinition":
        return cls(
            market_id=data["market_id"],
            title=data["title"],
            asset=data["asset"],
            odds_yes=float(data.get("odds_yes", 0.5)),
            odds_no=float(data.get("odds_no", 0.5)),
            fallback_price=float(data.get("fallback_price", 0.0)),
        )


DEFAULT_MARKETS = (
    MarketDefinition(
        market_id="ETH-PREDICT-24Q4",
        title="ETH Price > $4500 by Dec 31st",
        asset="ETH",
        odds_yes=0.65,
        odds_no=0.35,
        fallback_price=4000.00,
    ),
    MarketDefinition(
        market_id="BTC-PREDICT-24Q4",
        title="BTC Price > $70000 by Dec 31st",
        asset="BTC",
        odds_yes=0.55,
        odds_no=0.45,
        fallback_price=61000.00,
    ),
)


@dataclass(frozen=True)
class ProxySettings:
    """Read-only handler settings; requests never mutate them."""
    price_strategy: PriceStrategy = PriceStrategy.SNAPSHOT
    position_source: PositionSource = PositionSource.MOCK
    failure_policy: FailurePolicy = FailurePolicy.SURFACE
    rpc_url: str = DEFAULT_RPC_URL
    exchange_rates_url: str = DEFAULT_RATES_URL
    timeout: float = 10.0
    details_max_chars: int = 100
    tracked_wallets: tuple = ()
    tracked_symbols: tuple = ("USDC", "BTC", "ETH", "SOL")
    leaderboard_limit: int = 5
    markets: tuple = field(default=DEFAULT_MARKETS)

    def __post_init__(self):
        # Accept plain strings so config values and CLI flags pass straight through
        object.__setattr__(self, "price_strategy", _parse_enum(PriceStrategy, self.price_strategy))
        object.__setattr__(self, "position_source", _parse_enum(PositionSource, self.position_source))
        object.__setattr__(self, "failure_policy", _parse_enum(FailurePolicy, self.failure_policy))
        object.__setattr__(self, "tracked_wallets", tuple(self.tracked_wallets))
        object.__setattr__(self, "tracked_symbols", tuple(self.tracked_symbols))
        object.__setattr__(self, "markets", tuple(
            m if isinstance(m, MarketDefinition) else MarketDefinition.from_dict(m)
            for m in self.markets
        ))

    @classmethod
    def from_config(cls, config: Config, **overrides) -> "ProxySettings":
        """Build settings from the app config, with optional explicit overrides."""
        values = dict(
            price_strategy=config.price_strategy,
            position_source=config.position_source,
            failure_policy=config.failure_policy,
            rpc_url=config.rpc_url,
            exchange_rates_url=config.exchange_rates_url,
            timeout=config.upstream_timeout,
            details_max_chars=config.details_max_chars,
            tracked_wallets=config.tracked_wallets,
            tracked_symbols=config.tracked_symbols,
            leaderboard_limit=config.leaderboard_limit,
            markets=config.markets or DEFAULT_MARKETS,
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
