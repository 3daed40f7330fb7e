# tests/unit/test_strategies.py
from unittest.mock import MagicMock

import pytest

from hlproxy.aggregator import (
    FailurePolicy, MarketDefinition, PositionSource, PriceStrategy, ProxySettings
)
from hlproxy.utils import Config


def test_defaults():
    settings = ProxySettings()
    assert settings.price_strategy is PriceStrategy.SNAPSHOT
    assert settings.position_source is PositionSource.MOCK
    assert settings.failure_policy is FailurePolicy.SURFACE
    assert [m.asset for m in settings.markets] == ["ETH", "BTC"]


def test_strings_are_normalized():
    settings = ProxySettings(
        price_strategy="All-Mids",
        position_source="batch_clearinghouse",
        failure_policy="DEGRADE",
        tracked_wallets=["0x1"],
    )
    assert settings.price_strategy is PriceStrategy.ALL_MIDS
    assert settings.position_source is PositionSource.BATCH_CLEARINGHOUSE
    assert settings.failure_policy is FailurePolicy.DEGRADE
    assert settings.tracked_wallets == ("0x1",)


def test_invalid_strategy_rejected():
    with pytest.raises(ValueError) as exc:
        ProxySettings(price_strategy="orderbook")
    assert "snapshot" in str(exc.value)


def test_market_definitions_from_dicts():
    settings = ProxySettings(markets=[{
        "market_id": "SOL-PREDICT",
        "title": "SOL > $200",
        "asset": "SOL",
        "odds_yes": 0.4,
        "odds_no": 0.6,
        "fallback_price": 160,
    }])
    assert settings.markets == (MarketDefinition("SOL-PREDICT", "SOL > $200", "SOL", 0.4, 0.6, 160.0),)


def test_from_config_with_overrides():
    config = MagicMock(spec=Config)
    config.price_strategy = "meta"
    config.position_source = "leaderboard"
    config.failure_policy = "surface"
    config.rpc_url = "https://hl.test/info"
    config.exchange_rates_url = "https://rates.test"
    config.upstream_timeout = 7.0
    config.details_max_chars = 50
    config.tracked_wallets = ["0x1", "0x2"]
    config.tracked_symbols = ["BTC"]
    config.leaderboard_limit = 10
    config.markets = []

    settings = ProxySettings.from_config(config, failure_policy="degrade", timeout=None)

    assert settings.price_strategy is PriceStrategy.META
    assert settings.position_source is PositionSource.LEADERBOARD
    assert settings.failure_policy is FailurePolicy.DEGRADE
    assert settings.timeout == 7.0
    assert settings.tracked_wallets == ("0x1", "0x2")
    assert len(settings.markets) == 2
