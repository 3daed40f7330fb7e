# tests/unit/test_parsers.py
import pytest

from hlproxy.data import UpstreamError
from hlproxy.data.parsers import (
    parse_all_mids,
    parse_clearinghouse_positions,
    parse_exchange_rates,
    parse_leaderboard,
    parse_meta,
    parse_snapshot,
)

from conftest import position


def test_all_mids_parses_numeric_strings():
    prices = parse_all_mids({"BTC": "61000.5", "ETH": "3950", "BAD": "n/a"})
    assert prices == {"BTC": 61000.5, "ETH": 3950.0}


def test_all_mids_rejects_non_object():
    with pytest.raises(UpstreamError) as exc:
        parse_all_mids(["BTC", "61000"])
    assert "list" in exc.value.details


def test_snapshot_parses_coin_price_records():
    prices = parse_snapshot([
        {"coin": "ETH", "price": "3950.1"},
        {"coin": "SOL", "price": 160},
        {"price": "1.0"},
        {"coin": "USDC", "price": None},
    ])
    assert prices == {"ETH": 3950.1, "SOL": 160.0}


def test_snapshot_rejects_object():
    with pytest.raises(UpstreamError):
        parse_snapshot({"ETH": "3950"})


META_LIST = [
    {"universe": [{"name": "BTC"}, {"name": "ETH"}, {"name": "SOL"}]},
    [
        {"midPx": "61000.0", "markPx": "60990.0"},
        {"midPx": None, "markPx": "3950.5"},
        {"markPx": "160"},
    ],
]


def test_meta_list_shape_looks_up_by_name():
    assert parse_meta(META_LIST) == {"BTC": 61000.0, "ETH": 3950.5, "SOL": 160.0}


def test_meta_object_shape():
    result = {"universe": META_LIST[0]["universe"], "assetCtxs": META_LIST[1]}
    assert parse_meta(result)["BTC"] == 61000.0


def test_meta_rejects_missing_contexts():
    with pytest.raises(UpstreamError):
        parse_meta({"universe": [{"name": "BTC"}]})


def test_exchange_rates_inverted():
    prices = parse_exchange_rates({"data": {"currency": "USD", "rates": {"BTC": "0.00002", "eth": "0.00025", "XYZ": "0"}}})
    assert prices["BTC"] == pytest.approx(50000.0)
    assert prices["ETH"] == pytest.approx(4000.0)
    assert "XYZ" not in prices


def test_exchange_rates_flat_shape():
    assert parse_exchange_rates({"rates": {"SOL": 0.005}})["SOL"] == pytest.approx(200.0)


def test_exchange_rates_rejects_missing_rates():
    with pytest.raises(UpstreamError):
        parse_exchange_rates({"data": {}})


def test_leaderboard_accepts_strings_and_records():
    wallets = parse_leaderboard({"leaderboardRows": [
        {"ethAddress": "0xaaa", "accountValue": "1"},
        "0xbbb",
        {"user": "0xccc"},
        {"ethAddress": "0xaaa"},
        {"displayName": "nobody"},
    ]})
    assert wallets == ["0xaaa", "0xbbb", "0xccc"]


def test_leaderboard_rejects_scalar():
    with pytest.raises(UpstreamError):
        parse_leaderboard("0xaaa")


def test_clearinghouse_positions_decoded():
    state = {"assetPositions": [
        position("BTC", "0.5", "60000", "30500", "50000"),
        position("SOL", "-10", "150"),
        {"position": {"coin": "ETH", "szi": "1"}},
        {"type": "oneWay"},
    ]}
    positions = parse_clearinghouse_positions(state)

    assert [p.coin for p in positions] == ["BTC", "SOL"]
    assert positions[0].szi == 0.5
    assert positions[0].position_value == 30500.0
    assert positions[0].liquidation_px == 50000.0
    assert positions[1].szi == -10.0
    assert positions[1].liquidation_px is None


def test_clearinghouse_empty_state():
    assert parse_clearinghouse_positions({"assetPositions": []}) == []
    assert parse_clearinghouse_positions({}) == []


def test_clearinghouse_rejects_non_object():
    with pytest.raises(UpstreamError):
        parse_clearinghouse_positions(None)
