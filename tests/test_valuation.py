from decimal import Decimal
import pytest
from wallet_balance.models import AssetBalance
from wallet_balance.portfolio.valuation import (
    build_valuation,
    btc_equivalent,
    is_pegged,
    lookup_price,
    quote_value,
    unpriced_assets,
    valuate,
)

EPSILON = Decimal("0.01")


def bal(asset, free="0", locked="0"):
    return AssetBalance(asset=asset, free=Decimal(free), locked=Decimal(locked))


@pytest.mark.parametrize("free,locked", [("0", "0"), ("1", "0"), ("0", "2.5"), ("123.456", "0.000001")])
def test_quote_currency_counts_at_face_value(free, locked):
    assert valuate([bal("USDT", free, locked)], {}, "USDT") == Decimal(free) + Decimal(locked)


def test_pegged_asset_counts_one_to_one():
    assert valuate([bal("BUSD", "100", "0")], {}, "USDT") == Decimal("100")
    assert is_pegged("BUSD", "USDT")
    assert not is_pegged("BUSD", "EUR")


def test_pegged_asset_ignores_price_table():
    assert valuate([bal("BUSD", "100")], {"BUSDUSDT": "0.5"}, "USDT") == Decimal("100")


def test_unpriced_asset_contributes_zero():
    balances = [bal("USDT", "10"), bal("XYZ", "1000")]
    assert valuate(balances, {"BTCUSDT": "30000"}, "USDT") == Decimal("10")


def test_priced_asset_multiplies_total_by_price():
    assert valuate([bal("ETH", "1.5", "0.5")], {"ETHUSDT": "2000"}, "USDT") == Decimal("4000")


def test_price_table_accepts_decimal_float_and_str():
    prices = {"AUSDT": Decimal("2"), "BUSDT": 0.1, "CUSDT": "3"}
    balances = [bal("A", "1"), bal("B", "10"), bal("C", "1")]
    assert valuate(balances, prices, "USDT") == Decimal("6.0")


@pytest.mark.parametrize("bad", ["", "abc", "-1", "NaN", "Infinity"])
def test_unparseable_or_negative_price_counts_as_missing(bad):
    assert lookup_price({"XUSDT": bad}, "X", "USDT") is None
    assert valuate([bal("X", "1")], {"XUSDT": bad}, "USDT") == 0


def test_zero_balances_are_skipped():
    assert valuate([bal("ETH")], {"ETHUSDT": "2000"}, "USDT") == 0


def test_summation_order_does_not_matter():
    balances = [bal("BTC", "0.3"), bal("ETH", "1.1"), bal("USDT", "7.77")]
    prices = {"BTCUSDT": "30000.1", "ETHUSDT": "1999.9"}
    assert abs(valuate(balances, prices, "USDT") - valuate(list(reversed(balances)), prices, "USDT")) < EPSILON


def test_other_quote_currency():
    balances = [bal("EUR", "5"), bal("BTC", "1"), bal("USDT", "10")]
    assert valuate(balances, {"BTCEUR": "25000"}, "EUR") == Decimal("25005")
    assert unpriced_assets(balances, {"BTCEUR": "25000"}, "EUR") == ["USDT"]


def test_quote_value_uses_same_rules():
    prices = {"BTCUSDT": "30000"}
    assert quote_value(bal("USDT", "5", "1"), prices, "USDT") == Decimal("6")
    assert quote_value(bal("BUSD", "5"), prices, "USDT") == Decimal("5")
    assert quote_value(bal("BTC", "0.1"), prices, "USDT") == Decimal("3000.0")
    assert quote_value(bal("XYZ", "10"), prices, "USDT") == 0


def test_unpriced_assets_lists_only_positive_unpriced():
    balances = [bal("XYZ", "10"), bal("ABC"), bal("USDT", "1"), bal("BUSD", "1"), bal("BTC", "1"), bal("QQQ", "0", "1")]
    assert unpriced_assets(balances, {"BTCUSDT": "1"}, "USDT") == ["QQQ", "XYZ"]


def test_btc_and_usdt_scenario():
    balances = [bal("BTC", "0.5", "0.1"), bal("USDT", "100", "0")]
    result = build_valuation(balances, {"BTCUSDT": "30000"}, "USDT")

    assert result.total == Decimal("18100.00")
    assert result.available == Decimal("15100.00")
    assert result.in_orders == Decimal("3000.00")
    assert result.btc_equivalent == "0.60333333"
    assert result.unpriced == []
    assert [a.asset for a in result.per_asset] == ["BTC", "USDT"]
    assert result.per_asset[0].quote_value == Decimal("18000")


def test_unpriced_asset_scenario():
    result = build_valuation([bal("XYZ", "10")], {}, "USDT")

    assert result.total == Decimal("0.00")
    assert result.btc_equivalent is None
    assert result.unpriced == ["XYZ"]
    # kept in per-asset because its raw total is positive
    assert len(result.per_asset) == 1
    assert result.per_asset[0].asset == "XYZ"
    assert result.per_asset[0].total == Decimal("10")
    assert result.per_asset[0].quote_value == 0


def test_per_asset_drops_empty_balances():
    result = build_valuation([bal("ETH"), bal("USDT", "1")], {}, "USDT")
    assert [a.asset for a in result.per_asset] == ["USDT"]


@pytest.mark.parametrize("balances,prices", [
    ([bal("BTC", "0.123456", "0.654321"), bal("ETH", "3.3333", "1.1111")], {"BTCUSDT": "29999.99", "ETHUSDT": "1888.88"}),
    ([bal("USDT", "0.005", "0.005"), bal("BUSD", "10.004", "0.004")], {}),
    ([bal("DOGE", "12345.6789", "9876.54321")], {"DOGEUSDT": "0.0712345"}),
])
def test_available_plus_in_orders_matches_total(balances, prices):
    result = build_valuation(balances, prices, "USDT")
    assert abs(result.available + result.in_orders - result.total) <= EPSILON


def test_btc_equivalent_truncates():
    # rounding would give 0.66666667
    assert btc_equivalent(Decimal("2"), {"BTCUSDT": "3"}, "USDT") == "0.66666666"


@pytest.mark.parametrize("prices", [{}, {"BTCUSDT": "0"}, {"BTCUSDT": "junk"}])
def test_btc_equivalent_omitted_without_usable_price(prices):
    assert btc_equivalent(Decimal("100"), prices, "USDT") is None
    result = build_valuation([bal("USDT", "100")], prices, "USDT")
    assert result.btc_equivalent is None
    assert "btcEquivalent" not in result.to_dict()


def test_to_dict_shape():
    result = build_valuation([bal("BTC", "0.5", "0.1"), bal("USDT", "100")], {"BTCUSDT": "30000"}, "USDT")
    data = result.to_dict()
    assert data["total"] == 18100.0
    assert data["available"] == 15100.0
    assert data["inOrders"] == 3000.0
    assert data["currency"] == "USDT"
    assert data["btcEquivalent"] == "0.60333333"
    assert data["unpricedAssets"] == []
    assert data["perAsset"][0] == {
        "asset": "BTC",
        "free": 0.5,
        "locked": 0.1,
        "total": 0.6,
        "quoteValue": 18000.0,
    }
