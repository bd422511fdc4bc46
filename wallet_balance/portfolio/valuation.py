"""Portfolio valuation in a single quote currency.

Every asset is converted with one of three rules: the quote currency itself
counts at face value, a pegged stablecoin counts 1:1, and anything else is
multiplied by the ``<ASSET><QUOTE>`` price. Assets with no price are worth
zero here; ``unpriced_assets`` reports which ones those were.
"""
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

from wallet_balance.models import AssetBalance, AssetValuation, ValuationResult
from wallet_balance.models.balance import to_decimal

Price = Union[Decimal, str, float, int]
PriceTable = Mapping[str, Price]

PEGGED_ASSETS: Dict[str, FrozenSet[str]] = {
    "USDT": frozenset({"BUSD"}),
}

CENT = Decimal("0.01")
SATOSHI = Decimal("0.00000001")
ZERO = Decimal("0")


def is_pegged(asset: str, quote_currency: str) -> bool:
    return asset in PEGGED_ASSETS.get(quote_currency, frozenset())


def lookup_price(prices: PriceTable, asset: str, quote_currency: str) -> Optional[Decimal]:
    raw = prices.get(f"{asset}{quote_currency}")
    if raw is None:
        return None
    try:
        price = to_decimal(raw)
    except ValueError:
        return None
    if not price.is_finite() or price < 0:
        return None
    return price


def quote_value(balance: AssetBalance, prices: PriceTable, quote_currency: str) -> Decimal:
    total = balance.total
    if balance.asset == quote_currency or is_pegged(balance.asset, quote_currency):
        return total
    price = lookup_price(prices, balance.asset, quote_currency)
    if price is None:
        return ZERO
    return total * price


def valuate(balances: Iterable[AssetBalance], prices: PriceTable, quote_currency: str) -> Decimal:
    total = ZERO
    for balance in balances:
        if balance.total > 0:
            total += quote_value(balance, prices, quote_currency)
    return total


def unpriced_assets(balances: Iterable[AssetBalance], prices: PriceTable, quote_currency: str) -> List[str]:
    missing = set()
    for balance in balances:
        if balance.total <= 0:
            continue
        if balance.asset == quote_currency or is_pegged(balance.asset, quote_currency):
            continue
        if lookup_price(prices, balance.asset, quote_currency) is None:
            missing.add(balance.asset)
    return sorted(missing)


def btc_equivalent(total: Decimal, prices: PriceTable, quote_currency: str) -> Optional[str]:
    btc_price = lookup_price(prices, "BTC", quote_currency)
    if not btc_price:
        return None
    return str((total / btc_price).quantize(SATOSHI, rounding=ROUND_DOWN))


def build_valuation(balances: Iterable[AssetBalance], prices: PriceTable, quote_currency: str) -> ValuationResult:
    balances = list(balances)

    total = valuate(balances, prices, quote_currency)
    available = valuate([b.without_locked() for b in balances], prices, quote_currency)
    in_orders = total - available

    per_asset = [
        AssetValuation(
            asset=b.asset,
            free=b.free,
            locked=b.locked,
            total=b.total,
            quote_value=quote_value(b, prices, quote_currency),
        )
        for b in balances
        if b.total > 0
    ]

    return ValuationResult(
        currency=quote_currency,
        total=total.quantize(CENT, rounding=ROUND_HALF_UP),
        available=available.quantize(CENT, rounding=ROUND_HALF_UP),
        in_orders=in_orders.quantize(CENT, rounding=ROUND_HALF_UP),
        per_asset=per_asset,
        btc_equivalent=btc_equivalent(total, prices, quote_currency),
        unpriced=unpriced_assets(balances, prices, quote_currency),
    )
