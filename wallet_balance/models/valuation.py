from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class AssetValuation:
    asset: str
    free: Decimal
    locked: Decimal
    total: Decimal
    quote_value: Decimal

    def to_dict(self) -> dict:
        return {
            "asset": self.asset,
            "free": float(self.free),
            "locked": float(self.locked),
            "total": float(self.total),
            "quoteValue": float(self.quote_value),
        }


@dataclass
class ValuationResult:
    currency: str
    total: Decimal
    available: Decimal
    in_orders: Decimal
    per_asset: List[AssetValuation] = field(default_factory=list)
    btc_equivalent: Optional[str] = None
    unpriced: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = {
            "total": float(self.total),
            "available": float(self.available),
            "inOrders": float(self.in_orders),
            "currency": self.currency,
            "perAsset": [a.to_dict() for a in self.per_asset],
            "unpricedAssets": list(self.unpriced),
        }
        if self.btc_equivalent is not None:
            data["btcEquivalent"] = self.btc_equivalent
        return data
