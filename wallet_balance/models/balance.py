from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = repr(value)
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Not a decimal amount: {value!r}")


@dataclass(frozen=True)
class AssetBalance:
    asset: str
    free: Decimal = Decimal("0")
    locked: Decimal = Decimal("0")

    def __post_init__(self):
        if not self.asset:
            raise ValueError("asset must be a non-empty ticker")
        free = to_decimal(self.free)
        locked = to_decimal(self.locked)
        if not free.is_finite() or not locked.is_finite():
            raise ValueError(f"{self.asset}: balance amounts must be finite")
        if free < 0 or locked < 0:
            raise ValueError(f"{self.asset}: balance amounts must be non-negative")
        object.__setattr__(self, "free", free)
        object.__setattr__(self, "locked", locked)

    @property
    def total(self) -> Decimal:
        return self.free + self.locked

    def without_locked(self) -> "AssetBalance":
        return AssetBalance(asset=self.asset, free=self.free, locked=Decimal("0"))

    @classmethod
    def from_payload(cls, data: dict) -> "AssetBalance":
        return cls(
            asset=data["asset"],
            free=to_decimal(data.get("free", "0")),
            locked=to_decimal(data.get("locked", "0")),
        )


@dataclass
class AccountSnapshot:
    """Parsed response of the signed account endpoint."""

    balances: List[AssetBalance] = field(default_factory=list)
    can_trade: bool = False
    can_withdraw: bool = False
    can_deposit: bool = False
    permissions: List[str] = field(default_factory=list)
    update_time: Optional[int] = None
    maker_commission: int = 0
    taker_commission: int = 0
    buyer_commission: int = 0
    seller_commission: int = 0

    @classmethod
    def from_payload(cls, data: dict) -> "AccountSnapshot":
        return cls(
            balances=[AssetBalance.from_payload(b) for b in data.get("balances", [])],
            can_trade=bool(data.get("canTrade", False)),
            can_withdraw=bool(data.get("canWithdraw", False)),
            can_deposit=bool(data.get("canDeposit", False)),
            permissions=list(data.get("permissions", [])),
            update_time=data.get("updateTime"),
            maker_commission=int(data.get("makerCommission", 0)),
            taker_commission=int(data.get("takerCommission", 0)),
            buyer_commission=int(data.get("buyerCommission", 0)),
            seller_commission=int(data.get("sellerCommission", 0)),
        )

    def non_zero_balances(self) -> List[AssetBalance]:
        return [b for b in self.balances if b.free > 0 or b.locked > 0]

    def fees(self) -> dict:
        # raw commissions are in 1/10000 units
        return {
            "makerCommission": self.maker_commission / 10000,
            "takerCommission": self.taker_commission / 10000,
            "buyerCommission": self.buyer_commission / 10000,
            "sellerCommission": self.seller_commission / 10000,
        }
