from wallet_balance.models.balance import AssetBalance, AccountSnapshot
from wallet_balance.models.valuation import AssetValuation, ValuationResult

__all__ = ["AssetBalance", "AccountSnapshot", "AssetValuation", "ValuationResult"]
