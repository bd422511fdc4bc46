import logging
from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from wallet_balance.config import Config
from wallet_balance.portfolio.exchanges.binance import BinanceClient
from wallet_balance.portfolio.valuation import build_valuation

logger = logging.getLogger(__name__)

balance_router = APIRouter()
orders_router = APIRouter()
fees_router = APIRouter()


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_client(request: Request) -> BinanceClient:
    return request.app.state.binance


@balance_router.get("/api/wallet/balance")
async def get_wallet_balance(
    config: Config = Depends(get_config),
    client: BinanceClient = Depends(get_client),
):
    logger.info("Fetching wallet balance...")
    client.require_credentials()

    prices = await client.get_prices()
    logger.info("Fetching account information...")
    account = await client.get_account()
    logger.info("Account data received")

    valuation = build_valuation(account.non_zero_balances(), prices, config.QUOTE_CURRENCY)
    if valuation.unpriced:
        logger.info(f"No {config.QUOTE_CURRENCY} price for: {', '.join(valuation.unpriced)}")

    return {
        **valuation.to_dict(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "exchangeTimestamp": account.update_time,
        "dayChangePercent": 0,
        "permissions": account.permissions,
        "canTrade": account.can_trade,
        "canWithdraw": account.can_withdraw,
        "canDeposit": account.can_deposit,
    }


@orders_router.get("/api/wallet/orders")
async def get_wallet_orders(
    symbol: Optional[str] = Query(default=None, min_length=1, max_length=20),
    client: BinanceClient = Depends(get_client),
):
    orders = await client.get_open_orders(symbol.upper() if symbol else None)
    return {
        "orders": orders,
        "count": len(orders),
    }


@fees_router.get("/api/wallet/fees")
async def get_wallet_fees(client: BinanceClient = Depends(get_client)):
    return await client.get_fees()
