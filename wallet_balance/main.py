import logging
from typing import Optional
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from wallet_balance.config import SERVICE_NAME, Config
from wallet_balance.errors import WalletError
from wallet_balance.portfolio.exchanges.binance import BinanceClient
from wallet_balance.routes import config as config_routes, dashboard, health, wallet

logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None, client: Optional[BinanceClient] = None) -> FastAPI:
    if config is None:
        load_dotenv()
        config = Config.from_env()
    if client is None:
        client = BinanceClient(config)

    app = FastAPI(
        title=SERVICE_NAME,
        description="Binance spot wallet valuation and dashboard",
        version="1.0.0",
    )
    app.state.config = config
    app.state.binance = client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    endpoints = [
        "GET /api/health - Health check",
        "GET /api/config - Effective configuration",
        "GET /api/wallet/balance - Get wallet balance",
    ]

    app.include_router(health.router, tags=["Health"])
    app.include_router(config_routes.router, tags=["Config"])
    app.include_router(wallet.balance_router, tags=["Wallet"])
    if config.EXPOSE_ORDERS:
        app.include_router(wallet.orders_router, tags=["Wallet"])
        endpoints.append("GET /api/wallet/orders - Get open orders")
    if config.EXPOSE_FEES:
        app.include_router(wallet.fees_router, tags=["Wallet"])
        endpoints.append("GET /api/wallet/fees - Get trading fees")
    app.include_router(dashboard.router, tags=["Dashboard"])

    @app.exception_handler(WalletError)
    async def wallet_error_handler(request: Request, exc: WalletError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Server error on {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/api")
    async def root():
        return {
            "message": f"{SERVICE_NAME} is running!",
            "endpoints": endpoints,
        }

    return app


def log_startup(config: Config):
    logger.info(f"{SERVICE_NAME} starting on port {config.PORT}")
    logger.info(f"API Key configured: {'Yes' if config.api_key_configured else 'No'}")
    logger.info(f"Secret Key configured: {'Yes' if config.secret_key_configured else 'No'}")
    logger.info(f"Quote currency: {config.QUOTE_CURRENCY}")


_app: Optional[FastAPI] = None


def __getattr__(name: str):
    # built on first access so `uvicorn wallet_balance.main:app` still works
    global _app
    if name == "app":
        if _app is None:
            _app = create_app()
        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
