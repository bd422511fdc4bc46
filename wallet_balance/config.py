import os
from dataclasses import dataclass
from typing import Mapping, Optional

SERVICE_NAME = "Binance Wallet Balance API"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    BINANCE_API_KEY: str = ""
    BINANCE_SECRET_KEY: str = ""
    BINANCE_BASE_URL: str = "https://api.binance.com/api/v3"

    QUOTE_CURRENCY: str = "USDT"

    HTTP_TIMEOUT_SECONDS: float = 10.0
    RECV_WINDOW_MS: Optional[int] = None

    EXPOSE_ORDERS: bool = True
    EXPOSE_FEES: bool = True

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        env = os.environ if environ is None else environ
        recv_window = env.get("RECV_WINDOW_MS", "")
        return cls(
            BINANCE_API_KEY=env.get("BINANCE_API_KEY", ""),
            BINANCE_SECRET_KEY=env.get("BINANCE_SECRET_KEY", env.get("BINANCE_API_SECRET", "")),
            BINANCE_BASE_URL=env.get("BINANCE_BASE_URL", cls.BINANCE_BASE_URL).rstrip("/"),
            QUOTE_CURRENCY=env.get("QUOTE_CURRENCY", cls.QUOTE_CURRENCY).upper(),
            HTTP_TIMEOUT_SECONDS=float(env.get("HTTP_TIMEOUT_SECONDS", "10")),
            RECV_WINDOW_MS=int(recv_window) if recv_window else None,
            EXPOSE_ORDERS=_env_bool(env.get("EXPOSE_ORDERS", "true")),
            EXPOSE_FEES=_env_bool(env.get("EXPOSE_FEES", "true")),
            HOST=env.get("HOST", cls.HOST),
            PORT=int(env.get("PORT", "3000")),
            LOG_LEVEL=env.get("LOG_LEVEL", cls.LOG_LEVEL).upper(),
        )

    @property
    def api_key_configured(self) -> bool:
        return bool(self.BINANCE_API_KEY)

    @property
    def secret_key_configured(self) -> bool:
        return bool(self.BINANCE_SECRET_KEY)

    def has_credentials(self) -> bool:
        return self.api_key_configured and self.secret_key_configured

    def to_dict(self) -> dict:
        return {
            "binance_base_url": self.BINANCE_BASE_URL,
            "quote_currency": self.QUOTE_CURRENCY,
            "http_timeout_seconds": self.HTTP_TIMEOUT_SECONDS,
            "recv_window_ms": self.RECV_WINDOW_MS,
            "expose_orders": self.EXPOSE_ORDERS,
            "expose_fees": self.EXPOSE_FEES,
            "api_key_configured": self.api_key_configured,
            "secret_key_configured": self.secret_key_configured,
        }
