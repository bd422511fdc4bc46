import httpx
import logging
from typing import Any, Dict, List, Optional
from wallet_balance.config import Config
from wallet_balance.errors import (
    ConfigurationError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamPermissionError,
    UpstreamRequestError,
    UpstreamTimeout,
    UpstreamUnavailable,
)
from wallet_balance.models import AccountSnapshot
from wallet_balance.portfolio.signer import Clock, now_ms, signed_query

logger = logging.getLogger(__name__)


class BinanceClient:
    API_KEY_HEADER = "X-MBX-APIKEY"

    def __init__(
        self,
        config: Config,
        clock: Clock = now_ms,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.base_url = config.BINANCE_BASE_URL
        self.clock = clock
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.HTTP_TIMEOUT_SECONDS,
            transport=self._transport,
        )

    def _get_headers(self) -> dict:
        return {self.API_KEY_HEADER: self.config.BINANCE_API_KEY}

    def require_credentials(self):
        if not self.config.has_credentials():
            raise ConfigurationError(
                api_key=self.config.api_key_configured,
                secret_key=self.config.secret_key_configured,
            )

    def _raise_for_response(self, response: httpx.Response, failure: str):
        if response.status_code == 401:
            logger.error("Authentication failed - check API key and signature")
            raise UpstreamAuthError()
        if response.status_code == 403:
            logger.error("API key lacks required permissions")
            raise UpstreamPermissionError()

        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and data.get("msg"):
            logger.error(f"Binance error {data.get('code')}: {data['msg']}")
            raise UpstreamRequestError(data["msg"])

        logger.error(f"Binance HTTP {response.status_code}: {response.text[:200]}")
        raise UpstreamUnavailable(failure)

    async def _get(self, path: str, failure: str, params: Optional[dict] = None, signed: bool = False) -> Any:
        url = f"{self.base_url}{path}"
        headers = {}
        if signed:
            self.require_credentials()
            params = dict(params or {})
            if self.config.RECV_WINDOW_MS:
                params["recvWindow"] = self.config.RECV_WINDOW_MS
            url = f"{url}?{signed_query(self.config.BINANCE_SECRET_KEY, params, self.clock)}"
            headers = self._get_headers()
            params = None

        try:
            async with self._client() as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.TimeoutException:
            logger.error(f"Binance request timeout ({self.config.HTTP_TIMEOUT_SECONDS}s): {path}")
            raise UpstreamTimeout()
        except httpx.HTTPError as e:
            logger.error(f"Binance connection error on {path}: {type(e).__name__}")
            raise UpstreamUnavailable(failure)

        if response.status_code != 200:
            self._raise_for_response(response, failure)

        try:
            return response.json()
        except ValueError:
            logger.error(f"Binance returned non-JSON body for {path}")
            raise UpstreamUnavailable(failure)

    async def get_prices(self) -> Dict[str, str]:
        """Latest price of every trading pair, keyed by symbol.

        Failures are logged and yield an empty table, so the valuation
        degrades to quote-currency and pegged holdings only.
        """
        logger.info("Fetching current prices from Binance...")
        try:
            data = await self._get("/ticker/price", "Failed to fetch prices from Binance")
            prices = {t["symbol"]: t["price"] for t in data}
        except UpstreamError as e:
            logger.warning(f"Error fetching prices: {e}")
            return {}
        except (KeyError, TypeError) as e:
            logger.warning(f"Unexpected price list shape: {e!r}")
            return {}
        logger.info(f"Fetched {len(prices)} prices")
        return prices

    async def get_account(self) -> AccountSnapshot:
        failure = "Failed to fetch wallet balance from Binance"
        data = await self._get("/account", failure, signed=True)
        try:
            return AccountSnapshot.from_payload(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Unrecognized account payload: {e!r}")
            raise UpstreamUnavailable(failure)

    async def get_open_orders(self, symbol: Optional[str] = None) -> List[dict]:
        failure = "Failed to fetch open orders"
        params = {"symbol": symbol} if symbol else {}
        data = await self._get("/openOrders", failure, params=params, signed=True)
        if not isinstance(data, list):
            logger.error("Unrecognized open orders payload")
            raise UpstreamUnavailable(failure)
        return data

    async def get_fees(self) -> dict:
        failure = "Failed to fetch trading fees"
        data = await self._get("/account", failure, signed=True)
        try:
            return AccountSnapshot.from_payload(data).fees()
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Unrecognized account payload: {e!r}")
            raise UpstreamUnavailable(failure)
