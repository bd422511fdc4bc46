from typing import Optional


class WalletError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ConfigurationError(WalletError):
    """Binance credentials are missing."""

    message = "Binance API credentials not configured"

    def __init__(self, message: Optional[str] = None, api_key: bool = False, secret_key: bool = False):
        super().__init__(message)
        self.api_key = api_key
        self.secret_key = secret_key

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "details": {"apiKey": self.api_key, "secretKey": self.secret_key},
        }


class UpstreamError(WalletError):
    """Base for failures reported by, or while talking to, the exchange."""


class UpstreamAuthError(UpstreamError):
    status_code = 401
    message = "Invalid API key or signature"


class UpstreamPermissionError(UpstreamError):
    status_code = 403
    message = "API key does not have required permissions"


class UpstreamRequestError(UpstreamError):
    # message is the exchange's own "msg" field
    status_code = 400
    message = "Request rejected by exchange"


class UpstreamUnavailable(UpstreamError):
    status_code = 500
    message = "Exchange unavailable"


class UpstreamTimeout(UpstreamUnavailable):
    message = "Exchange request timed out"

    def to_dict(self) -> dict:
        return {"error": self.message, "retryable": True}
