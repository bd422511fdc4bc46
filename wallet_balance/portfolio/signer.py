import hashlib
import hmac
import time
from typing import Callable, Dict, Mapping, Optional
from urllib.parse import urlencode

from wallet_balance.errors import ConfigurationError

Clock = Callable[[], int]


def now_ms() -> int:
    return int(time.time() * 1000)


def hmac_sha256(secret: str, payload: str) -> str:
    return hmac.new(secret.encode(), payload.encode(), hashlib.sha256).hexdigest()


def sign(secret: Optional[str], params: Optional[Mapping[str, object]] = None, clock: Clock = now_ms) -> Dict[str, str]:
    """Return ``params`` plus ``timestamp`` and an HMAC-SHA256 ``signature``.

    The signature covers the url-encoded parameters in insertion order,
    timestamp included. Any ``signature`` already in ``params`` is dropped
    before signing.
    """
    if not secret:
        raise ConfigurationError("SECRET_KEY is not configured", secret_key=False)

    signed = {str(k): str(v) for k, v in (params or {}).items() if k != "signature"}
    signed["timestamp"] = str(clock())
    signed["signature"] = hmac_sha256(secret, urlencode(signed))
    return signed


def signed_query(secret: Optional[str], params: Optional[Mapping[str, object]] = None, clock: Clock = now_ms) -> str:
    # signature is hex, so this is exactly the signed payload + "&signature=..."
    return urlencode(sign(secret, params, clock))
