from datetime import datetime, timezone
from fastapi import APIRouter, Request
from wallet_balance.config import SERVICE_NAME

router = APIRouter()


@router.get("/api/health")
async def get_health(request: Request):
    config = request.app.state.config
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "apiKeyConfigured": config.api_key_configured,
        "secretKeyConfigured": config.secret_key_configured,
    }
