from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/api/config")
async def get_config(request: Request):
    return request.app.state.config.to_dict()
