"""Health probe."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "upstream_configured": bool(request.app.state.settings.openai_api_key),
    }
