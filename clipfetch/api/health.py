from fastapi import APIRouter

from clipfetch.config.settings import config
from clipfetch.core.state import state
from clipfetch.i18n import i18n

router = APIRouter()


@router.get("/")
async def root():
    """Root endpoint"""
    return {
        "status": i18n.get("response.status_running"),
        "service": config.api.title,
        "version": config.api.version,
        "ytdlp_version": state.ytdlp_version,
    }


@router.get("/health")
async def health_check():
    """Lightweight health check"""
    return {"status": i18n.get("health.status")}
