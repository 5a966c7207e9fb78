import logging

from catalog.db import engine
from fastapi import APIRouter, Request
from sqlalchemy import text

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", tags=["health"])
def health(request: Request):
    db_ok = False
    media_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception:
        logger.warning("Database health check failed", exc_info=True)
    try:
        media_ok = request.app.state.media_store.health_check()
    except Exception:
        logger.warning("Media store health check failed", exc_info=True)

    return {
        "status": "ok" if db_ok and media_ok else "degraded",
        "db": db_ok,
        "media_store": media_ok,
    }
