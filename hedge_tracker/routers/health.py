import logging
import sqlite3

from fastapi import APIRouter, Request

from hedge_tracker.db.dal import Database

router = APIRouter(tags=["health"])
logger = logging.getLogger("hedge_tracker.health")


@router.get("/health")
def health_check(request: Request):
    """Liveness plus a trivial database round-trip."""
    health = {"status": "healthy", "database": "connected"}
    try:
        Database(request.app.state.settings.db_path).ping()
    except sqlite3.Error as e:
        logger.error("health check database error: %s", e)
        health["status"] = "degraded"
        health["database"] = f"error: {e}"
    return health
