import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError

from dashboard.dependencies import get_session_factory
from dashboard.schemas import HealthResponse
from dashboard.services import MetricsDashboardService
from database.engine import DatabasePersistenceError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request):
    """
    Service liveness plus a database round trip.

    An unreachable or unconfigured database reports "degraded"
    instead of failing the request.
    """
    uptime = (datetime.now(timezone.utc) - request.app.state.started_at).total_seconds()

    database = "connected"
    try:
        db = get_session_factory(request)()
        try:
            MetricsDashboardService(db).check_database()
        finally:
            db.close()
    except (HTTPException, SQLAlchemyError, DatabasePersistenceError) as e:
        logger.warning(f"Health check: database unavailable: {e}")
        database = "unavailable"

    return HealthResponse(
        status="healthy" if database == "connected" else "degraded",
        uptime_seconds=uptime,
        database=database,
    )
