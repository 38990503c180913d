"""Health check endpoint with database connectivity check."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app import __version__
from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.models import User
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring; no authentication required.
    """
    if not check_db_connected(db):
        return HealthResponse(
            version=__version__,
            environment=settings.APP_ENV,
            database="disconnected",
        )
    return HealthResponse(
        version=__version__,
        environment=settings.APP_ENV,
        database="connected",
        user_count=db.query(User).count(),
    )
