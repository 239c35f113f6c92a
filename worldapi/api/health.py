"""Liveness ping and health check with database connectivity."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from worldapi.api.deps import get_app_settings
from worldapi.core.config import Settings
from worldapi.core.database import check_db_connected, get_db
from worldapi.schemas.health import HealthResponse

router = APIRouter()


@router.get("/ping", response_class=PlainTextResponse)
def ping() -> str:
    return "pong"


@router.get("/health", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
    )
