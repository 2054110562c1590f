"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from pengaduan.core.database import check_db_connected, get_db
from pengaduan.schemas.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, responses={500: {"model": HealthResponse}})
def get_health(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> HealthResponse | JSONResponse:
    """
    Return service health status and database connectivity.
    Used by the platform's load balancer; answers 500 when the database is unreachable.
    """
    environment = request.app.state.settings.APP_ENV
    if check_db_connected(db):
        return HealthResponse(environment=environment, database="connected")
    body = HealthResponse(
        success=False,
        status="unhealthy",
        environment=environment,
        database="disconnected",
    )
    return JSONResponse(status_code=500, content=body.model_dump())
