from fastapi import APIRouter, Request

from ...core.database import check_database
from ...schemas.health import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request):
    """Liveness probe; reports database reachability without failing the request."""
    database_ok = check_database(request.app.state.engine)
    return HealthResponse(
        status="ok" if database_ok else "degraded",
        message=f"{request.app.state.settings.APP_NAME} API is running",
        database="connected" if database_ok else "disconnected",
    )
