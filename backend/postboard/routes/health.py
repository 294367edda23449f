"""
Postboard API: Health Check Route
==================================

What:  Liveness probe. Nothing to check beyond the process itself: storage is
       in memory, so a response means the service can take traffic.
"""

from fastapi import APIRouter

from postboard import __version__
from postboard.schemas.common import HealthResponse, utc_now_iso

HEALTH_PATH = "/_health"

router = APIRouter(tags=["Health"])


@router.get(
    HEALTH_PATH,
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=utc_now_iso(), version=__version__)
