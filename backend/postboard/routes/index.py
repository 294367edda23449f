"""
Postboard API: Index Route
===========================

What:  GET {API_PREFIX}/ describes the API and links its documentation.
"""

from typing import Any, Dict

from fastapi import APIRouter

from postboard import __version__
from postboard.config import settings

router = APIRouter(tags=["Index"])


@router.get("/", summary="API information")
async def index() -> Dict[str, Any]:
    prefix = settings.api_prefix
    return {
        "message": "Postboard API",
        "version": __version__,
        "documentation": f"{prefix}/docs",
        "openapi": f"{prefix}/openapi.json",
        "endpoints": {
            "users": f"{prefix}/users",
            "posts": f"{prefix}/posts",
            "login": f"{prefix}/users/auth/login",
            "health": f"{prefix}/_health",
        },
    }
