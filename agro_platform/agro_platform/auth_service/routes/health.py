"""
Health check endpoints
"""
from fastapi import APIRouter, HTTPException, Request, status
from datetime import datetime, timezone
from typing import Dict, Any

from ..db import check_db_connection

router = APIRouter(tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
def root(request: Request) -> Dict[str, Any]:
    """Service banner."""
    return {
        "mensaje": f"{request.app.title} corriendo",
        "version": request.app.version,
    }


@router.get("/health", status_code=status.HTTP_200_OK)
def health_check(request: Request) -> Dict[str, Any]:
    """
    Liveness check including database connectivity.

    Raises:
        HTTPException: 503 if the database does not answer
    """
    db_connected = check_db_connection(request.app.state.engine)
    response = {
        "status": "healthy" if db_connected else "unhealthy",
        "database": "connected" if db_connected else "disconnected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if not db_connected:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=response)
    return response
