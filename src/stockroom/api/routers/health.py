"""Health check router

Endpoints:
- GET /health: Service status, "degraded" when the database does not answer

The check is a single SELECT 1 so monitors can poll it cheaply.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ...config import settings
from ...service import Database
from ..contracts import HealthResponse
from ..deps import get_database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(db: Annotated[Database, Depends(get_database)]) -> HealthResponse:
    """API health check"""
    try:
        async with db.session() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Health check: database unavailable (%s)", exc)
        return HealthResponse(status="degraded", service=settings.app_name)
    return HealthResponse(status="healthy", service=settings.app_name)
