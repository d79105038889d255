"""Health check endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, get_llm_client, get_mailer
from app.config import settings
from app.invitations.llm import LLMClient
from app.mail.sender import InvitationMailer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@router.get("/health/detailed")
async def detailed_health_check(
    db: AsyncSession = Depends(get_db),
    llm: LLMClient | None = Depends(get_llm_client),
    mailer: InvitationMailer = Depends(get_mailer),
) -> JSONResponse:
    """Check the database and report which integrations are configured."""
    try:
        await db.execute(text("SELECT 1"))
        database = {"status": "connected"}
    except SQLAlchemyError as exc:
        logger.error("Health check database ping failed: %s", exc)
        database = {"status": "error", "error": str(exc)}

    healthy = database["status"] == "connected"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": database,
            "llm": {"configured": llm is not None},
            "smtp": {"configured": mailer.is_configured},
        },
    )
