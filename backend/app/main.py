"""WeddingInvites AI — FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import models  # noqa: F401  (registers tables on Base.metadata)
from app.api.v1.couples import router as couples_router
from app.api.v1.emails import router as emails_router
from app.api.v1.guests import router as guests_router
from app.api.v1.health import router as health_router
from app.api.v1.invitations import router as invitations_router
from app.config import settings
from app.invitations.cache import InvitationCache
from app.invitations.llm import build_llm_client
from app.mail.sender import InvitationMailer

# Configure root logger so all app.* loggers output to stderr.
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    # Startup: make sure the schema exists
    from app.database import create_all, engine

    await create_all()
    yield
    # Shutdown: dispose engine connections
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Personalized wedding invitations drafted by AI and sent by e-mail.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Process-wide collaborators, injected into routers via app.api.deps
app.state.invitation_cache = InvitationCache(ttl_seconds=settings.invitation_cache_ttl_seconds)
app.state.llm_client = build_llm_client(settings)
app.state.mailer = InvitationMailer.from_settings(settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(health_router)
app.include_router(couples_router)
app.include_router(guests_router)
app.include_router(invitations_router)
app.include_router(emails_router)


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
