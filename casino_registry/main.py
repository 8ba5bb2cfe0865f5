"""
Main FastAPI application entry point.
Configures the application, middleware, and routes.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from casino_registry.api.routes import (
    casinos,
    clients,
    health,
    interdictions,
    occurrences,
    sessions,
    taxes,
    transactions,
    users,
)
from casino_registry.core.config import settings
from casino_registry.core.errors import register_exception_handlers
from casino_registry.core.logging import get_logger, setup_logging
from casino_registry.db.session import engine, init_db
from casino_registry.services.user_service import UserService

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.
    Runs startup and shutdown logic.
    """
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")

    logger.info("Creating database tables...")
    init_db(engine)

    # Create first superuser if it doesn't exist (unless disabled)
    if not settings.DISABLE_BOOTSTRAP_USERS:
        with Session(engine) as session:
            superuser = UserService.ensure_first_superuser(session, settings)
            if superuser is not None:
                logger.info(f"Superuser created: {superuser.email}")
    else:
        logger.info("User bootstrapping disabled (DISABLE_BOOTSTRAP_USERS=true)")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    lifespan=lifespan,
)

# The refresh token is a cookie, so credentials must be allowed
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["authorization", "content-type", "accept"],
)

register_exception_handlers(app)

app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(sessions.router, prefix=settings.API_PREFIX)
app.include_router(users.router, prefix=settings.API_PREFIX)
app.include_router(casinos.router, prefix=settings.API_PREFIX)
app.include_router(clients.router, prefix=settings.API_PREFIX)
app.include_router(interdictions.router, prefix=settings.API_PREFIX)
app.include_router(occurrences.router, prefix=settings.API_PREFIX)
app.include_router(transactions.router, prefix=settings.API_PREFIX)
app.include_router(taxes.special_taxes_router, prefix=settings.API_PREFIX)
app.include_router(taxes.stamp_taxes_router, prefix=settings.API_PREFIX)
