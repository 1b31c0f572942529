"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import close_database_connections, get_session
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings, get_settings
from infrastructure.version import __version__
from wordpress.presentation import routes as wordpress_routes


@asynccontextmanager
async def wphub_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    configure_logging(debug=get_settings().debug)

    yield

    await close_database_connections()


app = FastAPI(
    title=get_settings().app_name,
    description="WordPress action queue and conflict tracking for managed client sites",
    version=__version__,
    lifespan=wphub_lifespan,
)

app.include_router(wordpress_routes.router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> dict:
    """Check database connection health."""
    settings = get_database_settings()
    try:
        await session.execute(text("SELECT 1"))
        return {"status": "ok", "database": settings.database}
    except (SQLAlchemyError, OSError) as e:
        DefaultConnectionProbe().connection_failed(
            host=settings.host, database=settings.database, error=e
        )
        return {
            "status": "error",
            "database": settings.database,
            "error": str(e),
        }
