"""
Daily Plan Engine - Main Application Entry Point
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dayplan import __version__
from dayplan.core.config import get_settings
from dayplan.core.logger import setup_logger

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    settings = get_settings()
    logger.info(f"Starting Daily Plan Engine in {settings.ENVIRONMENT} mode...")

    if settings.is_local:
        from dayplan.infrastructure.local.database import init_db

        await init_db()

    yield

    logger.info("Shutting down Daily Plan Engine...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Daily Plan Engine",
        description="Daily scheduling, recurrence and progress engine",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from dayplan.api import activities, goals, habits, plans, stats

    app.include_router(plans.router, prefix="/api/plans", tags=["plans"])
    app.include_router(goals.router, prefix="/api/goals", tags=["goals"])
    app.include_router(habits.router, prefix="/api/habits", tags=["habits"])
    app.include_router(activities.router, prefix="/api/activities", tags=["activities"])
    app.include_router(stats.router, prefix="/api/stats", tags=["stats"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": __version__,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
