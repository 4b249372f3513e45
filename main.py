"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from infrastructure.config import Settings, get_logger, get_settings, setup_logger
from infrastructure.database import init_db, close_db
from presentation.api.v1.dependencies import get_background_notifier
from presentation.api.v1.endpoints import applications, health
from presentation.api.v1.error_handlers import register_error_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Set up logging and the schema; on shutdown flush notifications and close the pool."""
    settings: Settings = app.state.settings
    setup_logger(level=settings.log_level, log_format=settings.log_format, environment=settings.environment)
    logger = get_logger("lifespan")

    logger.info(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    await init_db()

    yield

    notifier = get_background_notifier()
    if notifier.pending:
        logger.info(f"Waiting for {notifier.pending} notification deliveries")
    await notifier.drain()
    get_background_notifier.cache_clear()
    await close_db()
    logger.info("👋 Shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Assemble the API: middleware, error handlers and v1 routers."""
    settings = settings or get_settings()

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    application.state.settings = settings

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(application)

    application.include_router(health.router, prefix=settings.api_v1_prefix)
    application.include_router(applications.router, prefix=settings.api_v1_prefix)

    @application.get("/")
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
        }

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().debug,
    )
