"""
FastAPI application entry point for the DeckForge API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deckforge import __version__
from deckforge.api.errors import setup_error_handlers
from deckforge.api.routers import router as session_router
from deckforge.infra.config.logging_config import get_logger, setup_logging
from deckforge.infra.config.settings import get_settings
from deckforge.infra.middleware.request_context import RequestContextMiddleware

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger = get_logger("app")
    logger.info("app.startup", app_name=settings.app_name, environment=settings.environment)

    yield

    logger.info("app.shutdown", app_name=settings.app_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Documents in, rendered slide decks out",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)
    app.include_router(session_router, prefix="/api")

    return app


app = create_app()


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.app_name, "version": __version__}


def main() -> None:
    import uvicorn

    uvicorn.run(
        "deckforge.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
