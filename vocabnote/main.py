"""FastAPI application serving plain-text lookups and notebook data."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from vocabnote.config import settings
from vocabnote.database import init_db
from vocabnote.logging_config import setup_logging
from vocabnote.routes import dictionary_router, notebook_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    setup_logging()
    logger.info("Starting vocabnote server...")

    # The lookup cache lives in the database
    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down vocabnote server...")


def create_app(root: str | None = None) -> FastAPI:
    """Create the application with the lookup route mounted at ``/<root>``."""
    root = (root if root is not None else settings.server_root).strip("/")

    application = FastAPI(
        title="vocabnote",
        description="Dictionary lookups as plain text",
        version="0.1.0",
        lifespan=lifespan,
    )
    application.include_router(dictionary_router, prefix=f"/{root}")
    application.include_router(notebook_router)

    @application.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "version": "0.1.0"}

    return application


app = create_app()


def run(host: str | None = None, port: int | None = None, root: str | None = None) -> None:
    """Run the server with uvicorn."""
    import uvicorn

    logger.info(f"Serving lookups at {host or settings.server_host}:{port or settings.server_port}")
    uvicorn.run(
        create_app(root),
        host=host or settings.server_host,
        port=port or settings.server_port,
    )


if __name__ == "__main__":
    run()
