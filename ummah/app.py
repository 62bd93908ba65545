"""Application entry point: owns the repository lifecycle."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ummah.core.config import get_settings
from ummah.core.log import configure_logging
from ummah.repositories.file_repository import FileRepository
from ummah.routers import health as health_router

logger = logging.getLogger(__name__)


def create_app(repository: Optional[FileRepository] = None) -> FastAPI:
    """Build the app; the repository is created at startup unless one is injected."""
    settings = get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        repo = repository
        if repo is None:
            logger.info("Opening file storage at %s (env=%s)", settings.data_dir, settings.app_env)
            repo = FileRepository(settings.data_dir, seed_demo_data=settings.seed_demo_data)
        app.state.repository = repo
        yield
        app.state.repository = None

    app = FastAPI(title="Ummah Storage", lifespan=lifespan)
    app.include_router(health_router.router)
    return app


app = create_app()
