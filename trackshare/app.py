"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlmodel import SQLModel

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_routes
from .core import DB_RESET, LOG_LEVEL, configure_logging, engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if DB_RESET:
        logger.warning("Dropping all tables before startup")
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    logger.info("Database schema ready")
    yield


def create_app() -> FastAPI:
    configure_logging(LOG_LEVEL)
    app = FastAPI(title="TrackShare API", version="0.1.0", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("trackshare.app:app", host="127.0.0.1", port=8080, reload=True)
