"""FastAPI application factory for the lookup service."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from .. import __version__
from ..store import InMemoryRecordStore
from ..store.base import RecordStore
from .routes import router

logger = logging.getLogger(__name__)

# Global state
_start_time: float = 0.0


def get_uptime() -> float:
    """Get server uptime in seconds."""
    return time.time() - _start_time


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    global _start_time

    _start_time = time.time()

    # Register components for the /components routes
    from .. import components  # noqa: F401

    if app.state.record_store is None and app.state.records_path is not None:
        path = Path(app.state.records_path)
        if path.exists():
            app.state.record_store = InMemoryRecordStore.from_file(path)
            logger.info(f"Loaded records from {path}")
        else:
            logger.warning(f"Records file not found: {path}")

    yield


def create_app(
    record_store: RecordStore | None = None,
    records_path: Path | str | None = None,
    title: str = "Entity Lookup",
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Pass a ready record store, or a records file loaded at startup.
    """
    app = FastAPI(
        title=title,
        version=__version__,
        description="HTTP API for resolving imported values against stored records",
        lifespan=lifespan,
    )
    app.state.record_store = record_store
    app.state.records_path = records_path

    app.include_router(router)

    return app
