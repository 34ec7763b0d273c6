"""
FastAPI application entry point.
Mounts routes, exception handlers, static uploads and Prometheus metrics; the
lifespan builds the database pool once and shares it through app.state.
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from prometheus_client import make_asgi_app

from skillswap.api.router import api_router
from skillswap.config import Settings, get_settings
from skillswap.core.exception_handlers import setup_exception_handlers
from skillswap.db.init_db import init_db
from skillswap.db.session import Database

logger = logging.getLogger(__name__)


def configure_logging(level_name: str) -> None:
    """Console logging with timestamps and module names; noisy libraries at WARNING."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    logging.getLogger("skillswap").setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: connect (fatal on failure), create tables, seed. Shutdown: release the pool."""
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)

    database = Database.from_settings(settings)
    try:
        await database.ping()
    except Exception:
        logger.exception("Database connection failed")
        await database.dispose()
        raise
    logger.info("Database connected")

    await init_db(database, seed=settings.seed_sample_data)
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    app.state.database = database
    try:
        yield
    finally:
        await database.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Peer-to-peer skill exchange: directory, swap requests and notifications.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)

    # Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    app.include_router(api_router, prefix="/api")

    # Uploaded profile photos (directory is created on first upload or at startup)
    app.mount(
        "/uploads",
        StaticFiles(directory=str(settings.upload_dir), check_dir=False),
        name="uploads",
    )

    return app


app = create_app()
