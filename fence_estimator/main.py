from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

from .config import settings
from .database import engine, Base
from .routers import estimates, quotes, calendar

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("fence_estimator")

# Fresh databases get storage_entries here; later schema changes go through Alembic
Base.metadata.create_all(bind=engine)

ALEMBIC_INI = os.path.join(os.path.dirname(__file__), "..", "alembic.ini")


def _run_migrations():
    """Bring the storage schema to the Alembic head.

    A database first built by create_all() has storage_entries but no
    alembic_version row, so it is stamped at head before upgrading.
    """
    try:
        from alembic.config import Config
        from alembic import command
        from sqlalchemy import inspect

        if not os.path.exists(ALEMBIC_INI):
            logger.info("No alembic.ini next to the package, storage schema left as created")
            return

        alembic_cfg = Config(ALEMBIC_INI)
        alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

        tables = inspect(engine).get_table_names()
        if "alembic_version" not in tables and "storage_entries" in tables:
            logger.info("storage_entries predates Alembic tracking, stamping head")
            command.stamp(alembic_cfg, "head")

        command.upgrade(alembic_cfg, "head")
        logger.info("Storage schema at head")

    except Exception as e:
        # Quotes are still readable on the create_all() schema
        logger.warning(f"Storage migration failed: {e}")


app = FastAPI(
    title="Fence Estimator",
    description="Fence installation estimating tool: pricing, saved quotes, job calendar",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(estimates.router, prefix="/api")
app.include_router(quotes.router, prefix="/api")
app.include_router(calendar.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "fence-estimator"}


@app.on_event("startup")
def migrate_storage():
    _run_migrations()
