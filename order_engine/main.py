import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from order_engine.core.config import CORS_ALLOW_ORIGIN_REGEX, CORS_ORIGINS, DATABASE_URL, IS_DEV, IS_TEST
from order_engine.core.database import Base, engine
from order_engine.core.logging_setup import configure_logging
from order_engine.core.startup_checks import (
    apply_migrations,
    ensure_migrations_applied,
    validate_database_environment,
)
from order_engine.middleware.observability import ObservabilityMiddleware
import order_engine.models  # garante que os models são importados antes do create_all
import order_engine.services.event_handlers  # registra handlers do event bus

from order_engine.routers.orders import router as orders_router
from order_engine.routers.menu import router as menu_router
from order_engine.routers.internal_metrics import router as internal_metrics_router

configure_logging()

logger = logging.getLogger(__name__)
STARTUP_PREFIX = "[STARTUP]"
REPO_ROOT = Path(__file__).resolve().parents[1]
ALEMBIC_CONFIG_PATH = Path(
    os.getenv("ALEMBIC_CONFIG", str(REPO_ROOT / "alembic.ini"))
)


def _startup_tasks() -> None:
    try:
        validate_database_environment()
        apply_migrations(alembic_config_path=ALEMBIC_CONFIG_PATH)
        if DATABASE_URL.startswith("sqlite") and (IS_DEV or IS_TEST):
            # Dev/test em SQLite sobe sem alembic
            Base.metadata.create_all(bind=engine)
            logger.info("%s sqlite schema ensured via create_all", STARTUP_PREFIX)
            return
        ensure_migrations_applied(engine=engine, alembic_config_path=ALEMBIC_CONFIG_PATH)
    except Exception:
        logger.exception("%s ERROR startup failed", STARTUP_PREFIX)
        raise


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="Order Engine API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_origin_regex=CORS_ALLOW_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)

# Routers
app.include_router(orders_router)
app.include_router(menu_router)
app.include_router(internal_metrics_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
