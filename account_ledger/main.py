"""
Account Ledger FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from account_ledger.config import get_settings
from account_ledger.logging_config import setup_logging
from account_ledger.models.base import wait_for_database, warm_pool
from account_ledger.api.health import router as health_router
from account_ledger.api.accounts import router as accounts_router

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Configure logging, wait for the database and pre-open
    PG_MIN pooled connections before serving.
    """
    setup_logging(settings.LOG_LEVEL)
    await run_in_threadpool(
        wait_for_database,
        retries=settings.DB_CONNECT_RETRIES,
        delay=settings.DB_CONNECT_RETRY_DELAY,
    )
    await run_in_threadpool(warm_pool, count=settings.PG_MIN)
    logger.info(
        "%s %s started (%s)",
        settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT,
    )
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Account ledger with per-account credit limits",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)


def run() -> None:
    """Console entry point: serve the application with uvicorn."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
