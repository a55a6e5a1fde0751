"""FastAPI application factory for the reservation export API."""

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reszip import __version__
from reszip.api.middleware import request_id_middleware
from reszip.api.routes import reservations, system
from reszip.config import Settings
from reszip.core.archive import ArchiveBuilder
from reszip.core.batch import BatchProcessor
from reszip.core.execution import DocumentFetcher
from reszip.core.execution.error_handler import Sleep
from reszip.core.logging import logger
from reszip.core.retry_config import RetryConfig
from reszip.core.session import SessionManager


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep: Optional[Sleep] = None,
) -> FastAPI:
    """Create and configure FastAPI app. Factory pattern for testability.

    Args:
        settings: Resolved settings (read from the environment if omitted)
        transport: Optional httpx transport for the booking system client
        sleep: Optional awaitable sleep used for backoff and batch pacing
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.verify_ssl:
            logger.warning("tls_verification_disabled", base_url=settings.base_url)

        client = httpx.AsyncClient(
            verify=settings.verify_ssl,
            timeout=settings.request_timeout,
            transport=transport,
        )
        session_manager = SessionManager(
            client=client,
            base_url=settings.base_url,
            username=settings.username,
            password=settings.password,
            company_code=settings.company_code,
            session_ttl=settings.session_ttl,
        )
        fetcher = DocumentFetcher(
            client=client,
            session_manager=session_manager,
            base_url=settings.base_url,
            retry_config=RetryConfig(
                max_attempts=settings.max_attempts,
                initial_delay=settings.retry_initial_delay,
                max_delay=settings.retry_max_delay,
            ),
            sleep=sleep,
        )

        app.state.settings = settings
        app.state.session_manager = session_manager
        app.state.batch_processor = BatchProcessor(
            fetch=fetcher.fetch_document,
            batch_size=settings.batch_size,
            inter_batch_delay=settings.batch_delay,
            mode=settings.batch_mode,
            sleep=sleep,
        )
        app.state.archive_builder = ArchiveBuilder()

        logger.info(
            "app_started",
            base_url=settings.base_url,
            batch_size=settings.batch_size,
            batch_mode=settings.batch_mode,
            max_attempts=settings.max_attempts,
        )
        try:
            yield
        finally:
            await client.aclose()
            logger.info("app_stopped")

    app = FastAPI(
        title="reszip",
        description=(
            "Reservation PDF export: logs in to the booking system once, fetches "
            "one PDF per reservation, and returns them as a single ZIP."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=[
            reservations.SUCCESS_COUNT_HEADER,
            reservations.FAIL_COUNT_HEADER,
            "Content-Disposition",
        ],
    )

    # Register routes
    app.include_router(system.router)
    app.include_router(reservations.router)

    return app
