"""FastAPI application factory.

API layer:
- Validates inputs, serves controller snapshots and analytics
- Owns the DashboardContext (bus, store, controller, insight requester)
- Forbidden: direct store fetches for dashboard views (go through the controller)
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Generator

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import sessionmaker

from cbms_events.core.config import Settings, get_settings
from cbms_events.core.logging import setup_logging
from cbms_events.db.repo import DbSession
from cbms_events.db.session import init_db
from cbms_events.insight.base import SummarizerBase
from cbms_events.insight.mock import MockSummarizer
from cbms_events.insight.openai_summarizer import OpenAIConfig, OpenAISummarizer
from cbms_events.insight.requester import InsightRequester
from cbms_events.store.base import RecordStoreBase
from cbms_events.store.memory import InMemoryRecordStore
from cbms_events.store.sql import SqlRecordStore
from cbms_events.sync.controller import SyncController
from cbms_events.sync.events import EventBus
from cbms_events.sync.scheduler import ThreadingScheduler

logger = logging.getLogger(__name__)


@dataclass
class DashboardContext:
    """Everything the dashboard composes at startup.

    Attributes:
        bus: Event bus shared by the store (publisher) and controller.
        store: Participant record store.
        controller: Sync controller owning the current record set.
        requester: Insight requester for narrative summaries.
        session_factory: Factory for event-registry sessions.
    """

    bus: EventBus
    store: RecordStoreBase
    controller: SyncController
    requester: InsightRequester
    session_factory: sessionmaker


def _build_summarizer(settings: Settings) -> SummarizerBase:
    if settings.summarizer == "mock":
        return MockSummarizer()
    return OpenAISummarizer(
        OpenAIConfig(model=settings.openai_model, timeout=settings.openai_timeout_sec)
    )


def build_context(settings: Settings) -> DashboardContext:
    """Compose the dashboard from settings.

    Args:
        settings: Runtime configuration.

    Returns:
        DashboardContext with an unstarted controller.
    """
    session_factory = init_db(settings.db_path)
    bus = EventBus()

    store: RecordStoreBase
    if settings.store_backend == "memory":
        store = InMemoryRecordStore(bus)
    else:
        store = SqlRecordStore(session_factory, bus)

    controller = SyncController(
        store=store,
        bus=bus,
        scheduler=ThreadingScheduler(),
        poll_interval=settings.poll_interval_sec,
    )
    requester = InsightRequester(_build_summarizer(settings))

    return DashboardContext(
        bus=bus,
        store=store,
        controller=controller,
        requester=requester,
        session_factory=session_factory,
    )


def get_context(request: Request) -> DashboardContext:
    """Dependency to get the application's DashboardContext."""
    return request.app.state.context


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = request.app.state.context.session_factory()
    try:
        yield session
    finally:
        session.close()


def create_app(
    settings: Settings | None = None,
    context: DashboardContext | None = None,
) -> FastAPI:
    """Create FastAPI application.

    The controller is started when the application starts and disposed
    when it shuts down.

    Args:
        settings: Optional settings. Loaded from the environment if omitted.
        context: Optional pre-built context (tests inject one).

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    if context is None:
        setup_logging(settings.log_level)
        context = build_context(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # start() fetches and dispose() may join the poll thread
        await run_in_threadpool(context.controller.start)
        try:
            yield
        finally:
            await run_in_threadpool(context.controller.dispose)

    app = FastAPI(
        title="CBMS Events API",
        description="Sorsogon event registration and logistics dashboard",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.context = context

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    from cbms_events.api.routes import analytics, events, export, insight, participants, sync

    app.include_router(export.router, prefix="/api")
    app.include_router(participants.router, prefix="/api")
    app.include_router(analytics.router, prefix="/api")
    app.include_router(sync.router, prefix="/api")
    app.include_router(insight.router, prefix="/api")
    app.include_router(events.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok", "sync": context.controller.status}

    return app
