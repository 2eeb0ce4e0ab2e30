"""Tests for composing the dashboard from settings."""

from cbms_events.api.app import build_context
from cbms_events.core.config import Settings
from cbms_events.insight.mock import MockSummarizer
from cbms_events.models.types import ParticipantSubmission
from cbms_events.store.memory import InMemoryRecordStore
from cbms_events.store.sql import SqlRecordStore


class TestBuildContext:
    """Test build_context wiring."""

    def test_sql_backend(self, tmp_path):
        settings = Settings(_env_file=None, db_path=tmp_path / "ctx.db", summarizer="mock")

        context = build_context(settings)

        assert isinstance(context.store, SqlRecordStore)
        assert isinstance(context.requester._summarizer, MockSummarizer)
        assert context.controller.poll_interval == 30.0

    def test_memory_backend(self, tmp_path):
        settings = Settings(
            _env_file=None,
            db_path=tmp_path / "ctx.db",
            store_backend="memory",
            summarizer="mock",
        )

        context = build_context(settings)

        assert isinstance(context.store, InMemoryRecordStore)

    def test_store_signal_reaches_controller(self, tmp_path):
        """The store and controller share one bus."""
        settings = Settings(
            _env_file=None,
            db_path=tmp_path / "ctx.db",
            summarizer="mock",
            poll_interval_sec=3600,
        )
        context = build_context(settings)
        context.controller.start()
        try:
            context.store.append(
                ParticipantSubmission(
                    event_name="Summit",
                    municipality="Castilla",
                    name="Pedro Cruz",
                    sex="Male",
                    email="pedro@castilla.gov.ph",
                )
            )
            assert len(context.controller.snapshot().records) == 1
        finally:
            context.controller.dispose()
