"""Tests for database schema and repository.

Invariants:
1. Event names are unique
2. Repository returns domain entities, not ORM rows
3. Deleting an event keeps registrations made under its name
"""

import pytest
from sqlalchemy.exc import IntegrityError

from cbms_events.db import repo
from cbms_events.db.schema import Base, Event
from cbms_events.db.session import get_session_factory, init_db
from cbms_events.models.domain import EventEntity, ParticipantEntity


class TestSchemaCreation:
    """Test that schema can be created without errors."""

    def test_all_tables_created(self, engine):
        assert {"participants", "events"}.issubset(Base.metadata.tables.keys())


class TestEventRepository:
    """Test event persistence."""

    def test_create_and_list(self, session):
        repo.create_event(session, EventEntity("e1", "Summit", 1_000))
        repo.create_event(session, EventEntity("e2", "Workshop", 2_000))
        repo.commit(session)

        names = [e.name for e in repo.list_events(session)]

        assert names == ["Workshop", "Summit"]

    def test_duplicate_name_rejected(self, session):
        session.add(Event(event_id="e1", name="Summit", date_created=1))
        session.commit()

        session.add(Event(event_id="e2", name="Summit", date_created=2))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_get_by_name(self, session):
        repo.create_event(session, EventEntity("e1", "Summit", 1_000))
        repo.commit(session)

        found = repo.get_event_by_name(session, "Summit")

        assert isinstance(found, EventEntity)
        assert found.event_id == "e1"
        assert repo.get_event_by_name(session, "Missing") is None

    def test_delete_event(self, session):
        repo.create_event(session, EventEntity("e1", "Summit", 1_000))
        repo.commit(session)

        assert repo.delete_event(session, "e1") is True
        repo.commit(session)

        assert repo.list_events(session) == []
        assert repo.delete_event(session, "e1") is False

    def test_delete_keeps_participants(self, session, make_participant):
        repo.create_event(session, EventEntity("e1", "Summit", 1_000))
        repo.create_participant(session, make_participant(event_name="Summit"))
        repo.commit(session)

        repo.delete_event(session, "e1")
        repo.commit(session)

        assert len(repo.list_participants(session)) == 1


class TestParticipantRepository:
    """Test participant persistence."""

    def test_round_trip_preserves_fields(self, session, make_participant):
        original = make_participant(
            municipality="Santa Magdalena",
            sex="Other",
            avail_accommodation=True,
            days=[False, True, False, True, True],
        )
        repo.create_participant(session, original)
        repo.commit(session)

        loaded = repo.get_participant(session, original.participant_id)

        assert isinstance(loaded, ParticipantEntity)
        assert loaded == original

    def test_stored_day_flags_kept_verbatim(self, session, make_participant):
        """The store does not normalize flags; aggregation does."""
        record = make_participant(avail_accommodation=False, days=[True] * 5)
        repo.create_participant(session, record)
        repo.commit(session)

        loaded = repo.get_participant(session, record.participant_id)

        assert loaded.accommodation.selected_count() == 5

    def test_get_missing_returns_none(self, session):
        assert repo.get_participant(session, "nope") is None


class TestSessionHelpers:
    """Test session factory caching."""

    def test_factory_cached_per_path(self, tmp_path):
        db_path = tmp_path / "cache.db"
        assert get_session_factory(db_path) is get_session_factory(str(db_path))
        assert get_session_factory(db_path) is not get_session_factory(tmp_path / "other.db")

    def test_init_db_creates_file_and_tables(self, tmp_path):
        db_path = tmp_path / "nested" / "cbms.db"
        factory = init_db(db_path)

        assert factory is get_session_factory(db_path)
        session = factory()
        try:
            assert repo.list_events(session) == []
        finally:
            session.close()
        assert db_path.exists()
