"""Shared pytest fixtures for cbms_events tests."""

import itertools

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cbms_events.db.schema import Base
from cbms_events.models.domain import AccommodationDays, ParticipantEntity
from cbms_events.store.memory import InMemoryRecordStore
from cbms_events.sync.events import EventBus
from cbms_events.sync.scheduler import ManualScheduler


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the in-memory engine."""
    return sessionmaker(bind=engine)


@pytest.fixture
def session(session_factory):
    """Create a database session for testing."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def bus():
    """Fresh event bus."""
    return EventBus()


@pytest.fixture
def scheduler():
    """Simulated-time scheduler starting at t=0."""
    return ManualScheduler()


@pytest.fixture
def store(bus):
    """Empty in-memory record store wired to the bus."""
    return InMemoryRecordStore(bus)


@pytest.fixture
def make_participant():
    """Factory for participant entities with sensible defaults."""
    counter = itertools.count(1)

    def _make(
        event_name: str = "Summit",
        municipality: str = "Bulan",
        sex: str = "Male",
        avail_accommodation: bool = False,
        days: list[bool] | None = None,
        **overrides,
    ) -> ParticipantEntity:
        n = next(counter)
        flags = days or [False] * 5
        fields = {
            "participant_id": f"p-{n:03d}",
            "event_name": event_name,
            "municipality": municipality,
            "name": f"Participant {n}",
            "sex": sex,
            "designation": "Enumerator",
            "email": f"p{n}@example.gov.ph",
            "avail_accommodation": avail_accommodation,
            "accommodation": AccommodationDays(*flags),
            "timestamp": 1_700_000_000_000 + n,
        }
        fields.update(overrides)
        return ParticipantEntity(**fields)

    return _make
