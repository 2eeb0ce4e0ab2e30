"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from cbms_events.db.schema import Event, Participant
from cbms_events.models.domain import AccommodationDays, EventEntity, ParticipantEntity

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _participant_to_entity(row: Participant) -> ParticipantEntity:
    """Convert SQLAlchemy Participant to domain entity."""
    return ParticipantEntity(
        participant_id=row.participant_id,
        event_name=row.event_name,
        municipality=row.municipality,
        name=row.name,
        sex=row.sex,
        designation=row.designation,
        email=row.email,
        avail_accommodation=row.avail_accommodation,
        accommodation=AccommodationDays(
            day1=row.day1,
            day2=row.day2,
            day3=row.day3,
            day4=row.day4,
            day5=row.day5,
        ),
        timestamp=row.timestamp,
    )


def _event_to_entity(row: Event) -> EventEntity:
    """Convert SQLAlchemy Event to domain entity."""
    return EventEntity(
        event_id=row.event_id,
        name=row.name,
        date_created=row.date_created,
    )


# ============================================================================
# Participant Repository
# ============================================================================


def list_participants(session: DbSession) -> list[ParticipantEntity]:
    """Get all participants, oldest registration first."""
    rows = (
        session.query(Participant)
        .order_by(Participant.timestamp, Participant.participant_id)
        .all()
    )
    return [_participant_to_entity(r) for r in rows]


def get_participant(session: DbSession, participant_id: str) -> ParticipantEntity | None:
    """Get participant by ID."""
    row = (
        session.query(Participant)
        .filter(Participant.participant_id == participant_id)
        .first()
    )
    return _participant_to_entity(row) if row else None


def create_participant(session: DbSession, entity: ParticipantEntity) -> None:
    """Insert a participant record (not committed)."""
    days = entity.accommodation
    session.add(
        Participant(
            participant_id=entity.participant_id,
            event_name=entity.event_name,
            municipality=entity.municipality,
            name=entity.name,
            sex=entity.sex,
            designation=entity.designation,
            email=entity.email,
            avail_accommodation=entity.avail_accommodation,
            day1=days.day1,
            day2=days.day2,
            day3=days.day3,
            day4=days.day4,
            day5=days.day5,
            timestamp=entity.timestamp,
        )
    )


# ============================================================================
# Event Repository
# ============================================================================


def list_events(session: DbSession) -> list[EventEntity]:
    """Get all events, newest first."""
    rows = session.query(Event).order_by(Event.date_created.desc()).all()
    return [_event_to_entity(r) for r in rows]


def get_event_by_name(session: DbSession, name: str) -> EventEntity | None:
    """Get event by its unique name."""
    row = session.query(Event).filter(Event.name == name).first()
    return _event_to_entity(row) if row else None


def create_event(session: DbSession, entity: EventEntity) -> None:
    """Insert an event (not committed)."""
    session.add(
        Event(
            event_id=entity.event_id,
            name=entity.name,
            date_created=entity.date_created,
        )
    )


def delete_event(session: DbSession, event_id: str) -> bool:
    """Delete an event by ID.

    Participant records registered under the event name are kept.

    Returns:
        True if a row was deleted.
    """
    deleted = session.query(Event).filter(Event.event_id == event_id).delete()
    return deleted > 0


# ============================================================================
# Transaction Management
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit the current transaction."""
    session.commit()
