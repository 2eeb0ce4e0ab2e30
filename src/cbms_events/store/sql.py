"""SQLAlchemy-backed record store.

Production store for participant records. Each call opens its own
session from the injected factory, so the store is safe to use from
the poll thread and request threads alike.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from cbms_events.core.errors import AppendError, FetchError
from cbms_events.db import repo
from cbms_events.db.session import session_scope
from cbms_events.models.domain import ParticipantEntity
from cbms_events.models.types import ParticipantSubmission
from cbms_events.store.base import RecordStoreBase, build_participant
from cbms_events.sync.events import RECORDS_UPDATED, EventBus

logger = logging.getLogger(__name__)


class SqlRecordStore(RecordStoreBase):
    """Participant store over the participants table."""

    def __init__(self, session_factory: sessionmaker, bus: EventBus):
        """Initialize store.

        Args:
            session_factory: Factory for database sessions.
            bus: Event bus notified after each successful append.
        """
        self._session_factory = session_factory
        self._bus = bus

    def fetch_all(self) -> list[ParticipantEntity]:
        try:
            with session_scope(self._session_factory) as session:
                return repo.list_participants(session)
        except SQLAlchemyError as e:
            raise FetchError(f"Failed to fetch participants: {e}") from e

    def append(self, submission: ParticipantSubmission) -> ParticipantEntity:
        participant = build_participant(submission)
        try:
            with session_scope(self._session_factory) as session:
                repo.create_participant(session, participant)
        except SQLAlchemyError as e:
            raise AppendError(f"Failed to save participant: {e}") from e

        logger.info(
            f"Registered participant {participant.participant_id} "
            f"for event '{participant.event_name}'"
        )
        self._bus.publish(RECORDS_UPDATED)
        return participant
