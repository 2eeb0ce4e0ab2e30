"""Base record store interface.

Record store adapter: narrow interface over the participant store.
- fetch_all() -> participants, raising FetchError on failure
- append(submission) -> participant, raising AppendError on failure
- Successful appends publish RECORDS_UPDATED on the injected bus
- Forbidden: analytics, sync state, UI shaping
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from cbms_events.core.identity import new_participant_id, now_ms
from cbms_events.models.domain import ParticipantEntity
from cbms_events.models.types import ParticipantSubmission


class RecordStoreBase(ABC):
    """Abstract base class for participant record stores."""

    @abstractmethod
    def fetch_all(self) -> list[ParticipantEntity]:
        """Fetch every participant record.

        Returns:
            Records in store order.

        Raises:
            FetchError: If the store is unreachable or the response is malformed.
        """
        pass

    @abstractmethod
    def append(self, submission: ParticipantSubmission) -> ParticipantEntity:
        """Persist a new registration.

        Args:
            submission: Validated registration payload.

        Returns:
            The stored participant with its assigned ID and timestamp.

        Raises:
            AppendError: If the record could not be persisted.
        """
        pass


def build_participant(submission: ParticipantSubmission) -> ParticipantEntity:
    """Assign identity and creation time to a registration.

    Pure function - no store access.
    """
    return ParticipantEntity(
        participant_id=new_participant_id(),
        event_name=submission.event_name,
        municipality=submission.municipality,
        name=submission.name,
        sex=submission.sex,
        designation=submission.designation,
        email=submission.email,
        avail_accommodation=submission.avail_accommodation,
        accommodation=submission.accommodation_selection.to_domain(),
        timestamp=now_ms(),
    )
