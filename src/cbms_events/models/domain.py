"""Domain models for CBMS Events.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Literal


# ============================================================================
# Participant Domain
# ============================================================================

Sex = Literal["Male", "Female", "Other"]


@dataclass(frozen=True)
class AccommodationDays:
    """Per-day lodging selection for the five event days."""

    day1: bool = False
    day2: bool = False
    day3: bool = False
    day4: bool = False
    day5: bool = False

    def selected_count(self) -> int:
        """Number of days flagged true."""
        return sum(1 for f in fields(self) if getattr(self, f.name))

    def as_list(self) -> list[bool]:
        return [getattr(self, f.name) for f in fields(self)]


@dataclass(frozen=True)
class ParticipantEntity:
    """Domain model for a single registration record.

    Read-only from the core's perspective: created by registration,
    persisted by the record store, never mutated afterwards.
    """

    participant_id: str
    event_name: str
    municipality: str
    name: str
    sex: Sex
    designation: str
    email: str
    avail_accommodation: bool
    accommodation: AccommodationDays = field(default_factory=AccommodationDays)
    timestamp: int = 0


# ============================================================================
# Event Domain
# ============================================================================


@dataclass(frozen=True)
class EventEntity:
    """Domain model for a registered event."""

    event_id: str
    name: str
    date_created: int


# ============================================================================
# Sync Domain
# ============================================================================

SyncStatus = Literal["idle", "syncing", "error"]
