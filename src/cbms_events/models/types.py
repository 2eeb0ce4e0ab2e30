"""Pydantic models for the CBMS Events API.

Request payloads validate registration input; response models shape
controller and aggregator output for the UI.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from cbms_events.core.locations import SORSOGON_MUNICIPALITIES
from cbms_events.models.domain import AccommodationDays, ParticipantEntity, Sex, SyncStatus


class AccommodationSelection(BaseModel):
    """Per-day accommodation flags."""

    day1: bool = False
    day2: bool = False
    day3: bool = False
    day4: bool = False
    day5: bool = False

    def to_domain(self) -> AccommodationDays:
        return AccommodationDays(**self.model_dump())


class ParticipantSubmission(BaseModel):
    """Registration form submission."""

    event_name: str = Field(min_length=1)
    municipality: str
    name: str = Field(min_length=1)
    sex: Sex
    designation: str = ""
    email: str
    avail_accommodation: bool = False
    accommodation_selection: AccommodationSelection = Field(
        default_factory=AccommodationSelection
    )

    @field_validator("event_name", "name")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("municipality")
    @classmethod
    def _known_municipality(cls, value: str) -> str:
        if value not in SORSOGON_MUNICIPALITIES:
            raise ValueError(f"unknown municipality: {value}")
        return value

    @field_validator("email")
    @classmethod
    def _looks_like_email(cls, value: str) -> str:
        value = value.strip()
        if "@" not in value:
            raise ValueError("invalid email address")
        return value


class ParticipantDetail(BaseModel):
    """Participant record for API response."""

    id: str
    event_name: str
    municipality: str
    name: str
    sex: Sex
    designation: str
    email: str
    avail_accommodation: bool
    accommodation_selection: AccommodationSelection
    timestamp: int

    @classmethod
    def from_entity(cls, entity: ParticipantEntity) -> "ParticipantDetail":
        days = entity.accommodation
        return cls(
            id=entity.participant_id,
            event_name=entity.event_name,
            municipality=entity.municipality,
            name=entity.name,
            sex=entity.sex,
            designation=entity.designation,
            email=entity.email,
            avail_accommodation=entity.avail_accommodation,
            accommodation_selection=AccommodationSelection(
                day1=days.day1,
                day2=days.day2,
                day3=days.day3,
                day4=days.day4,
                day5=days.day5,
            ),
            timestamp=entity.timestamp,
        )


class AnalyticsSummary(BaseModel):
    """Aggregate dashboard statistics over an in-scope record set."""

    total_participants: int
    total_room_nights: int
    municipality_stats: dict[str, int]  # municipality -> count
    gender_stats: dict[str, int]  # sex -> count
    event_stats: dict[str, int]  # event name -> count


class EventSubmission(BaseModel):
    """Admin request to register a new event."""

    name: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class EventDetail(BaseModel):
    """Event details for API response."""

    id: str
    name: str
    date_created: int


class SyncStatusDetail(BaseModel):
    """Sync controller state for API response."""

    status: SyncStatus
    is_loading: bool
    record_count: int
    last_synced_at: datetime | None
    last_error: str | None


class InsightRequest(BaseModel):
    """Request body for narrative insight generation."""

    event: str | None = None


class InsightDetail(BaseModel):
    """Active insight slot for API response."""

    insight: str | None
    busy: bool
    error: str | None = None
