"""Database schema for CBMS Events.

Participants are append-only; event names are unique so that
participant.event_name can act as a foreign key by name.
"""

from sqlalchemy import BigInteger, Boolean, Index, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Participant(Base):
    """One registration record."""

    __tablename__ = "participants"

    participant_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    event_name: Mapped[str] = mapped_column(String(255), nullable=False)
    municipality: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sex: Mapped[str] = mapped_column(String(8), nullable=False)
    designation: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    avail_accommodation: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    day1: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    day2: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    day3: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    day4: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    day5: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)

    __table_args__ = (Index("ix_participants_event_name", "event_name"),)


class Event(Base):
    """An event participants can register for.

    Invariant: UNIQUE(name)
    """

    __tablename__ = "events"

    event_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    date_created: Mapped[int] = mapped_column(BigInteger, nullable=False)
