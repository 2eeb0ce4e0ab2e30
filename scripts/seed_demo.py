#!/usr/bin/env python3
"""Seed a demo database with events and registrations.

Usage:
    python scripts/seed_demo.py [--db PATH] [--count N]

This script:
1. Initializes the demo database
2. Registers the demo events
3. Registers N participants spread across events and municipalities
"""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from cbms_events.core.identity import new_event_id, now_ms  # noqa: E402
from cbms_events.core.locations import SORSOGON_MUNICIPALITIES  # noqa: E402
from cbms_events.db import repo  # noqa: E402
from cbms_events.db.session import init_db, session_scope  # noqa: E402
from cbms_events.models.domain import EventEntity  # noqa: E402
from cbms_events.models.types import AccommodationSelection, ParticipantSubmission  # noqa: E402
from cbms_events.store.sql import SqlRecordStore  # noqa: E402
from cbms_events.sync.events import EventBus  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "data" / "demo.db"

DEMO_EVENTS = [
    "CBMS Provincial Summit",
    "Data Validation Workshop",
    "Municipal Planners Forum",
]

DEMO_DESIGNATIONS = [
    "MPDC",
    "Enumerator",
    "Statistician",
    "Municipal Administrator",
    "IT Officer",
]


def seed_events(session_factory) -> None:
    """Register demo events that do not exist yet."""
    with session_scope(session_factory) as session:
        for name in DEMO_EVENTS:
            if repo.get_event_by_name(session, name) is None:
                repo.create_event(
                    session, EventEntity(event_id=new_event_id(), name=name, date_created=now_ms())
                )
                print(f"  Created event: {name}")


def build_submission(rng: random.Random, index: int) -> ParticipantSubmission:
    """Build a random but plausible registration."""
    wants_room = rng.random() < 0.6
    return ParticipantSubmission(
        event_name=rng.choice(DEMO_EVENTS),
        municipality=rng.choice(SORSOGON_MUNICIPALITIES),
        name=f"Participant {index:03d}",
        sex=rng.choice(["Male", "Female", "Other"]),
        designation=rng.choice(DEMO_DESIGNATIONS),
        email=f"participant{index:03d}@sorsogon.gov.ph",
        avail_accommodation=wants_room,
        accommodation_selection=AccommodationSelection(
            **{f"day{d}": wants_room and rng.random() < 0.5 for d in range(1, 6)}
        ),
    )


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--db", type=Path, default=DEMO_DB_PATH, help="SQLite database path")
    parser.add_argument("--count", type=int, default=40, help="Participants to register")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    print(f"Initializing database at {args.db}...")
    session_factory = init_db(args.db)

    print("Seeding events...")
    seed_events(session_factory)

    print(f"Registering {args.count} participants...")
    store = SqlRecordStore(session_factory, EventBus())
    rng = random.Random(args.seed)
    for index in range(1, args.count + 1):
        store.append(build_submission(rng, index))

    print(f"Done. {len(store.fetch_all())} participants in {args.db}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
