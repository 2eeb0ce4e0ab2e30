"""Identity utilities for registration records.

- new_participant_id: opaque participant identifier
- new_event_id: opaque event identifier
- now_ms: wall-clock creation timestamp in epoch milliseconds
"""

import time
import uuid


def new_participant_id() -> str:
    """Generate a new opaque participant ID.

    Returns:
        32-character hex string.
    """
    return uuid.uuid4().hex


def new_event_id() -> str:
    """Generate a new opaque event ID.

    Returns:
        32-character hex string.
    """
    return uuid.uuid4().hex


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)
