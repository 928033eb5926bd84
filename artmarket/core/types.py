"""Shared enums and id/timestamp helpers for marketplace entities"""

import uuid
from datetime import datetime, timezone
from enum import Enum


class SaleStatus(str, Enum):
    """Lifecycle status shared by tokens and auctions."""
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


def new_id() -> str:
    """Fresh opaque identifier (UUID4)."""
    return str(uuid.uuid4())


def utc_now() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()
