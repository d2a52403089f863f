"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID


@dataclass
class Profile:
    """Display profile mirroring an auth identity (one per user)."""

    id: UUID
    name: str
    email: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
