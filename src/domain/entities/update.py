"""Recent updates feed shown below the catalog grid."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, slots=True)
class RecentUpdate:
    """A dated announcement."""

    date: date
    text: str


RECENT_UPDATES: tuple[RecentUpdate, ...] = (
    RecentUpdate(date=date(2025, 1, 2), text="Consilium game added"),
    RecentUpdate(date=date(2024, 12, 29), text="Password Generator added"),
    RecentUpdate(date=date(2024, 12, 28), text="Aries App added"),
)
