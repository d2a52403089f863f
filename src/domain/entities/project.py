"""Project domain entity."""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

MAX_RATING = 5.0
FEATURED_CATEGORY = "featured"


class StarSlot(StrEnum):
    """Rendering of one of the five rating stars."""

    FULL = "full"
    HALF = "half"
    EMPTY = "empty"


def clamp_rating(rating: float) -> float:
    """Clamp a rating to [0, 5] and round it to the nearest half step, ties up."""
    bounded = min(max(float(rating), 0.0), MAX_RATING)
    return math.floor(bounded * 2 + 0.5) / 2


def star_slots(rating: float) -> list[StarSlot]:
    """Render a rating as five star slots."""
    value = clamp_rating(rating)
    slots: list[StarSlot] = []
    for position in range(1, int(MAX_RATING) + 1):
        if position <= value:
            slots.append(StarSlot.FULL)
        elif position - 0.5 == value:
            slots.append(StarSlot.HALF)
        else:
            slots.append(StarSlot.EMPTY)
    return slots


@dataclass(frozen=True, slots=True)
class Project:
    """A showcased app or game.

    Local copies are read-only caches of rows owned by the remote service.
    """

    id: UUID
    title: str
    link: str
    image: str
    user_id: UUID
    created_at: datetime
    rating: float = 0.0
    category: str | None = None

    @property
    def is_featured(self) -> bool:
        return self.category == FEATURED_CATEGORY

    @property
    def display_rating(self) -> float:
        return clamp_rating(self.rating)

    @property
    def stars(self) -> list[StarSlot]:
        return star_slots(self.rating)


@dataclass(frozen=True, slots=True)
class ProjectDraft:
    """Insert payload for a new project; the server assigns id and created_at."""

    title: str
    link: str
    image: str
    user_id: UUID
    rating: float = 0.0
    category: str | None = None
