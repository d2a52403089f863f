"""Mapping between Supabase rows/payloads and domain entities."""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from domain.entities.profile import Profile
from domain.entities.project import Project, ProjectDraft
from domain.entities.session import AuthUser, Session


def parse_timestamp(value: Any) -> datetime:
    """Parse a Postgres ``timestamptz`` rendered as ISO 8601."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid timestamp: {value!r}")
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def project_from_record(record: dict[str, Any]) -> Project:
    return Project(
        id=UUID(str(record["id"])),
        title=record["title"],
        link=record["link"],
        image=record.get("image") or "",
        user_id=UUID(str(record["user_id"])),
        created_at=parse_timestamp(record["created_at"]),
        rating=float(record.get("rating") or 0),
        category=record.get("category"),
    )


def project_to_record(draft: ProjectDraft) -> dict[str, Any]:
    record: dict[str, Any] = {
        "title": draft.title,
        "link": draft.link,
        "image": draft.image,
        "rating": draft.rating,
        "user_id": str(draft.user_id),
    }
    if draft.category is not None:
        record["category"] = draft.category
    return record


def profile_from_record(record: dict[str, Any]) -> Profile:
    created_at = record.get("created_at")
    return Profile(
        id=UUID(str(record["id"])),
        name=record.get("name") or "",
        email=record.get("email") or "",
        created_at=parse_timestamp(created_at) if created_at else datetime.now(timezone.utc),
    )


def user_from_payload(payload: dict[str, Any]) -> AuthUser:
    return AuthUser(id=UUID(str(payload["id"])), email=payload.get("email") or "")


def session_from_payload(payload: dict[str, Any]) -> Session:
    """Build a session from a GoTrue token response."""
    return Session(
        access_token=payload["access_token"],
        refresh_token=payload.get("refresh_token"),
        expires_in=payload.get("expires_in"),
        token_type=payload.get("token_type") or "bearer",
        user=user_from_payload(payload["user"]),
    )
