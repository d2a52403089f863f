"""Pydantic schemas for Project API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.project import Project


class ProjectCreate(BaseModel):
    """Create-project form. Only presence of name and link is checked."""

    title: str = Field(..., min_length=1, max_length=200)
    link: str = Field(..., min_length=1, max_length=2048)
    image: str | None = Field(None, max_length=2048)


class ProjectResponse(BaseModel):
    """Schema for one catalog card."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Aries App",
                "link": "https://aries.example.com",
                "image": "https://images.example.com/aries.png",
                "rating": 3.5,
                "display_rating": 3.5,
                "stars": ["full", "full", "full", "half", "empty"],
                "category": "featured",
                "featured": True,
                "created_at": "2024-12-28T10:00:00+00:00",
                "user_id": "456e4567-e89b-12d3-a456-426614174000",
            }
        },
    )

    id: UUID
    title: str
    link: str
    image: str
    rating: float
    display_rating: float
    stars: list[str]
    category: str | None = None
    featured: bool = False
    created_at: datetime
    user_id: UUID

    @classmethod
    def from_entity(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            title=project.title,
            link=project.link,
            image=project.image,
            rating=project.rating,
            display_rating=project.display_rating,
            stars=[slot.value for slot in project.stars],
            category=project.category,
            featured=project.is_featured,
            created_at=project.created_at,
            user_id=project.user_id,
        )


class ProjectListResponse(BaseModel):
    """Schema for the (search-filtered) catalog grid."""

    data: list[ProjectResponse]
    total: int
    search: str = ""
    loading: bool = False


class ProjectDetailResponse(BaseModel):
    """Schema for single Project."""

    data: ProjectResponse
