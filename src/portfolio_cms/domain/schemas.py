"""Pydantic field schemas for each entity variant."""

from datetime import date
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

Priority = Literal["low", "medium", "high", "urgent"]


class EntityFields(BaseModel):
    """Base for variant field schemas; unknown attributes are rejected."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class ProjectFields(EntityFields):
    """Portfolio project attributes."""

    title: str = Field(min_length=1)
    slug: str = Field(min_length=1, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    category: str = Field(min_length=1)
    description: str = Field(min_length=1)
    icon: str | None = None
    overview: str | None = None
    challenge: str | None = None
    solution: str | None = None
    duration: str | None = None
    year: str | None = None
    gradient: str | None = None
    tech: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    results: list[str] = Field(default_factory=list)


class CaseStudyFields(EntityFields):
    """Case study attributes."""

    title: str = Field(min_length=1)
    slug: str = Field(min_length=1, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    industry: str = Field(min_length=1)
    description: str = Field(min_length=1)
    client: str | None = None
    overview: str | None = None
    challenge: str | None = None
    solution: str | None = None
    duration: str | None = None
    year: str | None = None
    gradient: str | None = None
    objectives: list[str] = Field(default_factory=list)
    approach: list[str] = Field(default_factory=list)
    results: list[str] = Field(default_factory=list)
    metrics: list[str] = Field(default_factory=list)
    testimonial: str | None = None
    testimonial_author: str | None = None
    testimonial_role: str | None = None


class BlogPostFields(EntityFields):
    """Blog post attributes."""

    title: str = Field(min_length=1)
    slug: str = Field(min_length=1, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    content: str = Field(min_length=1)
    excerpt: str | None = None
    author: str | None = None
    cover_image: str | None = None
    tags: list[str] = Field(default_factory=list)


class TaskFields(EntityFields):
    """Staff task attributes."""

    title: str = Field(min_length=1)
    description: str | None = None
    category: str | None = None
    priority: Priority = "medium"
    status: Literal["pending", "in-progress", "completed"] = "pending"
    deadline: date | None = None
    assigned_to: UUID | None = None


class RequestFields(EntityFields):
    """Client service request attributes."""

    title: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: str = Field(min_length=1)
    priority: Priority = "medium"
    status: Literal["pending", "in-progress", "completed", "rejected"] = "pending"
    budget: str | None = None
    deadline: date | None = None
    client_id: UUID | None = None
    assigned_to: UUID | None = None


class PortfolioStatsFields(EntityFields):
    """Headline counters shown on the portfolio page."""

    projects_completed: int = Field(default=0, ge=0)
    client_satisfaction: int = Field(default=0, ge=0, le=100)
    years_experience: int = Field(default=0, ge=0)
    happy_clients: int = Field(default=0, ge=0)
