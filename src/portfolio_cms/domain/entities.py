"""Domain models for content entities."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import get_args
from uuid import UUID

from portfolio_cms.domain.schemas import (
    BlogPostFields,
    CaseStudyFields,
    EntityFields,
    PortfolioStatsFields,
    ProjectFields,
    RequestFields,
    TaskFields,
)


class EntityType(str, Enum):
    """Closed set of entity collections."""

    PROJECT = "project"
    CASE_STUDY = "case_study"
    BLOG_POST = "blog_post"
    TASK = "task"
    REQUEST = "request"
    PORTFOLIO_STATS = "portfolio_stats"


@dataclass(frozen=True)
class EntitySpec:
    """Storage and workflow rules for one entity variant."""

    entity_type: EntityType
    table: str
    fields_model: type[EntityFields]
    has_slug: bool
    publishable: bool
    display_field: str | None = "title"
    display_label: str | None = None

    def has_field(self, name: str) -> bool:
        return name in self.fields_model.model_fields

    @property
    def statuses(self) -> tuple[str, ...]:
        """Allowed workflow statuses, empty when the variant has none."""
        field = self.fields_model.model_fields.get("status")
        return get_args(field.annotation) if field is not None else ()

    def row_fields(self, row: dict[str, object]) -> dict[str, object]:
        """Pick variant attributes out of a stored row.

        NULL columns are left out so schema defaults apply on the next
        validation.
        """
        return {
            name: row[name]
            for name in self.fields_model.model_fields
            if row.get(name) is not None
        }


ENTITY_SPECS: dict[EntityType, EntitySpec] = {
    spec.entity_type: spec
    for spec in (
        EntitySpec(
            EntityType.PROJECT, "projects", ProjectFields, True, True
        ),
        EntitySpec(
            EntityType.CASE_STUDY, "case_studies", CaseStudyFields, True, True
        ),
        EntitySpec(
            EntityType.BLOG_POST, "blog_posts", BlogPostFields, True, True
        ),
        EntitySpec(EntityType.TASK, "tasks", TaskFields, False, False),
        EntitySpec(EntityType.REQUEST, "requests", RequestFields, False, False),
        EntitySpec(
            EntityType.PORTFOLIO_STATS,
            "portfolio_stats",
            PortfolioStatsFields,
            False,
            False,
            display_field=None,
            display_label="Portfolio Statistics",
        ),
    )
}

# Columns managed by the store rather than supplied by callers.
SYSTEM_COLUMNS = frozenset(
    {"id", "published", "created_at", "updated_at", "created_by", "updated_by"}
)


def spec_for(entity_type: EntityType) -> EntitySpec:
    """Return the variant rules for an entity type."""
    return ENTITY_SPECS[entity_type]


@dataclass(frozen=True)
class Entity:
    """A single row in one of the content collections."""

    id: UUID
    entity_type: EntityType
    fields: dict[str, object]
    published: bool | None
    created_at: datetime
    updated_at: datetime
    created_by: UUID | None
    updated_by: UUID | None

    @property
    def slug(self) -> str | None:
        value = self.fields.get("slug")
        return str(value) if value is not None else None

    @property
    def display_name(self) -> str:
        """Human-readable label used in activity records."""
        spec = spec_for(self.entity_type)
        if spec.display_label:
            return spec.display_label
        value = self.fields.get(spec.display_field or "")
        return str(value) if value else str(self.id)

    def snapshot(self) -> dict[str, object]:
        """Return a JSON-safe copy of the row."""
        row: dict[str, object] = {
            "id": str(self.id),
            **self.fields,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "created_by": str(self.created_by) if self.created_by else None,
            "updated_by": str(self.updated_by) if self.updated_by else None,
        }
        if self.published is not None:
            row["published"] = self.published
        return row


@dataclass(frozen=True)
class EntityChange:
    """Entity state before and after a single update."""

    before: Entity
    after: Entity


@dataclass(frozen=True)
class PublishSummary:
    """Publish-state counters for one collection."""

    total: int
    published: int
    drafts: int


@dataclass(frozen=True)
class StatusSummary:
    """Workflow-status counters for one collection."""

    total: int
    by_status: dict[str, int]
