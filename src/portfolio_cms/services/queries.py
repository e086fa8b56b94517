"""Read-side queries for dashboards and public pages."""

from dataclasses import dataclass
from uuid import UUID

from portfolio_cms.domain.activity import ActivityAction, ActivityRecord
from portfolio_cms.domain.entities import (
    Entity,
    EntityType,
    PublishSummary,
    StatusSummary,
    spec_for,
)
from portfolio_cms.errors import NotFoundError, ValidationError
from portfolio_cms.services.activity import ActivityLogService
from portfolio_cms.services.entities import EntityService


@dataclass
class ContentQueryService:
    """Stateless listing over entities and the activity log."""

    entity_service: EntityService
    activity_log: ActivityLogService

    def list_entities(  # noqa: PLR0913
        self,
        entity_type: EntityType,
        include_unpublished: bool = False,
        limit: int | None = None,
        offset: int = 0,
        status: str | None = None,
        client_id: UUID | None = None,
    ) -> list[Entity]:
        """Return a page of entities, newest first."""
        return self.entity_service.list(
            entity_type,
            include_unpublished=include_unpublished,
            limit=limit,
            offset=offset,
            status=status,
            client_id=client_id,
        )

    def get_entity(self, entity_type: EntityType, entity_id: UUID) -> Entity:
        return self.entity_service.get(entity_type, entity_id)

    def get_published_by_slug(self, entity_type: EntityType, slug: str) -> Entity:
        """Return a public entity by slug; drafts are reported as missing."""
        entity = self.entity_service.get_by_slug(entity_type, slug)
        if spec_for(entity_type).publishable and not entity.published:
            raise NotFoundError(f"{entity_type.value} '{slug}' not found")
        return entity

    def publish_summary(self, entity_type: EntityType) -> PublishSummary:
        """Count published and draft entities in a collection."""
        if not spec_for(entity_type).publishable:
            raise ValidationError(
                f"{entity_type.value} entities have no publish workflow"
            )
        entities = self.entity_service.list(entity_type, include_unpublished=True)
        published = sum(1 for entity in entities if entity.published)
        return PublishSummary(
            total=len(entities),
            published=published,
            drafts=len(entities) - published,
        )

    def status_summary(
        self, entity_type: EntityType, client_id: UUID | None = None
    ) -> StatusSummary:
        """Count workflow entities per status, optionally for one client."""
        spec = spec_for(entity_type)
        if not spec.statuses:
            raise ValidationError(f"{entity_type.value} entities have no status")
        entities = self.entity_service.list(entity_type, client_id=client_id)
        by_status = dict.fromkeys(spec.statuses, 0)
        for entity in entities:
            status = str(entity.fields.get("status") or spec.statuses[0])
            by_status[status] = by_status.get(status, 0) + 1
        return StatusSummary(total=len(entities), by_status=by_status)

    def list_activity(
        self, limit: int | None = None, entity_type: EntityType | None = None
    ) -> list[ActivityRecord]:
        return self.activity_log.list(limit=limit, entity_type=entity_type)

    def entity_history(
        self, entity_type: EntityType, entity_id: UUID
    ) -> list[ActivityRecord]:
        return self.activity_log.list_by_entity(entity_type, entity_id)

    def activity_summary(self, limit: int | None = None) -> dict[ActivityAction, int]:
        """Count recent activity records per action."""
        counts = dict.fromkeys(ActivityAction, 0)
        for record in self.activity_log.list(limit=limit):
            counts[record.action] += 1
        return counts
