"""Typed CRUD over the content collections."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

import pydantic

from portfolio_cms.domain.entities import (
    SYSTEM_COLUMNS,
    Entity,
    EntityChange,
    EntitySpec,
    EntityType,
    spec_for,
)
from portfolio_cms.domain.identity import Actor
from portfolio_cms.errors import NotFoundError, ValidationError

_logger = logging.getLogger(__name__)


class EntityRepository(Protocol):
    """Persistence interface for entity collections.

    Implementations must enforce slug uniqueness natively and raise
    ``ConflictError`` on violation.
    """

    def create_entity(self, entity_type: EntityType, row: dict[str, object]) -> Entity:
        """Insert a row and return the stored entity."""

    def update_entity(
        self, entity_type: EntityType, entity_id: UUID, changes: dict[str, object]
    ) -> Entity | None:
        """Apply changes to a row and return it, or None when absent."""

    def delete_entity(self, entity_type: EntityType, entity_id: UUID) -> Entity | None:
        """Delete a row and return its last state, or None when absent."""

    def get_entity(self, entity_type: EntityType, entity_id: UUID) -> Entity | None:
        """Return an entity by id, if present."""

    def get_entity_by_slug(self, entity_type: EntityType, slug: str) -> Entity | None:
        """Return an entity by slug, if present."""

    def list_entities(
        self,
        entity_type: EntityType,
        published_only: bool,
        limit: int | None,
        offset: int,
        filters: dict[str, str] | None = None,
    ) -> list[Entity]:
        """Return entities newest first, keeping rows equal to every filter."""


@dataclass
class EntityService:
    """Validates, stamps and persists entity mutations."""

    repository: EntityRepository

    def create(
        self, entity_type: EntityType, fields: dict[str, object], actor: Actor
    ) -> Entity:
        """Create an entity attributed to the actor."""
        spec = spec_for(entity_type)
        payload = dict(fields)
        published = _pop_published(spec, payload)
        _reject_system_columns(payload)
        row = _validate(spec, payload)
        if spec.publishable:
            row["published"] = bool(published)
        now = datetime.now(tz=UTC).isoformat()
        row.update(
            {
                "created_at": now,
                "updated_at": now,
                "created_by": str(actor.id),
                "updated_by": str(actor.id),
            }
        )
        entity = self.repository.create_entity(entity_type, row)
        _logger.info("Created %s %s", entity_type.value, entity.id)
        return entity

    def update(
        self,
        entity_type: EntityType,
        entity_id: UUID,
        fields: dict[str, object],
        actor: Actor,
    ) -> Entity:
        """Merge fields into an existing entity and return the new state."""
        return self.modify(entity_type, entity_id, fields, actor).after

    def set_published(
        self, entity_type: EntityType, entity_id: UUID, published: bool, actor: Actor
    ) -> Entity:
        """Change only the publish state of an entity."""
        return self.modify(
            entity_type, entity_id, {"published": published}, actor
        ).after

    def modify(
        self,
        entity_type: EntityType,
        entity_id: UUID,
        fields: dict[str, object],
        actor: Actor,
    ) -> EntityChange:
        """Apply an update and return the entity state before and after it.

        The merged row is re-validated against the variant schema, so partial
        updates cannot leave an entity without its required fields.
        """
        spec = spec_for(entity_type)
        current = self.get(entity_type, entity_id)
        changes = dict(fields)
        published = _pop_published(spec, changes)
        _reject_system_columns(changes)

        payload: dict[str, object] = {}
        if changes:
            merged = _validate(spec, {**current.fields, **changes})
            if (
                spec.has_slug
                and current.published
                and merged.get("slug") != current.slug
            ):
                raise ValidationError("Slug cannot change once published")
            payload = {key: merged[key] for key in changes}
        if published is not None:
            payload["published"] = published
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        payload["updated_by"] = str(actor.id)

        updated = self.repository.update_entity(entity_type, entity_id, payload)
        if updated is None:
            raise _not_found(entity_type, entity_id)
        _logger.info("Updated %s %s", entity_type.value, entity_id)
        return EntityChange(before=current, after=updated)

    def delete(self, entity_type: EntityType, entity_id: UUID) -> Entity:
        """Hard-delete an entity and return the removed row."""
        deleted = self.repository.delete_entity(entity_type, entity_id)
        if deleted is None:
            raise _not_found(entity_type, entity_id)
        _logger.info("Deleted %s %s", entity_type.value, entity_id)
        return deleted

    def get(self, entity_type: EntityType, entity_id: UUID) -> Entity:
        entity = self.repository.get_entity(entity_type, entity_id)
        if entity is None:
            raise _not_found(entity_type, entity_id)
        return entity

    def get_by_slug(self, entity_type: EntityType, slug: str) -> Entity:
        """Return an entity by its slug."""
        if not spec_for(entity_type).has_slug:
            raise ValidationError(f"{entity_type.value} entities have no slug")
        entity = self.repository.get_entity_by_slug(entity_type, slug)
        if entity is None:
            raise NotFoundError(f"{entity_type.value} '{slug}' not found")
        return entity

    def list(  # noqa: PLR0913
        self,
        entity_type: EntityType,
        include_unpublished: bool = False,
        limit: int | None = None,
        offset: int = 0,
        status: str | None = None,
        client_id: UUID | None = None,
    ) -> list[Entity]:
        """List entities newest first, hiding drafts unless asked.

        ``status`` and ``client_id`` narrow the workflow collections (tasks
        and requests) that carry those attributes.
        """
        if limit is not None and limit < 1:
            raise ValidationError("limit must be positive")
        if offset < 0:
            raise ValidationError("offset must not be negative")
        spec = spec_for(entity_type)
        published_only = spec.publishable and not include_unpublished
        return self.repository.list_entities(
            entity_type,
            published_only=published_only,
            limit=limit,
            offset=offset,
            filters=_list_filters(spec, status, client_id),
        )


def _pop_published(spec: EntitySpec, payload: dict[str, object]) -> bool | None:
    if "published" not in payload:
        return None
    value = payload.pop("published")
    if not spec.publishable:
        raise ValidationError(
            f"{spec.entity_type.value} entities have no publish workflow"
        )
    if not isinstance(value, bool):
        raise ValidationError("published must be a boolean")
    return value


def _list_filters(
    spec: EntitySpec, status: str | None, client_id: UUID | None
) -> dict[str, str]:
    filters: dict[str, str] = {}
    name = spec.entity_type.value
    if status is not None:
        if not spec.statuses:
            raise ValidationError(f"{name} entities have no status")
        if status not in spec.statuses:
            raise ValidationError(
                f"Unknown {name} status '{status}'; "
                f"expected one of: {', '.join(spec.statuses)}"
            )
        filters["status"] = status
    if client_id is not None:
        if not spec.has_field("client_id"):
            raise ValidationError(f"{name} entities have no client")
        filters["client_id"] = str(client_id)
    return filters


def _reject_system_columns(payload: dict[str, object]) -> None:
    managed = sorted(SYSTEM_COLUMNS.intersection(payload))
    if managed:
        raise ValidationError(f"Fields are managed by the store: {', '.join(managed)}")


def _validate(spec: EntitySpec, payload: dict[str, object]) -> dict[str, object]:
    try:
        model = spec.fields_model.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(_describe(spec, exc)) from exc
    return model.model_dump(mode="json")


def _describe(spec: EntitySpec, exc: pydantic.ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "fields"
        problems.append(f"{location}: {error['msg']}")
    return f"Invalid {spec.entity_type.value}: " + "; ".join(problems)


def _not_found(entity_type: EntityType, entity_id: UUID) -> NotFoundError:
    return NotFoundError(f"{entity_type.value} {entity_id} not found")
