"""Supabase implementation for entity collections."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client, PostgrestAPIError

from portfolio_cms.domain.entities import Entity, EntityType, spec_for
from portfolio_cms.errors import ConflictError
from portfolio_cms.services.entities import EntityRepository

_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseEntityRepository(EntityRepository):
    """Supabase-backed repository; one table per entity type."""

    client: Client

    def create_entity(self, entity_type: EntityType, row: dict[str, object]) -> Entity:
        """Insert a row and return the stored entity."""
        table = spec_for(entity_type).table
        try:
            response = self.client.table(table).insert(row).execute()
        except PostgrestAPIError as exc:
            _raise_conflict(exc, entity_type)
            raise
        if not response.data:
            raise RuntimeError(f"Failed to create {entity_type.value}")
        return _parse_entity(entity_type, response.data[0])

    def update_entity(
        self, entity_type: EntityType, entity_id: UUID, changes: dict[str, object]
    ) -> Entity | None:
        """Apply changes to a row and return it, or None when absent."""
        table = spec_for(entity_type).table
        try:
            response = (
                self.client.table(table)
                .update(changes)
                .eq("id", str(entity_id))
                .execute()
            )
        except PostgrestAPIError as exc:
            _raise_conflict(exc, entity_type)
            raise
        if not response.data:
            return None
        return _parse_entity(entity_type, response.data[0])

    def delete_entity(self, entity_type: EntityType, entity_id: UUID) -> Entity | None:
        """Delete a row and return its last state, or None when absent."""
        response = (
            self.client.table(spec_for(entity_type).table)
            .delete()
            .eq("id", str(entity_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_entity(entity_type, response.data[0])

    def get_entity(self, entity_type: EntityType, entity_id: UUID) -> Entity | None:
        """Return an entity by id, if present."""
        response = (
            self.client.table(spec_for(entity_type).table)
            .select("*")
            .eq("id", str(entity_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entity(entity_type, response.data[0])

    def get_entity_by_slug(self, entity_type: EntityType, slug: str) -> Entity | None:
        """Return an entity by slug, if present."""
        response = (
            self.client.table(spec_for(entity_type).table)
            .select("*")
            .eq("slug", slug)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entity(entity_type, response.data[0])

    def list_entities(
        self,
        entity_type: EntityType,
        published_only: bool,
        limit: int | None,
        offset: int,
        filters: dict[str, str] | None = None,
    ) -> list[Entity]:
        """Return entities ordered by creation time, newest first."""
        query = (
            self.client.table(spec_for(entity_type).table)
            .select("*")
            .order("created_at", desc=True)
        )
        if published_only:
            query = query.eq("published", True)
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        if limit is not None:
            query = query.range(offset, offset + limit - 1)
        rows = query.execute().data or []
        if limit is None and offset:
            rows = rows[offset:]
        return [_parse_entity(entity_type, row) for row in rows]


def _raise_conflict(exc: PostgrestAPIError, entity_type: EntityType) -> None:
    """Translate unique violations into ConflictError."""
    if exc.code == _UNIQUE_VIOLATION:
        raise ConflictError(
            f"A {entity_type.value} with this slug already exists"
        ) from exc


def _parse_entity(entity_type: EntityType, row: dict[str, object]) -> Entity:
    """Parse a table row into a domain entity."""
    spec = spec_for(entity_type)
    fields = spec.row_fields(row)
    return Entity(
        id=UUID(str(row["id"])),
        entity_type=entity_type,
        fields=fields,
        published=bool(row.get("published", False)) if spec.publishable else None,
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=datetime.fromisoformat(
            str(row.get("updated_at") or row["created_at"])
        ),
        created_by=UUID(str(row["created_by"])) if row.get("created_by") else None,
        updated_by=UUID(str(row["updated_by"])) if row.get("updated_by") else None,
    )
