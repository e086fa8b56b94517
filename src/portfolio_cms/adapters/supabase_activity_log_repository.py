"""Supabase repository for activity log records."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from portfolio_cms.domain.activity import ActivityAction, ActivityRecord, NewActivity
from portfolio_cms.domain.entities import EntityType
from portfolio_cms.services.activity import ActivityLogRepository


@dataclass
class SupabaseActivityLogRepository(ActivityLogRepository):
    """Supabase-backed activity log."""

    client: Client

    def append_record(self, activity: NewActivity) -> ActivityRecord:
        """Insert an activity row and return it."""
        response = (
            self.client.table("activity_logs")
            .insert(
                {
                    "action": activity.action.value,
                    "entity_type": activity.entity_type.value,
                    "entity_id": str(activity.entity_id),
                    "entity_name": activity.entity_name,
                    "changes": activity.changes,
                    "user_id": str(activity.actor_id),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to record activity")
        return _parse_record(response.data[0])

    def list_records(
        self, limit: int, entity_type: EntityType | None
    ) -> list[ActivityRecord]:
        """Return the most recent records."""
        query = (
            self.client.table("activity_logs")
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
        )
        if entity_type is not None:
            query = query.eq("entity_type", entity_type.value)
        response = query.execute()
        return [_parse_record(row) for row in response.data or []]

    def list_records_for_entity(
        self, entity_type: EntityType, entity_id: UUID
    ) -> list[ActivityRecord]:
        """Return the records for one entity, newest first."""
        response = (
            self.client.table("activity_logs")
            .select("*")
            .eq("entity_type", entity_type.value)
            .eq("entity_id", str(entity_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_record(row) for row in response.data or []]


def _parse_record(row: dict[str, object]) -> ActivityRecord:
    user_id = row.get("user_id")
    return ActivityRecord(
        id=UUID(str(row["id"])),
        action=ActivityAction(row["action"]),
        entity_type=EntityType(row["entity_type"]),
        entity_id=UUID(str(row["entity_id"])),
        entity_name=str(row.get("entity_name") or ""),
        changes=row.get("changes"),
        actor_id=UUID(str(user_id)) if user_id else None,
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
