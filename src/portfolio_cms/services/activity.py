"""Append-only activity log."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from portfolio_cms.domain.activity import ActivityRecord, NewActivity
from portfolio_cms.domain.entities import EntityType
from portfolio_cms.domain.identity import Actor
from portfolio_cms.errors import ValidationError
from portfolio_cms.services.identity import ActorDirectory

_logger = logging.getLogger(__name__)


class ActivityLogRepository(Protocol):
    """Persistence interface for activity records.

    Records are append-only; there is no update or delete.
    """

    def append_record(self, activity: NewActivity) -> ActivityRecord:
        """Insert a record and return it with its id and timestamp."""

    def list_records(
        self, limit: int, entity_type: EntityType | None
    ) -> list[ActivityRecord]:
        """Return the most recent records, optionally for one collection."""

    def list_records_for_entity(
        self, entity_type: EntityType, entity_id: UUID
    ) -> list[ActivityRecord]:
        """Return every record that references one entity, newest first."""


@dataclass
class ActivityLogService:
    """Service for appending and reading activity records."""

    repository: ActivityLogRepository
    actor_directory: ActorDirectory
    default_limit: int = 50

    def append(self, activity: NewActivity) -> ActivityRecord:
        """Append a record for a completed mutation."""
        record = self.repository.append_record(activity)
        _logger.info(
            "Recorded %s on %s %s",
            activity.action.value,
            activity.entity_type.value,
            activity.entity_id,
        )
        return record

    def list(
        self, limit: int | None = None, entity_type: EntityType | None = None
    ) -> list[ActivityRecord]:
        """Return recent records with actor details attached."""
        resolved_limit = self.default_limit if limit is None else limit
        if resolved_limit < 1:
            raise ValidationError("limit must be positive")
        records = self.repository.list_records(resolved_limit, entity_type)
        return self._with_actors(records)

    def list_by_entity(
        self, entity_type: EntityType, entity_id: UUID
    ) -> list[ActivityRecord]:
        """Return the full history of one entity, newest first."""
        records = self.repository.list_records_for_entity(entity_type, entity_id)
        return self._with_actors(records)

    def _with_actors(self, records: list[ActivityRecord]) -> list[ActivityRecord]:
        actor_ids = {record.actor_id for record in records if record.actor_id}
        if not actor_ids:
            return records
        actors: dict[UUID, Actor] = {}
        try:
            actors = self.actor_directory.get_actors(actor_ids)
        except Exception:
            _logger.warning(
                "Actor lookup failed for %s activity records",
                len(records),
                exc_info=True,
            )
        return [
            replace(record, actor=actors.get(record.actor_id))
            if record.actor_id
            else record
            for record in records
        ]
