"""Mutate-then-log facade over the entity service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from pydantic import TypeAdapter

from portfolio_cms.domain.activity import ActivityAction, ActivityRecord, NewActivity
from portfolio_cms.domain.entities import Entity, EntityChange, EntityType
from portfolio_cms.domain.identity import Actor
from portfolio_cms.errors import AuditWriteError, AuthenticationError
from portfolio_cms.services.activity import ActivityLogService
from portfolio_cms.services.entities import EntityService
from portfolio_cms.services.identity import IdentityProvider

_logger = logging.getLogger(__name__)

AuditFailureHandler = Callable[[AuditWriteError], None]

_SNAPSHOT = TypeAdapter(dict[str, Any])


@dataclass(frozen=True)
class MutationResult:
    """Outcome of an audited mutation.

    ``audit_error`` is set when the mutation succeeded but its activity
    record could not be written.
    """

    entity: Entity
    action: ActivityAction
    record: ActivityRecord | None = None
    audit_error: AuditWriteError | None = None

    @property
    def audited(self) -> bool:
        return self.audit_error is None


@dataclass
class AuditedMutationService:
    """Performs entity mutations and records one activity entry for each."""

    entity_service: EntityService
    activity_log: ActivityLogService
    on_audit_failure: AuditFailureHandler | None = None

    def create(
        self,
        identity: IdentityProvider,
        entity_type: EntityType,
        fields: dict[str, object],
    ) -> MutationResult:
        """Create an entity and record a ``create`` entry."""
        actor = _require_actor(identity)
        entity = self.entity_service.create(entity_type, fields, actor)
        return self._record(entity, ActivityAction.CREATE, actor)

    def update(  # noqa: PLR0913
        self,
        identity: IdentityProvider,
        entity_type: EntityType,
        entity_id: UUID,
        fields: dict[str, object],
        before: dict[str, object] | None = None,
    ) -> MutationResult:
        """Update an entity; ``before`` is stored as the prior snapshot."""
        actor = _require_actor(identity)
        change = self.entity_service.modify(entity_type, entity_id, fields, actor)
        changes = None
        if before is not None:
            after = change.after.snapshot()
            changes = {
                "before": _SNAPSHOT.dump_python(before, mode="json"),
                "after": {key: after.get(key) for key in fields},
            }
        return self._record(change.after, derive_action(change), actor, changes)

    def set_published(
        self,
        identity: IdentityProvider,
        entity_type: EntityType,
        entity_id: UUID,
        published: bool,
    ) -> MutationResult:
        """Publish or unpublish an entity."""
        actor = _require_actor(identity)
        entity = self.entity_service.set_published(
            entity_type, entity_id, published, actor
        )
        action = ActivityAction.PUBLISH if published else ActivityAction.UNPUBLISH
        return self._record(entity, action, actor)

    def delete(
        self, identity: IdentityProvider, entity_type: EntityType, entity_id: UUID
    ) -> MutationResult:
        """Delete an entity; the record keeps its last display name."""
        actor = _require_actor(identity)
        entity = self.entity_service.delete(entity_type, entity_id)
        return self._record(entity, ActivityAction.DELETE, actor)

    def _record(
        self,
        entity: Entity,
        action: ActivityAction,
        actor: Actor,
        changes: dict[str, object] | None = None,
    ) -> MutationResult:
        activity = NewActivity(
            action=action,
            entity_type=entity.entity_type,
            entity_id=entity.id,
            entity_name=entity.display_name,
            actor_id=actor.id,
            changes=changes,
        )
        try:
            record = self.activity_log.append(activity)
        except Exception as exc:
            error = AuditWriteError(activity, exc)
            _logger.warning("Audit trail gap: %s", error.message, exc_info=exc)
            self._report(error)
            return MutationResult(entity=entity, action=action, audit_error=error)
        return MutationResult(entity=entity, action=action, record=record)

    def _report(self, error: AuditWriteError) -> None:
        if self.on_audit_failure is None:
            return
        try:
            self.on_audit_failure(error)
        except Exception:
            _logger.warning("Audit failure handler raised", exc_info=True)


def derive_action(change: EntityChange) -> ActivityAction:
    """Classify an update by how it moved the publish state."""
    before, after = change.before.published, change.after.published
    if before is False and after is True:
        return ActivityAction.PUBLISH
    if before is True and after is False:
        return ActivityAction.UNPUBLISH
    return ActivityAction.UPDATE


def _require_actor(identity: IdentityProvider) -> Actor:
    actor = identity.current_actor()
    if actor is None:
        raise AuthenticationError("Authentication required to modify content")
    return actor
