"""JSON views of domain objects."""

from portfolio_cms.domain.activity import ActivityRecord
from portfolio_cms.domain.entities import Entity
from portfolio_cms.services.audited import MutationResult


def serialize_entity(entity: Entity) -> dict[str, object]:
    return {"entity_type": entity.entity_type.value, **entity.snapshot()}


def serialize_result(result: MutationResult) -> dict[str, object]:
    return {
        "entity": serialize_entity(result.entity),
        "action": result.action.value,
        "activity_id": str(result.record.id) if result.record else None,
        "audited": result.audited,
        "audit_error": result.audit_error.message if result.audit_error else None,
    }


def serialize_record(record: ActivityRecord) -> dict[str, object]:
    actor = record.actor
    return {
        "id": str(record.id),
        "action": record.action.value,
        "entity_type": record.entity_type.value,
        "entity_id": str(record.entity_id),
        "entity_name": record.entity_name,
        "changes": record.changes,
        "created_at": record.created_at.isoformat(),
        "user_id": str(record.actor_id) if record.actor_id else None,
        "user": {
            "full_name": actor.display_name,
            "email": actor.email,
            "role": actor.role.value if actor.role else None,
        }
        if actor
        else None,
    }
