"""Domain models for the activity log."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from portfolio_cms.domain.entities import EntityType
from portfolio_cms.domain.identity import Actor


class ActivityAction(str, Enum):
    """Kinds of recorded mutations."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    PUBLISH = "publish"
    UNPUBLISH = "unpublish"


@dataclass(frozen=True)
class NewActivity:
    """Activity record contents before the store assigns id and timestamp."""

    action: ActivityAction
    entity_type: EntityType
    entity_id: UUID
    entity_name: str
    actor_id: UUID
    changes: dict[str, object] | None = None


@dataclass(frozen=True)
class ActivityRecord:
    """An appended, immutable activity log record."""

    id: UUID
    action: ActivityAction
    entity_type: EntityType
    entity_id: UUID
    entity_name: str
    changes: dict[str, object] | None
    actor_id: UUID | None
    created_at: datetime
    actor: Actor | None = None
