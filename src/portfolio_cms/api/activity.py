"""Activity log endpoints for administrators."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request

from portfolio_cms.api.dependencies import require_admin
from portfolio_cms.api.serializers import serialize_record
from portfolio_cms.domain.entities import EntityType

if TYPE_CHECKING:
    from portfolio_cms.containers import AppContainer

router = APIRouter(
    prefix="/activity", tags=["activity"], dependencies=[Depends(require_admin)]
)


@router.get("")
async def list_activity(
    request: Request,
    limit: int | None = Query(default=None, ge=1, le=500),
    entity_type: EntityType | None = None,
) -> dict[str, object]:
    """Return recent activity, optionally for one collection."""
    container: AppContainer = request.app.state.container
    records = container.query_service.list_activity(
        limit=limit, entity_type=entity_type
    )
    return {"logs": [serialize_record(record) for record in records]}


@router.get("/summary")
async def activity_summary(
    request: Request, limit: int | None = Query(default=None, ge=1, le=500)
) -> dict[str, int]:
    """Count recent activity per action."""
    container: AppContainer = request.app.state.container
    counts = container.query_service.activity_summary(limit=limit)
    return {action.value: count for action, count in counts.items()}


@router.get("/{entity_type}/{entity_id}")
async def entity_history(
    entity_type: EntityType, entity_id: UUID, request: Request
) -> dict[str, object]:
    """Return the full history of one entity."""
    container: AppContainer = request.app.state.container
    records = container.query_service.entity_history(entity_type, entity_id)
    return {"logs": [serialize_record(record) for record in records]}
