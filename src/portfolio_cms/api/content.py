"""Content endpoints backed by the audited mutation facade."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from portfolio_cms.api.dependencies import optional_actor, require_editor
from portfolio_cms.api.models import EntityCreateRequest, EntityUpdateRequest
from portfolio_cms.api.serializers import serialize_entity, serialize_result
from portfolio_cms.domain.entities import EntityType, spec_for
from portfolio_cms.domain.identity import Actor, UserRole
from portfolio_cms.services.identity import IdentityProvider

if TYPE_CHECKING:
    from portfolio_cms.containers import AppContainer

router = APIRouter(prefix="/content", tags=["content"])

_EDITOR_ROLES = {UserRole.ADMIN, UserRole.STAFF}


def _deny(actor: Actor | None) -> HTTPException:
    if actor is None:
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN)


def _listing_client(
    entity_type: EntityType,
    actor: Actor | None,
    include_unpublished: bool,
    client_id: UUID | None,
) -> UUID | None:
    """Check read access to a collection and return the client scope.

    Drafts and workflow collections are for editors. Clients may read only
    their own requests.
    """
    is_editor = actor is not None and actor.role in _EDITOR_ROLES
    if is_editor:
        return client_id
    if include_unpublished or spec_for(entity_type).statuses:
        own_requests = (
            actor is not None
            and actor.role == UserRole.CLIENT
            and entity_type == EntityType.REQUEST
            and client_id in (None, actor.id)
        )
        if not own_requests:
            raise _deny(actor)
        return actor.id
    return client_id


@router.get("/{entity_type}")
async def list_entities(  # noqa: PLR0913
    entity_type: EntityType,
    request: Request,
    include_unpublished: bool = False,
    limit: int | None = Query(default=None, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    status_filter: str | None = Query(default=None, alias="status"),
    client_id: UUID | None = None,
    actor: Actor | None = Depends(optional_actor),
) -> dict[str, object]:
    """List entities; drafts and workflow items are visible to editors only."""
    scope = _listing_client(entity_type, actor, include_unpublished, client_id)
    container: AppContainer = request.app.state.container
    entities = container.query_service.list_entities(
        entity_type,
        include_unpublished=include_unpublished,
        limit=limit,
        offset=offset,
        status=status_filter,
        client_id=scope,
    )
    return {"items": [serialize_entity(entity) for entity in entities]}


@router.get("/{entity_type}/status-summary")
async def status_summary(
    entity_type: EntityType,
    request: Request,
    client_id: UUID | None = None,
    actor: Actor | None = Depends(optional_actor),
) -> dict[str, object]:
    """Return per-status counts for tasks or requests."""
    scope = _listing_client(entity_type, actor, False, client_id)
    container: AppContainer = request.app.state.container
    summary = container.query_service.status_summary(entity_type, client_id=scope)
    return {"total": summary.total, "by_status": summary.by_status}


@router.get("/{entity_type}/summary", dependencies=[Depends(require_editor)])
async def publish_summary(entity_type: EntityType, request: Request) -> dict[str, int]:
    """Return published and draft counts for a collection."""
    container: AppContainer = request.app.state.container
    summary = container.query_service.publish_summary(entity_type)
    return {
        "total": summary.total,
        "published": summary.published,
        "drafts": summary.drafts,
    }


@router.get("/{entity_type}/slug/{slug}")
async def get_by_slug(
    entity_type: EntityType, slug: str, request: Request
) -> dict[str, object]:
    """Return a published entity by slug."""
    container: AppContainer = request.app.state.container
    entity = container.query_service.get_published_by_slug(entity_type, slug)
    return serialize_entity(entity)


@router.get("/{entity_type}/{entity_id}", dependencies=[Depends(require_editor)])
async def get_entity(
    entity_type: EntityType, entity_id: UUID, request: Request
) -> dict[str, object]:
    """Return any entity by id, drafts included."""
    container: AppContainer = request.app.state.container
    return serialize_entity(container.query_service.get_entity(entity_type, entity_id))


@router.post("/{entity_type}", status_code=status.HTTP_201_CREATED)
async def create_entity(
    entity_type: EntityType,
    payload: EntityCreateRequest,
    request: Request,
    identity: IdentityProvider = Depends(require_editor),
) -> dict[str, object]:
    """Create an entity and record the activity."""
    container: AppContainer = request.app.state.container
    result = container.mutation_service.create(identity, entity_type, payload.fields)
    return serialize_result(result)


@router.patch("/{entity_type}/{entity_id}")
async def update_entity(
    entity_type: EntityType,
    entity_id: UUID,
    payload: EntityUpdateRequest,
    request: Request,
    identity: IdentityProvider = Depends(require_editor),
) -> dict[str, object]:
    """Update an entity and record the activity."""
    container: AppContainer = request.app.state.container
    result = container.mutation_service.update(
        identity, entity_type, entity_id, payload.fields, before=payload.before
    )
    return serialize_result(result)


@router.post("/{entity_type}/{entity_id}/publish")
async def publish_entity(
    entity_type: EntityType,
    entity_id: UUID,
    request: Request,
    identity: IdentityProvider = Depends(require_editor),
) -> dict[str, object]:
    """Publish an entity."""
    container: AppContainer = request.app.state.container
    result = container.mutation_service.set_published(
        identity, entity_type, entity_id, published=True
    )
    return serialize_result(result)


@router.post("/{entity_type}/{entity_id}/unpublish")
async def unpublish_entity(
    entity_type: EntityType,
    entity_id: UUID,
    request: Request,
    identity: IdentityProvider = Depends(require_editor),
) -> dict[str, object]:
    """Return an entity to draft."""
    container: AppContainer = request.app.state.container
    result = container.mutation_service.set_published(
        identity, entity_type, entity_id, published=False
    )
    return serialize_result(result)


@router.delete("/{entity_type}/{entity_id}")
async def delete_entity(
    entity_type: EntityType,
    entity_id: UUID,
    request: Request,
    identity: IdentityProvider = Depends(require_editor),
) -> dict[str, object]:
    """Delete an entity; its activity history is kept."""
    container: AppContainer = request.app.state.container
    result = container.mutation_service.delete(identity, entity_type, entity_id)
    return serialize_result(result)
