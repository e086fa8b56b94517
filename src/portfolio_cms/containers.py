"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from supabase import create_client

from portfolio_cms.adapters.supabase_activity_log_repository import (
    SupabaseActivityLogRepository,
)
from portfolio_cms.adapters.supabase_entity_repository import SupabaseEntityRepository
from portfolio_cms.adapters.supabase_identity import (
    SupabaseActorDirectory,
    SupabaseTokenIdentity,
)
from portfolio_cms.config import Settings
from portfolio_cms.services.activity import ActivityLogService
from portfolio_cms.services.audited import AuditedMutationService
from portfolio_cms.services.entities import EntityService
from portfolio_cms.services.identity import IdentityProvider
from portfolio_cms.services.queries import ContentQueryService

IdentityFactory = Callable[[str | None], IdentityProvider]


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    entity_service: EntityService
    activity_log_service: ActivityLogService
    mutation_service: AuditedMutationService
    query_service: ContentQueryService
    identity_factory: IdentityFactory


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    actor_directory = SupabaseActorDirectory(supabase_client)
    entity_service = EntityService(SupabaseEntityRepository(supabase_client))
    activity_log_service = ActivityLogService(
        repository=SupabaseActivityLogRepository(supabase_client),
        actor_directory=actor_directory,
        default_limit=resolved_settings.activity_log_limit,
    )
    mutation_service = AuditedMutationService(
        entity_service=entity_service,
        activity_log=activity_log_service,
    )
    query_service = ContentQueryService(
        entity_service=entity_service,
        activity_log=activity_log_service,
    )

    def identity_factory(access_token: str | None) -> IdentityProvider:
        return SupabaseTokenIdentity(
            client=supabase_client,
            directory=actor_directory,
            access_token=access_token,
        )

    return AppContainer(
        settings=resolved_settings,
        entity_service=entity_service,
        activity_log_service=activity_log_service,
        mutation_service=mutation_service,
        query_service=query_service,
        identity_factory=identity_factory,
    )
