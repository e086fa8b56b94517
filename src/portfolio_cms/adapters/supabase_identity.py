"""Supabase Auth and profile lookups."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import AuthApiError, Client

from portfolio_cms.domain.identity import Actor, UserRole
from portfolio_cms.services.identity import ActorDirectory, IdentityProvider

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseActorDirectory(ActorDirectory):
    """Reads actor details from the profiles table."""

    client: Client

    def get_actors(self, actor_ids: set[UUID]) -> dict[UUID, Actor]:
        """Return profiles for the given ids."""
        if not actor_ids:
            return {}
        response = (
            self.client.table("profiles")
            .select("id, full_name, email, role")
            .in_("id", sorted(str(actor_id) for actor_id in actor_ids))
            .execute()
        )
        actors = {}
        for row in response.data or []:
            actor = _parse_actor(row)
            actors[actor.id] = actor
        return actors


@dataclass
class SupabaseTokenIdentity(IdentityProvider):
    """Resolves a Supabase access token to an actor."""

    client: Client
    directory: ActorDirectory
    access_token: str | None

    def current_actor(self) -> Actor | None:
        """Return the actor behind the access token, if it is valid."""
        if not self.access_token:
            return None
        try:
            response = self.client.auth.get_user(self.access_token)
        except AuthApiError as exc:
            _logger.info("Rejected access token: %s", exc.message)
            return None
        if response is None or response.user is None:
            return None
        actor_id = UUID(str(response.user.id))
        try:
            profile = self.directory.get_actors({actor_id}).get(actor_id)
        except Exception:
            _logger.warning("Profile lookup failed for %s", actor_id, exc_info=True)
            profile = None
        if profile is not None:
            return profile
        return Actor(
            id=actor_id,
            display_name=None,
            email=response.user.email,
            role=None,
        )


def _parse_actor(row: dict[str, object]) -> Actor:
    role = row.get("role")
    return Actor(
        id=UUID(str(row["id"])),
        display_name=row.get("full_name"),
        email=row.get("email"),
        role=UserRole(role) if role in {item.value for item in UserRole} else None,
    )
