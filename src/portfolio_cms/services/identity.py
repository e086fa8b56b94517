"""Caller identity resolution."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from portfolio_cms.domain.identity import Actor


class IdentityProvider(Protocol):
    """Resolves the identity behind the current call."""

    def current_actor(self) -> Actor | None:
        """Return the calling actor, or None for anonymous calls."""


class ActorDirectory(Protocol):
    """Lookup of actor display details by id."""

    def get_actors(self, actor_ids: set[UUID]) -> dict[UUID, Actor]:
        """Return known actors keyed by id; unknown ids are omitted."""


@dataclass(frozen=True)
class StaticIdentity(IdentityProvider):
    """Identity that was resolved ahead of time."""

    actor: Actor | None

    def current_actor(self) -> Actor | None:
        return self.actor
