"""Request-scoped identity dependencies."""

from collections.abc import Awaitable, Callable

from fastapi import Depends, Header, HTTPException, Request, status

from portfolio_cms.domain.identity import Actor, UserRole
from portfolio_cms.services.identity import IdentityProvider, StaticIdentity


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def optional_actor(
    request: Request, authorization: str | None = Header(default=None)
) -> Actor | None:
    """Resolve the caller, or None for anonymous requests."""
    container = request.app.state.container
    identity = container.identity_factory(bearer_token(authorization))
    return identity.current_actor()


def require_roles(
    *roles: UserRole,
) -> Callable[..., Awaitable[IdentityProvider]]:
    """Build a dependency that admits only actors holding one of the roles."""

    async def dependency(
        actor: Actor | None = Depends(optional_actor),
    ) -> IdentityProvider:
        if actor is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                headers={"WWW-Authenticate": "Bearer"},
            )
        if actor.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
        return StaticIdentity(actor)

    return dependency


require_editor = require_roles(UserRole.ADMIN, UserRole.STAFF)
require_admin = require_roles(UserRole.ADMIN)
