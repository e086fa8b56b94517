"""Identity models for authenticated callers."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """Dashboard roles."""

    ADMIN = "admin"
    STAFF = "staff"
    CLIENT = "client"


@dataclass(frozen=True)
class Actor:
    """An authenticated identity attributed to mutations and log records."""

    id: UUID
    display_name: str | None
    email: str | None
    role: UserRole | None
