"""Error taxonomy for content store operations."""

from portfolio_cms.domain.activity import NewActivity


class ContentStoreError(Exception):
    """Base error for content store operations."""

    def __init__(self, message: str = "Content store error") -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ContentStoreError):
    """Raised when entity fields are missing, unknown or malformed."""


class ConflictError(ContentStoreError):
    """Raised when a uniqueness constraint (such as slug) is violated."""


class NotFoundError(ContentStoreError):
    """Raised when an operation references a missing entity."""


class AuthenticationError(ContentStoreError):
    """Raised when no caller identity can be resolved for a mutation."""


class AuditWriteError(ContentStoreError):
    """An activity record could not be written after a successful mutation.

    This error is never raised to callers of the mutation facade. It is
    attached to the mutation result so that audit-trail gaps stay visible
    while the content edit itself succeeds.
    """

    def __init__(self, activity: NewActivity, cause: BaseException) -> None:
        self.activity = activity
        self.cause = cause
        super().__init__(
            f"Failed to record {activity.action.value} activity for "
            f"{activity.entity_type.value} {activity.entity_id}: {cause}"
        )
