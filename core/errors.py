"""
Domain errors raised by the profile store and its boundary.

HTTP mapping lives in backend.app.error_handlers.
"""


class ProfileError(Exception):
    """Base class for profile domain errors."""

    message = "Profile error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ProfileNotFound(ProfileError):
    """No profile exists for the requested owner."""

    message = "There is no profile for this user"

    def __init__(self, owner_id: int | str | None = None, message: str | None = None):
        self.owner_id = owner_id
        super().__init__(message)


class InvalidReference(ProfileNotFound):
    """
    An externally supplied owner identifier is not a valid reference.

    Subclasses ProfileNotFound so the boundary answers both the same way;
    logs keep them apart.
    """

    def __init__(self, raw_id: str):
        self.raw_id = raw_id
        super().__init__(owner_id=None)


class RecordNotFound(ProfileError):
    """A ledger has no record with the requested id."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} record not found")


class StoreFailure(ProfileError):
    """The persistence layer failed; details are logged, never returned."""

    message = "Internal server error"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__()


class ValidationFailed(ProfileError):
    """One or more required request fields are missing or blank."""

    message = "Validation failed"

    def __init__(self, errors: list[dict]):
        self.errors = errors
        super().__init__()


__all__ = [
    "ProfileError",
    "ProfileNotFound",
    "InvalidReference",
    "RecordNotFound",
    "StoreFailure",
    "ValidationFailed",
]
