"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ConflictError(Exception):
    """Raised when a change would leave the data in an invalid shared state."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BusinessRuleViolationError(Exception):
    """Raised when a change is well-formed but breaks a diary business rule."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PermissionDeniedError(Exception):
    """Raised when the acting staff member lacks the required role."""

    def __init__(self, message: str = "Forbidden - Insufficient permissions"):
        self.message = message
        super().__init__(message)


# ── Remote editing errors (raised by the API client) ─────────────────


class UnauthorizedError(Exception):
    """Raised when the session is missing or expired (HTTP 401)."""

    def __init__(self, message: str = "Unauthorized - Please sign in"):
        self.message = message
        super().__init__(message)


class RecordFetchError(Exception):
    """Raised when a record cannot be fetched from the server."""

    def __init__(self, record_id: str, reason: str, status_code: int | None = None):
        self.record_id = record_id
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Could not load record '{record_id}': {reason}")


class CommitRejectedError(Exception):
    """Raised when the server declines a commit (validation or business rule).

    The message is the server's human-readable reason and is meant to be
    shown to the user as-is.
    """

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class TransientNetworkError(Exception):
    """Raised on transport failures and 5xx responses — safe to retry."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
