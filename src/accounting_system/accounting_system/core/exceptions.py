class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ReferentialIntegrityError(DomainError):
    """Raised when a row cannot be removed because other rows depend on it."""

    status_code = 409


class InvalidTransitionError(DomainError):
    """Raised when a voucher status change is not allowed from its current state."""

    status_code = 409


class RecordLockedError(DomainError):
    """Raised when a completed/void voucher or a finalized payroll line would be edited."""

    status_code = 409


class StoreUnavailableError(DomainError):
    """Raised when a write is attempted without a configured database."""

    status_code = 503


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or no session is present."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403
