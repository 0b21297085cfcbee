class DomainError(Exception):
    """Base exception for business rule violations.

    ``code`` is a stable identifier the calling layer can switch on;
    the message is meant for humans.
    """

    code = "domain_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"


class InvalidLocation(ValidationError):
    """Raised when a punch does not carry a coordinate pair."""

    code = "invalid_location"


class InsufficientBalance(ValidationError):
    code = "insufficient_balance"


class NotFound(DomainError):
    """Raised when a referenced employee, request or record does not exist."""

    code = "not_found"


class ConflictError(DomainError):
    """Raised when an operation collides with state that already exists."""

    code = "conflict"


class AlreadyExists(ConflictError):
    code = "already_exists"


class AlreadyCheckedIn(ConflictError):
    code = "already_checked_in"


class AlreadyCheckedOut(ConflictError):
    code = "already_checked_out"


class NoCheckInFound(DomainError):
    code = "no_check_in_found"


class InvalidTransition(ConflictError):
    """Raised when a workflow status cannot move to the requested state."""

    code = "invalid_transition"
