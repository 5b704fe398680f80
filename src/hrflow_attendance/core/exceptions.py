class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, day or request does not exist."""


class InvalidInstant(ValidationError):
    """Raised when a timestamp cannot be parsed or makes no sense."""


class MalformedSchedule(ValidationError):
    """Raised when expected clock-out does not follow expected clock-in."""
