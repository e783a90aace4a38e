class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidPatternError(ValidationError):
    """Raised when a pattern definition cannot be used to generate shifts."""


class InvalidLifecycleTransitionError(DomainError):
    """Raised when a shift is moved to a status its current status does not allow."""


class NotFoundError(DomainError):
    """Raised when a requested record does not exist."""
