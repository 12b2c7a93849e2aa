class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness or non-overlap rule."""

    status_code = 409


class InternalError(DomainError):
    """Raised when an unexpected failure is hidden behind a generic message."""

    status_code = 500
