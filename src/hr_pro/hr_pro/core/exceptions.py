class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(ValidationError):
    """Raised when a unique field (NIF, email) is already taken."""


class NotFoundError(DomainError):
    """Raised when the requested entity does not exist."""
