class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when no report exists for the given identifier."""


class ConflictError(DomainError):
    """Raised when a report for the same month and worker already exists."""


class PersistenceError(DomainError):
    """Raised when the report store fails to complete an operation."""


class RenderError(DomainError):
    """Raised when a report cannot be rendered into a spreadsheet."""
