class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDateRangeError(ValidationError):
    """Raised when a period ends before it starts."""


class UnknownStatusCodeError(ValidationError):
    """Raised when a manual status code is not one of the recap codes."""


class PersonNotFoundError(ValidationError):
    """Raised when an identifier is not on the active roster."""
