"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """The entity clashes with one that already exists (e.g. duplicate code)."""


class InvalidStatusError(ValidationError):
    """Unknown order status, or a transition the status graph forbids."""
