"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP and CLI adapters can catch them uniformly and translate them
into user-facing errors.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidTransition(DomainException):
    """The requested event is not allowed from the order's current status."""


class SlotFullError(DomainException):
    """A delivery slot has no capacity left."""


class PersistenceError(DomainException):
    """The backing store rejected or failed an operation."""
