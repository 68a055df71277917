"""Errors raised by the order engine.

Everything derives from DomainException. The CLI maps EntityNotFoundError
to its own exit status and reports the rest as refused operations.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class EntityNotFoundError(DomainException):
    """A requested user, product or order does not exist."""


class InvalidOperationError(DomainException):
    """The operation is not legal on the current state (stock, status)."""


class ValidationError(InvalidOperationError):
    """An input field failed validation."""


class ConcurrencyConflictError(DomainException):
    """A compare-and-write found the row changed since it was read."""
