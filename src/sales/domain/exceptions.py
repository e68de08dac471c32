"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Command input broke one or more field rules.

    Raised before any repository access.  ``errors`` keeps every
    field-level message; ``str()`` joins them.
    """

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidOperationError(DomainException):
    """The operation conflicts with the current state of the aggregate."""


class InvalidArgumentError(DomainException, ValueError):
    """An aggregate method received a value outside its accepted range."""


class DuplicateSaleNumberError(DomainException):
    """The store already holds a sale with the same sale number."""
