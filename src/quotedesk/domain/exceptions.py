"""Domain-level exceptions.

Every rule violation in the catalog, quote and order aggregates is raised
as a DomainException subclass, which the CLI turns into a one-line error.
Pricing functions never raise these; they stay total.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested product, quote or order does not exist."""
