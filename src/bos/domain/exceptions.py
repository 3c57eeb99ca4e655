"""Domain-level exceptions.

Expected business failures travel as ``Outcome`` values, not exceptions.
These classes cover the rest: invariants guarded inside the model (the
application handlers turn them into failures at their boundary) and
infrastructure conditions that must propagate to the caller.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """A concurrent transaction won the race; the request may be retried."""
