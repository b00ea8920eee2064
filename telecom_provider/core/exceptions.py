"""
Domain errors raised by the service layer.
Database and validation errors are translated into these so callers never
have to know which layer rejected a write.
"""
from typing import Optional


class TelecomError(Exception):
    """Base class for every error raised by telecom_provider."""


class NotFoundError(TelecomError):
    def __init__(self, resource: str, key):
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} {key} not found")


class ConstraintViolationError(TelecomError):
    """
    A write was rejected by a uniqueness, check, pattern, enum or not-null rule.

    `constraint` names the rule that failed (constraint name, column or
    relationship) so callers can report it.
    """

    def __init__(self, constraint: str, message: Optional[str] = None):
        self.constraint = constraint
        super().__init__(message or f"Constraint violated: {constraint}")


class ForeignKeyViolationError(ConstraintViolationError):
    """Insert or update references a parent row that does not exist."""


class RestrictedActionError(ConstraintViolationError):
    """Delete or key update blocked because dependent rows exist under a RESTRICT policy."""

    action = "modify"

    def __init__(self, constraint: str, parent_table: str, child_table: str, dependents: int):
        self.parent_table = parent_table
        self.child_table = child_table
        self.dependents = dependents
        super().__init__(
            constraint,
            f"Cannot {self.action} {parent_table} row: {dependents} row(s) in "
            f"{child_table} still reference it ({constraint})",
        )


class RestrictedDeleteError(RestrictedActionError):
    action = "delete"


class RestrictedUpdateError(RestrictedActionError):
    action = "renumber"


class GeneratedColumnError(ConstraintViolationError):
    """Attempt to assign a column the database derives on its own."""

    def __init__(self, column: str):
        super().__init__(column, f"Column '{column}' is generated and cannot be set")


class LedgerStateError(TelecomError):
    """Invalid operation on a staged ledger (unknown savepoint, already closed...)."""
