"""RowShape exception hierarchy.

All exceptions are RowShape-specific. Raw driver exceptions are never
exposed to callers; they are chained as ``__cause__``.
"""

from __future__ import annotations

from collections.abc import Sequence


class RowShapeError(Exception):
    """Base exception for all RowShape errors."""


# --- Execution ---


class ExecutionError(RowShapeError):
    """Raised when the driver fails while a result is being read."""


class QueryError(ExecutionError):
    """Raised when a statement fails to execute."""

    def __init__(self, label: str, detail: str) -> None:
        self.label = label
        super().__init__(f"Statement failed ({label}): {detail}")


# --- Mapping ---


class MappingError(RowShapeError):
    """Base for result shaping and mapping errors."""


class InvalidModeError(MappingError):
    """Raised when a fetch mode is unknown or misused for an operation."""

    def __init__(
        self,
        mode: str,
        allowed: Sequence[str] = (),
        *,
        operation: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.mode = mode
        self.allowed = list(allowed)
        self.operation = operation
        if detail is not None:
            message = f"Invalid fetch mode '{mode}': {detail}"
        else:
            where = f" for {operation}" if operation else ""
            message = (
                f"Invalid fetch mode '{mode}'{where}; "
                f"expected one of: {', '.join(self.allowed)}"
            )
        super().__init__(message)


class ColumnArityError(MappingError):
    """Raised when a fetch mode needs a different number of columns."""

    def __init__(self, mode: str, requirement: str, column_count: int) -> None:
        self.mode = mode
        self.requirement = requirement
        self.column_count = column_count
        super().__init__(
            f"Fetch mode '{mode}' requires {requirement}, "
            f"statement returned {column_count}"
        )


class ColumnMismatchError(MappingError):
    """Raised when required fields cannot be mapped from row columns."""

    def __init__(self, target_class: str, missing_fields: list[str]) -> None:
        self.target_class = target_class
        self.missing_fields = missing_fields
        super().__init__(f"Cannot map to {target_class}: missing fields {missing_fields}")


# --- Transaction ---


class TransactionError(RowShapeError):
    """Base for transaction errors."""


class TransactionStateError(TransactionError):
    """Raised on invalid transaction state transitions."""

    def __init__(self, current_state: str, attempted_action: str) -> None:
        self.current_state = current_state
        self.attempted_action = attempted_action
        super().__init__(f"Cannot {attempted_action} transaction in state '{current_state}'")


class TransactionFailure(TransactionError):
    """Raised after rollback when a transactional unit of work fails."""

    def __init__(self, detail: str, statement_index: int | None = None) -> None:
        self.statement_index = statement_index
        super().__init__(f"Transaction rolled back: {detail}")


# --- Adapter ---


class AdapterError(RowShapeError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""
