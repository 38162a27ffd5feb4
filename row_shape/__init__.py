"""RowShape - parameterized queries with result shaping fetch modes."""

from __future__ import annotations

from row_shape.core.connection import ConnectionConfig, ConnectionManager
from row_shape.core.engine import Engine
from row_shape.core.enums import ABSENT, AbsentType, DatabaseBackend, FetchMode, FetchScope
from row_shape.core.exceptions import (
    AdapterError,
    ColumnArityError,
    ColumnMismatchError,
    ConnectionError,  # noqa: A004
    ExecutionError,
    InvalidModeError,
    MappingError,
    QueryError,
    RowShapeError,
    TransactionError,
    TransactionFailure,
    TransactionStateError,
)
from row_shape.core.params import placeholders
from row_shape.core.result import ColumnDescriptor, Result, WriteResult
from row_shape.core.transaction import TransactionManager
from row_shape.mapping.model import ModelMapper, RecordMapper

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    # Engine
    "Engine",
    # Results
    "Result",
    "ColumnDescriptor",
    "WriteResult",
    "ABSENT",
    "AbsentType",
    # Transaction
    "TransactionManager",
    # Mapping
    "ModelMapper",
    "RecordMapper",
    # Params
    "placeholders",
    # Enums
    "DatabaseBackend",
    "FetchMode",
    "FetchScope",
    # Exceptions
    "RowShapeError",
    "ExecutionError",
    "QueryError",
    "MappingError",
    "InvalidModeError",
    "ColumnArityError",
    "ColumnMismatchError",
    "TransactionError",
    "TransactionStateError",
    "TransactionFailure",
    "AdapterError",
    "ConnectionError",
]
