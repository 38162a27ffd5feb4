"""Mapping layer - shape result rows and build objects from them."""

from __future__ import annotations

from row_shape.mapping.model import ModelMapper, RecordMapper
from row_shape.mapping.protocol import Mapper, RowSource
from row_shape.mapping.shaper import (
    FETCH_ALL_MODES,
    FETCH_ONE_MODES,
    SINGLE_ROW_MODES,
    fetch_all,
    fetch_one,
    iter_rows,
    validate_mode,
)

__all__ = [
    "Mapper",
    "RowSource",
    "ModelMapper",
    "RecordMapper",
    "validate_mode",
    "fetch_one",
    "fetch_all",
    "iter_rows",
    "FETCH_ONE_MODES",
    "FETCH_ALL_MODES",
    "SINGLE_ROW_MODES",
]
