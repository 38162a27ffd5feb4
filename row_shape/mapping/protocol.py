"""Mapper and row source protocols.

Object fetch modes build one object per row through a Mapper. The shaper
reads rows from anything that satisfies RowSource.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", covariant=True)


@runtime_checkable
class Mapper(Protocol[T]):
    """Base mapper protocol."""

    def map_one(self, row: dict[str, Any]) -> T:
        """Map a single row dict to a target object."""
        ...

    def map_many(self, rows: list[dict[str, Any]]) -> list[T]:
        """Map multiple row dicts to a list of target objects."""
        ...


class Column(Protocol):
    @property
    def name(self) -> str: ...


class RowSource(Protocol):
    """Forward-only cursor over the rows of one executed statement."""

    @property
    def columns(self) -> Sequence[Column]:
        """Column descriptors in SELECT list order."""
        ...

    def next_row(self) -> tuple[Any, ...] | None:
        """Return the next row, or None once the cursor is exhausted."""
        ...
