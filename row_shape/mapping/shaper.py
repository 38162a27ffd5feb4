"""Result shaper.

Turns the rows of a RowSource into the shape selected by a FetchMode.
Each operation has one dispatch table; its keys are the modes that the
operation accepts. Validation always completes before the first row is
read, so a rejected call leaves the cursor where it was.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import Any

from row_shape.core.enums import ABSENT, FetchMode, FetchScope
from row_shape.core.exceptions import ColumnArityError, InvalidModeError, MappingError
from row_shape.mapping.model import ModelMapper, RecordMapper
from row_shape.mapping.protocol import Mapper, RowSource

Row = tuple[Any, ...]
RowShaper = Callable[[list[str], Row, Any], Any]
AggregateShaper = Callable[[list[str], Iterator[Row], Any], Any]


# --- Single-row shapes ---


def _as_num(names: list[str], row: Row, mapper: Any) -> list[Any]:
    return list(row)


def _as_assoc(names: list[str], row: Row, mapper: Any) -> dict[str, Any]:
    return dict(zip(names, row, strict=True))


def _as_object(names: list[str], row: Row, mapper: Any) -> Any:
    return mapper.map_one(dict(zip(names, row, strict=True)))


def _as_scalar(names: list[str], row: Row, mapper: Any) -> Any:
    return row[0]


# --- Aggregate shapes ---


def _all_num(names: list[str], rows: Iterator[Row], mapper: Any) -> list[list[Any]]:
    return [list(row) for row in rows]


def _all_assoc(names: list[str], rows: Iterator[Row], mapper: Any) -> list[dict[str, Any]]:
    return [dict(zip(names, row, strict=True)) for row in rows]


def _all_objects(names: list[str], rows: Iterator[Row], mapper: Any) -> list[Any]:
    return [mapper.map_one(dict(zip(names, row, strict=True))) for row in rows]


def _all_col(names: list[str], rows: Iterator[Row], mapper: Any) -> list[Any]:
    return [row[0] for row in rows]


def _key_pair(names: list[str], rows: Iterator[Row], mapper: Any) -> dict[Any, Any]:
    # Later duplicates overwrite earlier keys
    return {row[0]: row[1] for row in rows}


def _key_pair_arr(names: list[str], rows: Iterator[Row], mapper: Any) -> dict[Any, dict[str, Any]]:
    rest = names[1:]
    return {row[0]: dict(zip(rest, row[1:], strict=True)) for row in rows}


def _group(names: list[str], rows: Iterator[Row], mapper: Any) -> dict[Any, list[dict[str, Any]]]:
    rest = names[1:]
    groups: dict[Any, list[dict[str, Any]]] = {}
    for row in rows:
        groups.setdefault(row[0], []).append(dict(zip(rest, row[1:], strict=True)))
    return groups


def _group_col(names: list[str], rows: Iterator[Row], mapper: Any) -> dict[Any, list[Any]]:
    groups: dict[Any, list[Any]] = {}
    for row in rows:
        groups.setdefault(row[0], []).append(row[1])
    return groups


def _group_obj(names: list[str], rows: Iterator[Row], mapper: Any) -> dict[Any, list[Any]]:
    rest = names[1:]
    groups: dict[Any, list[Any]] = {}
    for row in rows:
        groups.setdefault(row[0], []).append(mapper.map_one(dict(zip(rest, row[1:], strict=True))))
    return groups


_ONE_SHAPERS: dict[FetchMode, RowShaper] = {
    FetchMode.ASSOC: _as_assoc,
    FetchMode.OBJ: _as_object,
    FetchMode.NUM: _as_num,
    FetchMode.COL: _as_scalar,
    FetchMode.SCALAR: _as_scalar,
    FetchMode.SINGLE_ROW_ASSOC: _as_assoc,
    FetchMode.SINGLE_ROW_OBJ: _as_object,
    FetchMode.SINGLE_ROW_NUM: _as_num,
}

_ALL_SHAPERS: dict[FetchMode, AggregateShaper] = {
    FetchMode.ASSOC: _all_assoc,
    FetchMode.OBJ: _all_objects,
    FetchMode.NUM: _all_num,
    FetchMode.COL: _all_col,
    FetchMode.KEY_PAIR: _key_pair,
    FetchMode.KEY_PAIR_ARR: _key_pair_arr,
    FetchMode.GROUP: _group,
    FetchMode.GROUP_COL: _group_col,
    FetchMode.GROUP_OBJ: _group_obj,
}

FETCH_ONE_MODES: tuple[FetchMode, ...] = tuple(_ONE_SHAPERS)
FETCH_ALL_MODES: tuple[FetchMode, ...] = tuple(_ALL_SHAPERS)
# Engine.select accepts either operation's modes
SELECT_MODES: tuple[FetchMode, ...] = tuple(dict.fromkeys(FETCH_ONE_MODES + FETCH_ALL_MODES))

# Modes that Engine.select answers with a single row instead of a list
SINGLE_ROW_MODES = frozenset(
    {
        FetchMode.SCALAR,
        FetchMode.SINGLE_ROW_ASSOC,
        FetchMode.SINGLE_ROW_OBJ,
        FetchMode.SINGLE_ROW_NUM,
    }
)

_OBJECT_MODES = frozenset({FetchMode.OBJ, FetchMode.SINGLE_ROW_OBJ, FetchMode.GROUP_OBJ})

_EXACT_ARITY: dict[FetchMode, int] = {
    FetchMode.COL: 1,
    FetchMode.SCALAR: 1,
    FetchMode.KEY_PAIR: 2,
    FetchMode.GROUP_COL: 2,
}

_MIN_ARITY: dict[FetchMode, int] = {
    FetchMode.KEY_PAIR_ARR: 2,
    FetchMode.GROUP: 2,
    FetchMode.GROUP_OBJ: 2,
}


def coerce_mode(mode: FetchMode | str) -> FetchMode | None:
    """Return the FetchMode for *mode*, or None if it is not a known tag."""
    if isinstance(mode, FetchMode):
        return mode
    try:
        return FetchMode(mode)
    except ValueError:
        return None


def _label(mode: Any) -> str:
    return mode.value if isinstance(mode, FetchMode) else str(mode)


def validate_mode(
    mode: FetchMode | str | None,
    scope: FetchScope,
    column_count: int,
    *,
    has_target: bool = False,
    has_args: bool = False,
    default: FetchMode | str = FetchMode.ASSOC,
) -> FetchMode:
    """Check that *mode* can be used for *scope* on a result of *column_count* columns.

    An empty *mode* falls back to *default*.

    Returns:
        The resolved FetchMode.

    Raises:
        InvalidModeError: Unknown mode for the operation, or a target class
            or constructor arguments given with a non-object mode.
        ColumnArityError: The mode needs a different number of columns.
    """
    requested = mode if mode else default
    allowed = _ONE_SHAPERS if scope is FetchScope.ONE else _ALL_SHAPERS

    fetch_mode = coerce_mode(requested)
    if fetch_mode is None or fetch_mode not in allowed:
        raise InvalidModeError(
            _label(requested),
            [m.value for m in allowed],
            operation=scope.value,
        )

    if fetch_mode not in _OBJECT_MODES:
        if has_target:
            raise InvalidModeError(
                fetch_mode.value,
                detail="a target class is only valid with an object fetch mode",
            )
        if has_args:
            raise InvalidModeError(
                fetch_mode.value,
                detail="constructor arguments are only valid with an object fetch mode",
            )
    elif has_args and not has_target:
        raise InvalidModeError(
            fetch_mode.value,
            detail="constructor arguments require a target class",
        )

    exact = _EXACT_ARITY.get(fetch_mode)
    if exact is not None and column_count != exact:
        noun = "column" if exact == 1 else "columns"
        raise ColumnArityError(fetch_mode.value, f"exactly {exact} {noun}", column_count)

    minimum = _MIN_ARITY.get(fetch_mode)
    if minimum is not None and column_count < minimum:
        raise ColumnArityError(fetch_mode.value, f"at least {minimum} columns", column_count)

    return fetch_mode


def check_select_mode(mode: FetchMode | str | None, default: FetchMode | str) -> FetchMode:
    """Resolve *mode* for a one-shot select, which accepts every fetch mode.

    Raises:
        InvalidModeError: If *mode* (or *default* when empty) is not a known tag.
    """
    requested = mode if mode else default
    fetch_mode = coerce_mode(requested)
    if fetch_mode is None:
        raise InvalidModeError(
            _label(requested),
            [m.value for m in SELECT_MODES],
            operation="select",
        )
    return fetch_mode


def resolve_mapper(
    target: Any,
    ctor_args: Sequence[Any] = (),
    mode: FetchMode = FetchMode.OBJ,
) -> Any:
    """Build the mapper for an object fetch mode.

    *target* may be None (generic records), a class, or a Mapper.
    """
    if target is None:
        return RecordMapper()
    if isinstance(target, type):
        return ModelMapper(target, args=ctor_args)
    if isinstance(target, Mapper):
        if ctor_args:
            raise InvalidModeError(
                mode.value, detail="constructor arguments only apply to a target class"
            )
        return target
    raise MappingError(f"Fetch target must be a class or a mapper, got {type(target).__name__}")


def _prepare(
    source: RowSource,
    mode: FetchMode | str | None,
    scope: FetchScope,
    target: Any,
    ctor_args: Sequence[Any],
    default: FetchMode | str,
) -> tuple[FetchMode, list[str], Any]:
    names = [column.name for column in source.columns]
    fetch_mode = validate_mode(
        mode,
        scope,
        len(names),
        has_target=target is not None,
        has_args=bool(ctor_args),
        default=default,
    )
    mapper = resolve_mapper(target, ctor_args, fetch_mode) if fetch_mode in _OBJECT_MODES else None
    return fetch_mode, names, mapper


def fetch_one(
    source: RowSource,
    mode: FetchMode | str | None = None,
    target: Any = None,
    ctor_args: Sequence[Any] = (),
    *,
    default: FetchMode | str = FetchMode.ASSOC,
) -> Any:
    """Read exactly one row and shape it, or return ``ABSENT`` at end of data."""
    fetch_mode, names, mapper = _prepare(source, mode, FetchScope.ONE, target, ctor_args, default)
    row = source.next_row()
    if row is None:
        return ABSENT
    return _ONE_SHAPERS[fetch_mode](names, row, mapper)


def fetch_all(
    source: RowSource,
    mode: FetchMode | str | None = None,
    target: Any = None,
    ctor_args: Sequence[Any] = (),
    *,
    default: FetchMode | str = FetchMode.ASSOC,
) -> Any:
    """Drain the remaining rows into the aggregate shape for *mode*.

    Zero rows give the empty form of the shape (``[]`` or ``{}``).
    """
    fetch_mode, names, mapper = _prepare(source, mode, FetchScope.ALL, target, ctor_args, default)
    return _ALL_SHAPERS[fetch_mode](names, iter(source.next_row, None), mapper)


def iter_rows(
    source: RowSource,
    mode: FetchMode | str | None = None,
    target: Any = None,
    ctor_args: Sequence[Any] = (),
    *,
    default: FetchMode | str = FetchMode.ASSOC,
) -> Iterator[Any]:
    """Lazily yield the remaining rows in a single-row shape.

    The mode is validated here, before the generator is returned.
    """
    fetch_mode, names, mapper = _prepare(source, mode, FetchScope.ONE, target, ctor_args, default)
    shape = _ONE_SHAPERS[fetch_mode]
    return (shape(names, row, mapper) for row in iter(source.next_row, None))
