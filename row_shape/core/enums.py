"""Backend, fetch mode and sentinel enumerations."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Supported database backends."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    ORACLE = "oracle"


class FetchMode(Enum):
    """Output shapes a result can be fetched into.

    Values are the tag strings accepted wherever a mode is expected.
    """

    ASSOC = "assoc"
    OBJ = "obj"
    NUM = "num"
    COL = "col"
    SCALAR = "scalar"
    SINGLE_ROW_ASSOC = "singleRowAssoc"
    SINGLE_ROW_OBJ = "singleRowObj"
    SINGLE_ROW_NUM = "singleRowNum"
    KEY_PAIR = "keyPair"
    KEY_PAIR_ARR = "keyPairArr"
    GROUP = "group"
    GROUP_COL = "groupCol"
    GROUP_OBJ = "groupObj"


class FetchScope(Enum):
    """Which fetch operation a mode is validated for."""

    ONE = "fetch_one"
    ALL = "fetch_all"


class AbsentType(Enum):
    """Type of the ``ABSENT`` sentinel."""

    ABSENT = "absent"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


# Returned by fetch_one once the cursor is exhausted.
ABSENT = AbsentType.ABSENT
