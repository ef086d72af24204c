from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

# column name -> engine-native value, as returned by the driver
RawRecord = Mapping[str, Any]
# column name -> display string (None for SQL NULL)
Record = Dict[str, Optional[str]]
TableSnapshot = List[Record]
# table name -> records, in the order the engine listed them
DatabaseSnapshot = Dict[str, TableSnapshot]

ID_FIELD = "id"


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    A column as reported by INFORMATION_SCHEMA.COLUMNS.
    """
    name: str
    data_type: str


class ChangeKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass
class RecordDiff:
    """
    Before/after comparison for one identity key within one table.

    ``before``/``after`` are the serialized records (one of them empty for
    added/removed records); ``left``/``right`` are the rendered panes
    produced by the line-diff service.
    """
    table: str
    key: str
    kind: ChangeKind
    before: str
    after: str
    left: str = ""
    right: str = ""


@dataclass
class TableDiff:
    table: str
    records: list[RecordDiff] = field(default_factory=list)


@dataclass
class DiffReport:
    tables: list[TableDiff] = field(default_factory=list)

    @property
    def has_any_difference(self) -> bool:
        return bool(self.tables)
