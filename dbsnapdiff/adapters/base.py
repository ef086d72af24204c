from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from ..config import ConnectionConfig
from ..metrics import observe_snapshot_read
from ..models import ColumnDescriptor, DatabaseSnapshot, RawRecord, Record

logger = logging.getLogger(__name__)


class DatabaseAdapter(ABC):
    """
    Abstract base for database introspection backends.

    A backend knows how to list tables, describe their columns, fetch every
    row and render a raw value for display. :meth:`read_database` composes
    those primitives into one full snapshot and is the only method the
    orchestrator calls.
    """

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config

    @abstractmethod
    def connect(self) -> Any:
        """Establish (or reuse) the connection. Must be idempotent."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Release the connection. Must be a no-op when not connected."""
        ...

    @abstractmethod
    def list_tables(self) -> list[str]:
        """Table names of the configured schema, in engine-reported order."""
        ...

    @abstractmethod
    def get_table_columns(self, table_name: str) -> list[ColumnDescriptor]:
        """Columns of ``table_name``, in engine-reported order."""
        ...

    @abstractmethod
    def get_table_data(self, table_name: str) -> list[RawRecord]:
        """Every row of ``table_name``: no filtering, no pagination."""
        ...

    @abstractmethod
    def format_value(self, value: Any, data_type: Optional[str]) -> Optional[str]:
        """Render a raw column value as its display string."""
        ...

    def format_record(
        self, row: RawRecord, columns: Sequence[ColumnDescriptor]
    ) -> Record:
        types = {column.name: column.data_type for column in columns}
        return {
            column_name: self.format_value(value, types.get(column_name))
            for column_name, value in row.items()
        }

    def read_database(self) -> DatabaseSnapshot:
        """
        Read every table into a snapshot of formatted records.

        Any failure (connect, list, columns, rows, formatting) propagates and
        no partial snapshot is returned.
        """
        start_time = time.monotonic()
        status = "error"
        rows_by_table: dict[str, int] = {}

        try:
            snapshot: DatabaseSnapshot = {}
            for table_name in self.list_tables():
                columns = self.get_table_columns(table_name)
                rows = self.get_table_data(table_name)
                snapshot[table_name] = [self.format_record(row, columns) for row in rows]
                rows_by_table[table_name] = len(rows)
                logger.debug("Read %d rows from %s", len(rows), table_name)

            status = "success"
            logger.info(
                "Read %d tables (%d rows) from %s in %.2fs",
                len(snapshot),
                sum(rows_by_table.values()),
                self.config.database,
                time.monotonic() - start_time,
            )
            return snapshot
        finally:
            observe_snapshot_read(
                status=status,
                latency_s=time.monotonic() - start_time,
                rows_by_table=rows_by_table if status == "success" else None,
            )
