from __future__ import annotations

import logging
from datetime import timezone, tzinfo
from typing import Any, Callable, Mapping, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..config import ConnectionConfig
from ..db.helpers import quote_identifier
from ..db.session import DbSession
from ..errors import DbConnectionError, QueryError
from ..formatting import format_value
from ..models import ColumnDescriptor, RawRecord
from .base import DatabaseAdapter

logger = logging.getLogger(__name__)


class MySQLAdapter(DatabaseAdapter):
    """
    Snapshot backend for MySQL, via SQLAlchemy and PyMySQL.

    The engine is created lazily on first use and reused for every read
    until :meth:`disconnect`. Reads are not wrapped in a shared transaction,
    so tables are captured at whatever moment they are visited.

    Usage:
        adapter = MySQLAdapter(ConnectionConfig(database="app"))
        try:
            snapshot = adapter.read_database()
        finally:
            adapter.disconnect()
    """

    SELECT_TABLES = (
        "SELECT TABLE_NAME AS table_name FROM INFORMATION_SCHEMA.TABLES "
        "WHERE TABLE_SCHEMA = :schema"
    )
    SELECT_COLUMNS = (
        "SELECT COLUMN_NAME AS column_name, DATA_TYPE AS data_type "
        "FROM INFORMATION_SCHEMA.COLUMNS "
        "WHERE TABLE_SCHEMA = :schema AND TABLE_NAME = :table"
    )

    def __init__(
        self,
        config: ConnectionConfig,
        *,
        engine_factory: Callable[..., Engine] = create_engine,
        naive_timezone: tzinfo = timezone.utc,
    ) -> None:
        """
        Args:
            config: Resolved connection parameters
            engine_factory: Builds the SQLAlchemy Engine (replaceable in tests)
            naive_timezone: Label applied to zone-less DATETIME values
        """
        super().__init__(config)
        self.engine_factory = engine_factory
        self.naive_timezone = naive_timezone
        self._engine: Engine | None = None

    def connect(self) -> Engine:
        """
        Create the engine and verify the server accepts our credentials.

        Raises:
            DbConnectionError: If the handshake or authentication fails
        """
        if self._engine is not None:
            return self._engine

        engine = self.engine_factory(self.config.url(), pool_pre_ping=True)
        try:
            with engine.connect() as conn:
                conn.exec_driver_sql("SELECT 1")
        except SQLAlchemyError as exc:
            engine.dispose()
            raise DbConnectionError(
                f"Cannot connect to MySQL at {self.config.host}:{self.config.port}"
                f"/{self.config.database}: {exc}"
            ) from exc

        logger.debug(
            "Connected to %s:%s/%s", self.config.host, self.config.port, self.config.database
        )
        self._engine = engine
        return engine

    def disconnect(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None

    def _fetch_all(
        self, sql: str, params: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        engine = self.connect()
        try:
            with DbSession(engine) as session:
                return session.fetch_all(sql, params)
        except SQLAlchemyError as exc:
            raise QueryError(str(exc)) from exc

    def list_tables(self) -> list[str]:
        rows = self._fetch_all(self.SELECT_TABLES, {"schema": self.config.database})
        return [row["table_name"] for row in rows]

    def get_table_columns(self, table_name: str) -> list[ColumnDescriptor]:
        rows = self._fetch_all(
            self.SELECT_COLUMNS,
            {"schema": self.config.database, "table": table_name},
        )
        return [ColumnDescriptor(name=row["column_name"], data_type=row["data_type"]) for row in rows]

    def get_table_data(self, table_name: str) -> list[RawRecord]:
        try:
            table = quote_identifier(table_name, "table")
        except (TypeError, ValueError) as exc:
            raise QueryError(str(exc)) from exc
        return self._fetch_all(f"SELECT * FROM {table}")

    def format_value(self, value: Any, data_type: Optional[str]) -> Optional[str]:
        return format_value(value, data_type, naive_timezone=self.naive_timezone)
