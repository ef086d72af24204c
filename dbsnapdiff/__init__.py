from .adapters import DatabaseAdapter, MySQLAdapter
from .config import ConnectionConfig, resolve_connection_config
from .diff import diff_snapshots
from .output import HtmlOutputAdapter, OutputAdapter
from .runner import ConsoleSignal, DbDiff

__all__ = [
    "ConnectionConfig",
    "ConsoleSignal",
    "DatabaseAdapter",
    "DbDiff",
    "HtmlOutputAdapter",
    "MySQLAdapter",
    "OutputAdapter",
    "diff_snapshots",
    "resolve_connection_config",
]
