from .base import DatabaseAdapter
from .mysql import MySQLAdapter

__all__ = ["DatabaseAdapter", "MySQLAdapter"]
