class DbSnapDiffError(Exception):
    """Base exception for dbsnapdiff errors."""


class DbConnectionError(DbSnapDiffError):
    """Cannot establish or authenticate a connection to the database."""


class QueryError(DbSnapDiffError):
    """A table/column/row fetch failed while reading a snapshot."""


class FormatError(DbSnapDiffError):
    """A column value cannot be converted to its display form."""


class SinkError(DbSnapDiffError):
    """The report output cannot be opened or written."""
