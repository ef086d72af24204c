from __future__ import annotations


def validate_identifier(name: str, identifier_type: str = "identifier") -> str:
    """
    Validate a table/column name read from INFORMATION_SCHEMA before it is
    interpolated into SQL.

    Quoted MySQL identifiers may contain almost any character, so only the
    hard limits are checked here; :func:`quote_identifier` takes care of
    embedded backticks.

    Args:
        name: The identifier to validate
        identifier_type: Description of the identifier (for error messages)

    Returns:
        The validated identifier (unchanged if valid)

    Raises:
        TypeError: If identifier is not a string
        ValueError: If identifier is empty, too long or contains NUL

    Example:
        >>> validate_identifier("orders", "table")
        'orders'
        >>> validate_identifier("", "table")
        ValueError: table cannot be empty
    """
    if not isinstance(name, str):
        raise TypeError(f"{identifier_type} must be a string, got {type(name).__name__}")

    if not name:
        raise ValueError(f"{identifier_type} cannot be empty")

    if "\x00" in name:
        raise ValueError(f"Invalid {identifier_type} {name!r}: must not contain NUL")

    if len(name) > 64:
        raise ValueError(f"{identifier_type} {name!r} exceeds MySQL's 64-character limit")

    return name


def quote_identifier(name: str, identifier_type: str = "identifier") -> str:
    """
    Validate ``name`` and wrap it in backticks.

    >>> quote_identifier("order`items", "table")
    '`order``items`'
    """
    name = validate_identifier(name, identifier_type)
    return "`" + name.replace("`", "``") + "`"
