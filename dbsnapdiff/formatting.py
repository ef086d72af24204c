"""
Canonical display strings for column values.

Every value read from the database passes through :func:`format_value`
before it is compared, so two reads of an unchanged row always produce
the same strings.
"""

from __future__ import annotations

import hashlib
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Optional

from .errors import FormatError

DIGEST_LABEL = "MD5 Digest value: "
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z"
DATETIME_TYPES = frozenset({"datetime", "timestamp"})
BINARY_TYPES = frozenset({"binary", "varbinary"})


def is_binary_type(data_type: Optional[str]) -> bool:
    if not data_type:
        return False
    data_type = data_type.lower()
    return data_type.endswith("blob") or data_type in BINARY_TYPES


def is_datetime_type(data_type: Optional[str]) -> bool:
    return bool(data_type) and data_type.lower() in DATETIME_TYPES


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return str(value).encode("utf-8")


def _to_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        # rows may come back in mixed encodings; keep the output valid UTF-8
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def format_value(
    value: Any,
    data_type: Optional[str],
    naive_timezone: tzinfo = timezone.utc,
) -> Optional[str]:
    """
    Map a raw column value and its declared type to a display string.

    - ``None`` stays ``None`` whatever the type.
    - ``*blob``, ``binary`` and ``varbinary`` columns become ``"MD5 Digest value: <hex>"`` of the raw bytes.
    - ``datetime``/``timestamp`` columns become ``YYYY-MM-DD HH:MM:SS <tz>``;
      naive values are labelled with ``naive_timezone``.
    - Anything else becomes its plain text, bytes decoded as UTF-8.

    Raises:
        FormatError: If a datetime column holds something that is not a datetime
            (PyMySQL returns zero dates such as ``0000-00-00 00:00:00`` as str)
    """
    if value is None:
        return None

    if is_binary_type(data_type):
        return DIGEST_LABEL + hashlib.md5(_to_bytes(value)).hexdigest()

    if is_datetime_type(data_type):
        if not isinstance(value, datetime):
            if isinstance(value, date):
                value = datetime(value.year, value.month, value.day)
            else:
                raise FormatError(
                    f"Cannot format {value!r} as {data_type}: expected a datetime, "
                    f"got {type(value).__name__}"
                )
        if value.tzinfo is None:
            value = value.replace(tzinfo=naive_timezone)
        return value.strftime(DATETIME_FORMAT)

    return _to_text(value)
