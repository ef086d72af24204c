from .helpers import quote_identifier, validate_identifier
from .session import DbSession

__all__ = [
    "DbSession",
    "quote_identifier",
    "validate_identifier",
]
