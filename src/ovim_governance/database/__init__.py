"""PostgreSQL connectivity for the storage collaborators."""

from .connection import DatabaseManager
from .migrations import apply_schema, load_schema_sql
from .utils import decode_json_column, encode_json_column, validate_schema_name

__all__ = [
    "DatabaseManager",
    "apply_schema",
    "load_schema_sql",
    "decode_json_column",
    "encode_json_column",
    "validate_schema_name",
]
