"""Row mapping helpers shared by the PostgreSQL repositories."""

import json
from typing import Any, Dict, Mapping, Optional


def decode_json_column(value: Any) -> Dict[str, Any]:
    """asyncpg returns JSONB as text unless a codec is registered."""
    if value is None:
        return {}
    if isinstance(value, str):
        return json.loads(value) if value else {}
    return dict(value)


def encode_json_column(value: Optional[Mapping[str, Any]]) -> str:
    return json.dumps(dict(value or {}))


def validate_schema_name(schema: str) -> str:
    """Schema names are interpolated into SQL, so only identifiers are accepted."""
    if not schema or not schema.replace("_", "").isalnum() or schema[0].isdigit():
        raise ValueError(f"Invalid schema name: {schema!r}")
    return schema
