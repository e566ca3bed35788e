"""Row -> JSON-safe dict conversion for pass-through query results.

Amount columns in the node schema are NUMERIC(40, 0); asyncpg returns them as
Decimal. They are emitted as decimal strings so no client parses them as
floats. Timestamps become ISO8601 strings.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any


def json_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return str(int(value))
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def row_to_dict(row: Any) -> dict[str, Any]:
    return {key: json_value(value) for key, value in row._mapping.items()}


def rows_to_dicts(rows: Any) -> list[dict[str, Any]]:
    return [row_to_dict(r) for r in rows]
