"""SQL filter helpers shared by the trail repositories."""

import json
from datetime import datetime
from functools import partial

from psycopg.types.json import Jsonb

_dumps = partial(json.dumps, default=str)


def to_jsonb(value: object) -> Jsonb | None:
    """Wrap a value for a JSONB column; non-JSON values (datetimes, UUIDs) become strings."""
    if value is None:
        return None
    return Jsonb(value, dumps=_dumps)


def build_where(
    equals: dict[str, object],
    *,
    time_column: str,
    start: datetime | None = None,
    end: datetime | None = None,
) -> tuple[str, list[object]]:
    """WHERE clause for equality filters and an inclusive time range. None values are skipped."""
    conditions: list[str] = []
    params: list[object] = []
    for column, value in equals.items():
        if value is None:
            continue
        conditions.append(f"{column} = %s")
        params.append(value)
    if start is not None:
        conditions.append(f"{time_column} >= %s")
        params.append(start)
    if end is not None:
        conditions.append(f"{time_column} <= %s")
        params.append(end)
    where = (" WHERE " + " AND ".join(conditions)) if conditions else ""
    return where, params
