"""Field-level change records for audit entries."""

import json
from collections.abc import Mapping
from typing import Any

from fleetaudit.domain.value_objects import ActivityAction

ChangeRecord = dict[str, Any]

_MISSING = object()


def _serialized(value: Any) -> str | None:
    # Structural string comparison; key order inside nested objects matters.
    if value is _MISSING:
        return None
    return json.dumps(value, default=str, ensure_ascii=False)


def diff(before: Mapping[str, Any] | None, after: Mapping[str, Any] | None) -> ChangeRecord | None:
    """Per-field ``{field: {"from": old, "to": new}}`` for keys whose values differ.

    Returns None when nothing differs, so callers can record "no changes"
    instead of an empty change set. A key missing on one side is reported
    with None on that side.
    """
    before = before or {}
    after = after or {}
    changes: ChangeRecord = {}
    for key in dict.fromkeys([*before.keys(), *after.keys()]):
        old = before.get(key, _MISSING)
        new = after.get(key, _MISSING)
        if _serialized(old) == _serialized(new):
            continue
        changes[key] = {
            "from": None if old is _MISSING else old,
            "to": None if new is _MISSING else new,
        }
    return changes or None


def change_record(
    action: ActivityAction,
    before: Mapping[str, Any] | None = None,
    after: Mapping[str, Any] | None = None,
) -> ChangeRecord | None:
    """Change record for an audited action."""
    if action == ActivityAction.CREATE:
        return {"created": dict(after) if after is not None else None}
    if action == ActivityAction.DELETE:
        return {"deleted": dict(before) if before is not None else None}
    if action == ActivityAction.UPDATE:
        return diff(before, after)
    raise ValueError(f"{action} is not an audited action")
