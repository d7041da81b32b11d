"""Query string parsing and row helpers shared by the admin trail resources."""

from datetime import UTC, datetime

import falcon.asgi

from fleetaudit.application.dto.queries import DEFAULT_LIMIT
from fleetaudit.domain.entities import Actor
from fleetaudit.domain.exceptions import ValidationError
from fleetaudit.domain.value_objects import ActivityAction


def get_datetime(req: falcon.asgi.Request, name: str) -> datetime | None:
    """ISO 8601 date or datetime parameter, UTC when no offset is given.

    Raises ValidationError when malformed.
    """
    value = req.get_param(name)
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid {name}: {value!r}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def get_action(req: falcon.asgi.Request) -> ActivityAction | None:
    value = req.get_param("action")
    if not value:
        return None
    try:
        return ActivityAction(value.upper())
    except ValueError:
        raise ValidationError(f"Invalid action: {value!r}") from None


def get_page(req: falcon.asgi.Request) -> dict[str, int]:
    """Raw limit/offset; clamping happens in the query objects."""
    return {
        "limit": req.get_param_as_int("limit", default=DEFAULT_LIMIT),
        "offset": req.get_param_as_int("offset", default=0),
    }


def isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def user_summary(actor: Actor | None) -> dict | None:
    if actor is None:
        return None
    return {"id": actor.id, "name": actor.name, "email": actor.email, "role": actor.role.value}
