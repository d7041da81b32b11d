"""Canonical permission matrix and partial patches."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from fleetaudit.domain.permissions.vocabulary import FLAG_GRANTS, Grant, is_modeled
from fleetaudit.domain.value_objects import PermissionAction, Resource


@dataclass(frozen=True)
class PermissionPatch:
    """Explicit (resource, action) -> allowed assignments; unspecified pairs fall through."""

    assignments: Mapping[Grant, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "assignments",
            {g: bool(v) for g, v in self.assignments.items() if is_modeled(*g)},
        )

    def is_empty(self) -> bool:
        return not self.assignments


@dataclass(frozen=True)
class PermissionMatrix:
    """Resource -> allowed actions. A resource with no actions is absent."""

    grants: Mapping[Resource, frozenset[PermissionAction]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Absent resource and explicit all-false are the same state.
        cleaned = {}
        for resource, actions in self.grants.items():
            allowed = frozenset(a for a in actions if is_modeled(resource, a))
            if allowed:
                cleaned[resource] = allowed
        object.__setattr__(self, "grants", cleaned)

    @classmethod
    def from_grants(cls, grants: Iterable[Grant]) -> "PermissionMatrix":
        collected: dict[Resource, set[PermissionAction]] = {}
        for resource, action in grants:
            collected.setdefault(resource, set()).add(action)
        return cls({r: frozenset(a) for r, a in collected.items()})

    def allows(self, resource: Resource, action: PermissionAction) -> bool:
        return action in self.grants.get(resource, frozenset())

    def patched(self, patch: PermissionPatch) -> "PermissionMatrix":
        """Return a new matrix with the patch's explicit assignments applied."""
        grants = {r: set(a) for r, a in self.grants.items()}
        for (resource, action), allowed in patch.assignments.items():
            actions = grants.setdefault(resource, set())
            if allowed:
                actions.add(action)
            else:
                actions.discard(action)
        return PermissionMatrix({r: frozenset(a) for r, a in grants.items()})

    def to_flags(self) -> dict[str, bool]:
        """Flat boolean shape; a flag is true only when all its grants are allowed."""
        return {
            flag: all(self.allows(r, a) for r, a in grants)
            for flag, grants in FLAG_GRANTS.items()
        }

    def to_entries(self) -> list[dict[str, object]]:
        """Array shape, in resource declaration order; empty resources omitted."""
        return [
            {
                "resource": resource.value,
                "actions": [a.value for a in PermissionAction if a in self.grants[resource]],
            }
            for resource in Resource
            if resource in self.grants
        ]
