"""
Permission Grants

Permission keys are parsed once into tagged grants so that authorization
never compares raw strings:

    "*"                  -> GrantScope.all
    "documents.*"        -> GrantScope.resource (resource="documents")
    "documents.view"     -> GrantScope.action   (resource="documents", action="view")

Only one wildcard level exists: a resource wildcard covers every action of
that resource, nothing more.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)

WILDCARD = "*"
SEPARATOR = "."


class InvalidPermissionKey(ValueError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Invalid permission key: {key!r}")


class GrantScope(str, Enum):
    action = "action"
    resource = "resource"
    all = "all"


@dataclass(frozen=True)
class PermissionGrant:
    scope: GrantScope
    resource: Optional[str] = None
    action: Optional[str] = None

    @classmethod
    def parse(cls, key: str) -> "PermissionGrant":
        if key == WILDCARD:
            return cls(GrantScope.all)

        resource, sep, action = key.partition(SEPARATOR)
        if not sep or not resource or not action or WILDCARD in resource:
            raise InvalidPermissionKey(key)

        if action == WILDCARD:
            return cls(GrantScope.resource, resource=resource)

        if WILDCARD in action or not all(action.split(SEPARATOR)):
            raise InvalidPermissionKey(key)

        return cls(GrantScope.action, resource=resource, action=action)

    @property
    def key(self) -> str:
        if self.scope is GrantScope.all:
            return WILDCARD
        if self.scope is GrantScope.resource:
            return f"{self.resource}{SEPARATOR}{WILDCARD}"
        return f"{self.resource}{SEPARATOR}{self.action}"

    def covers(self, required: "PermissionGrant") -> bool:
        if self.scope is GrantScope.all:
            return True
        if self.scope is GrantScope.resource:
            return required.resource == self.resource
        return self == required


def parse_required(key: str) -> PermissionGrant:
    """Parse the key an operation demands; it must name one concrete action."""
    grant = PermissionGrant.parse(key)
    if grant.scope is not GrantScope.action:
        raise InvalidPermissionKey(key)
    return grant


class PermissionSet:
    """Immutable set of parsed grants with constant-time checks."""

    __slots__ = ("_grants", "_resources", "_all")

    def __init__(self, grants: Iterable[PermissionGrant] = ()):
        self._grants: FrozenSet[PermissionGrant] = frozenset(grants)
        self._resources = frozenset(
            g.resource for g in self._grants if g.scope is GrantScope.resource
        )
        self._all = any(g.scope is GrantScope.all for g in self._grants)

    @classmethod
    def from_keys(cls, keys: Iterable[str]) -> "PermissionSet":
        grants = []
        for key in keys:
            try:
                grants.append(PermissionGrant.parse(key))
            except InvalidPermissionKey:
                logger.warning("Skipping malformed permission key %r", key)
        return cls(grants)

    def allows(self, required_key: str) -> bool:
        required = parse_required(required_key)
        if self._all or required.resource in self._resources:
            return True
        return required in self._grants

    def keys(self) -> List[str]:
        return sorted(g.key for g in self._grants)

    def __iter__(self) -> Iterator[PermissionGrant]:
        return iter(self._grants)

    def __len__(self) -> int:
        return len(self._grants)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PermissionSet):
            return NotImplemented
        return self._grants == other._grants

    def __hash__(self) -> int:
        return hash(self._grants)

    def __repr__(self) -> str:
        return f"PermissionSet({self.keys()!r})"
