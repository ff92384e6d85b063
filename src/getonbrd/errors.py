"""Errors raised while declaring or resolving resource relationships.

All of these signal a programming or configuration mistake and are raised at
the call that made it. Transport failures are not represented here; they come
from the fetch collaborator unchanged.
"""

from __future__ import annotations


class GetonbrdError(Exception):
    """Base class for errors raised by this package."""


class RegistryError(GetonbrdError):
    """Base class for relationship registry errors."""


class RegistryFrozenError(RegistryError):
    """The registry was modified after initialization."""


class DuplicateResourceTypeError(RegistryError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Resource type {name!r} is already registered")
        self.name = name


class DuplicateRelationshipError(RegistryError, ValueError):
    def __init__(self, owner: str, name: str) -> None:
        super().__init__(f"Relationship {name!r} is already declared on {owner!r}")
        self.owner = owner
        self.name = name


class InvalidCardinalityError(RegistryError, ValueError):
    def __init__(self, cardinality: object) -> None:
        super().__init__(f"Invalid cardinality {cardinality!r}; expected 'one' or 'many'")
        self.cardinality = cardinality


class UnknownRelationshipError(RegistryError, LookupError):
    def __init__(self, owner: str, name: str) -> None:
        super().__init__(f"No relationship {name!r} declared on {owner!r}")
        self.owner = owner
        self.name = name


class UnknownTargetTypeError(RegistryError, LookupError):
    def __init__(self, target: str, *, owner: str | None = None, name: str | None = None) -> None:
        where = f" (target of {owner}.{name})" if owner and name else ""
        super().__init__(f"Resource type {target!r} is not registered{where}")
        self.target = target
        self.owner = owner
        self.name = name


__all__ = [
    "DuplicateRelationshipError",
    "DuplicateResourceTypeError",
    "GetonbrdError",
    "InvalidCardinalityError",
    "RegistryError",
    "RegistryFrozenError",
    "UnknownRelationshipError",
    "UnknownTargetTypeError",
]
