"""Relationship registry for resource types.

Resource types declare named relationships to other resource types
(``Tag.jobs`` is a ``many`` relationship to ``Job``). The registry keeps those
declarations and turns them into accessors on fetched instances. It never
talks to the network itself: it builds the filter or the key and hands it to
a fetch collaborator (see :class:`getonbrd.types.FetchCollaborator`).

Types and declarations are registered once during initialization, after
which :meth:`RelationshipRegistry.freeze` makes the registry read-only so it
can be shared between threads without locking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union

from .errors import (
    DuplicateRelationshipError,
    DuplicateResourceTypeError,
    InvalidCardinalityError,
    RegistryError,
    RegistryFrozenError,
    UnknownRelationshipError,
    UnknownTargetTypeError,
)
from .types import CARDINALITIES, Cardinality, CollectionFilter, FetchCollaborator, ResourceId
from .utils import snake_case

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceType:
    """A class of remote entities and the endpoint that serves them.

    Parameters
    ----------
    name
        Unique type name, e.g. ``"Tag"``.
    path
        Collection endpoint path, e.g. ``"/tags"``.
    filter_routes
        Optional nested endpoints keyed by filter field, formatted with
        ``value``, e.g. ``{"tag_id": "/tags/{value}/jobs"}``.
    """

    name: str
    path: str
    filter_routes: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError(f"Invalid resource type name: {self.name!r}")
        object.__setattr__(self, "filter_routes", MappingProxyType(dict(self.filter_routes)))

    def item_path(self, id: ResourceId) -> str:
        return f"{self.path.rstrip('/')}/{id}"


@dataclass(frozen=True)
class RelationshipDeclaration:
    """A named relationship from ``owner`` to ``target``."""

    owner: str
    name: str
    cardinality: Cardinality
    target: str
    foreign_key: str


@dataclass(frozen=True)
class ResourceInstance:
    """A fetched record: its type, identifier and read-only attributes."""

    type_name: str
    id: ResourceId
    attributes: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __getitem__(self, key: str) -> Any:
        return self.attributes[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)


class RelatedCollection:
    """Lazy, restartable view over the targets of a ``many`` relationship.

    Nothing is fetched on construction. Each iteration asks the fetch
    collaborator again and yields whatever it returns, so two iterations may
    see different results.
    """

    def __init__(
        self,
        fetcher: FetchCollaborator,
        declaration: RelationshipDeclaration,
        filter: CollectionFilter,
    ) -> None:
        self._fetcher = fetcher
        self.declaration = declaration
        self.filter = filter

    @property
    def target(self) -> str:
        return self.declaration.target

    def __iter__(self) -> Iterator[ResourceInstance]:
        _logger.debug("Fetching %s where %s=%r", self.target, self.filter["field"], self.filter["value"])
        results = self._fetcher.fetch_collection(self.target, self.filter)
        if results is None:
            return iter(())
        return iter(results)

    def all(self) -> list[ResourceInstance]:
        """Fetch and return the related instances as a list."""
        return list(self)

    def __repr__(self) -> str:
        return (
            f"<RelatedCollection {self.declaration.owner}.{self.declaration.name} -> "
            f"{self.target} where {self.filter['field']}={self.filter['value']!r}>"
        )


Related = Union[RelatedCollection, Optional[ResourceInstance]]


def _type_name(value: Union[str, ResourceType]) -> str:
    if isinstance(value, ResourceType):
        return value.name
    if isinstance(value, str) and value.strip():
        return value
    raise ValueError(f"Invalid resource type: {value!r}")


class RelationshipRegistry:
    """Resource types, their relationship declarations, and resolution."""

    def __init__(self, fetcher: Optional[FetchCollaborator] = None) -> None:
        self._fetcher = fetcher
        self._types: dict[str, ResourceType] = {}
        self._relationships: dict[str, dict[str, RelationshipDeclaration]] = {}
        self._frozen = False

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------
    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def fetcher(self) -> Optional[FetchCollaborator]:
        return self._fetcher

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Relationship registry is frozen after initialization")

    def bind(self, fetcher: FetchCollaborator) -> None:
        """Attach the fetch collaborator used by :meth:`resolve`."""
        self._check_mutable()
        self._fetcher = fetcher

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True
        _logger.debug(
            "Relationship registry frozen with %s types and %s relationships",
            len(self._types),
            sum(len(decls) for decls in self._relationships.values()),
        )

    def register_type(self, resource_type: ResourceType) -> ResourceType:
        """Register a resource type.

        Raises
        ------
        DuplicateResourceTypeError
            If a type with the same name is already registered.
        RegistryFrozenError
            If the registry has been frozen.
        """
        self._check_mutable()
        if resource_type.name in self._types:
            raise DuplicateResourceTypeError(resource_type.name)
        self._types[resource_type.name] = resource_type
        return resource_type

    def declare_relationship(
        self,
        owner_type: Union[str, ResourceType],
        name: str,
        cardinality: Cardinality,
        target_type: Union[str, ResourceType],
        foreign_key: Optional[str] = None,
    ) -> RelationshipDeclaration:
        """Declare that ``owner_type`` relates to ``target_type`` as ``name``.

        The target does not need to be registered yet; it is looked up when
        the relationship is resolved.

        Parameters
        ----------
        owner_type
            Owning type name or :class:`ResourceType`.
        name
            Relationship name, unique per owning type.
        cardinality
            ``"many"`` for a sequence of targets, ``"one"`` for a single
            optional target.
        target_type
            Target type name or :class:`ResourceType`.
        foreign_key
            Field used to match instances. Defaults to ``<owner>_id`` on the
            targets for ``many`` and ``<name>_id`` on the owner for ``one``.

        Returns
        -------
        RelationshipDeclaration
            The stored declaration.

        Raises
        ------
        DuplicateRelationshipError
            If ``name`` is already declared on ``owner_type``.
        InvalidCardinalityError
            If ``cardinality`` is not ``"one"`` or ``"many"``.
        RegistryFrozenError
            If the registry has been frozen.
        """
        self._check_mutable()
        owner = _type_name(owner_type)
        target = _type_name(target_type)
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Invalid relationship name: {name!r}")
        if cardinality not in CARDINALITIES:
            raise InvalidCardinalityError(cardinality)

        declared = self._relationships.setdefault(owner, {})
        if name in declared:
            raise DuplicateRelationshipError(owner, name)

        if foreign_key is None:
            foreign_key = f"{snake_case(owner)}_id" if cardinality == "many" else f"{name}_id"

        declaration = RelationshipDeclaration(
            owner=owner,
            name=name,
            cardinality=cardinality,
            target=target,
            foreign_key=foreign_key,
        )
        declared[name] = declaration
        _logger.debug("Declared %s.%s -> %s %s (key %s)", owner, name, cardinality, target, foreign_key)
        return declaration

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def __contains__(self, name: object) -> bool:
        return name in self._types

    def types(self) -> list[ResourceType]:
        return list(self._types.values())

    def get_type(self, name: str) -> ResourceType:
        """Return a registered type, raising ``UnknownTargetTypeError`` if missing."""
        try:
            return self._types[name]
        except KeyError:
            raise UnknownTargetTypeError(name) from None

    def relationships(self, owner_type: Union[str, ResourceType]) -> list[RelationshipDeclaration]:
        return list(self._relationships.get(_type_name(owner_type), {}).values())

    def relationship(self, owner_type: Union[str, ResourceType], name: str) -> RelationshipDeclaration:
        owner = _type_name(owner_type)
        declaration = self._relationships.get(owner, {}).get(name)
        if declaration is None:
            raise UnknownRelationshipError(owner, name)
        return declaration

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def resolve(self, instance: ResourceInstance, name: str) -> Related:
        """Resolve relationship ``name`` on ``instance``.

        Returns
        -------
        RelatedCollection or ResourceInstance or None
            For ``many``, a lazy :class:`RelatedCollection` filtered by
            ``foreign_key == instance.id``. For ``one``, the instance fetched
            by the key stored on ``instance``, or ``None`` when the key is
            missing or nothing matches.

        Raises
        ------
        UnknownRelationshipError
            If ``name`` is not declared on the instance's type.
        UnknownTargetTypeError
            If the declared target type is not registered.
        """
        declaration = self.relationship(instance.type_name, name)
        if declaration.target not in self._types:
            raise UnknownTargetTypeError(declaration.target, owner=declaration.owner, name=name)
        fetcher = self._fetcher
        if fetcher is None:
            raise RegistryError("No fetch collaborator bound to the relationship registry")

        if declaration.cardinality == "many":
            return RelatedCollection(
                fetcher,
                declaration,
                CollectionFilter(field=declaration.foreign_key, value=instance.id),
            )

        key = instance.get(declaration.foreign_key)
        if key is None:
            _logger.debug(
                "%s %r has no %s; %s is absent",
                instance.type_name,
                instance.id,
                declaration.foreign_key,
                name,
            )
            return None
        _logger.debug("Fetching %s %r for %s.%s", declaration.target, key, instance.type_name, name)
        return fetcher.fetch_one(declaration.target, key)


__all__ = [
    "RelatedCollection",
    "RelationshipDeclaration",
    "RelationshipRegistry",
    "ResourceInstance",
    "ResourceType",
]
