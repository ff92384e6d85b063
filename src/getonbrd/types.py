"""Type aliases shared by the registry, the fetch collaborator and resources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Optional, Protocol, Sequence, TypedDict, Union, get_args

from typing_extensions import ReadOnly

if TYPE_CHECKING:  # pragma: no cover
    from .registry import ResourceInstance

Cardinality = Literal["one", "many"]
CARDINALITIES: tuple[Cardinality, ...] = get_args(Cardinality)

# Get on Board uses slugs for most resources; numeric ids are accepted too.
ResourceId = Union[int, str]


class CollectionFilter(TypedDict):
    """Readonly ``{field, value}`` filter handed to the fetch collaborator."""
    field: ReadOnly[str]
    value: ReadOnly[ResourceId]


class FetchCollaborator(Protocol):
    """Anything that can fetch resource instances for the registry."""

    def fetch_collection(
        self, type_name: str, filter: CollectionFilter
    ) -> Sequence["ResourceInstance"]: ...

    def fetch_one(self, type_name: str, id: ResourceId) -> Optional["ResourceInstance"]: ...


__all__ = [
    "CARDINALITIES",
    "Cardinality",
    "CollectionFilter",
    "FetchCollaborator",
    "ResourceId",
]
