"""Public package surface for the getonbrd Python client."""

from .client import DEFAULT_BASE_URL, Getonbrd
from .errors import *
from .registry import (
    RelatedCollection,
    RelationshipDeclaration,
    RelationshipRegistry,
    ResourceInstance,
    ResourceType,
)
from .schema import get_registry, init


__all__ = [
    "DEFAULT_BASE_URL",
    "Getonbrd",
    "RelatedCollection",
    "RelationshipDeclaration",
    "RelationshipRegistry",
    "ResourceInstance",
    "ResourceType",
    "get_registry",
    "init",
]
