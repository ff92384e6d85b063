"""Public Get on Board resource types and their relationships.

``init()`` builds the process-wide registry once, during startup, and freezes
it. Code that needs a private registry (tests, alternative collaborators)
should call :func:`build_registry` instead.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .errors import RegistryError, RegistryFrozenError
from .registry import RelationshipRegistry, ResourceType
from .types import Cardinality, FetchCollaborator

_logger = logging.getLogger(__name__)

TAG = ResourceType("Tag", "/tags")
CATEGORY = ResourceType("Category", "/categories")
COMPANY = ResourceType("Company", "/companies")
JOB = ResourceType(
    "Job",
    "/jobs",
    filter_routes={
        "tag_id": "/tags/{value}/jobs",
        "category_id": "/categories/{value}/jobs",
        "company_id": "/companies/{value}/jobs",
    },
)

PUBLIC_TYPES: tuple[ResourceType, ...] = (TAG, CATEGORY, COMPANY, JOB)

# (owner, name, cardinality, target, foreign_key)
PUBLIC_RELATIONSHIPS: tuple[tuple[str, str, Cardinality, str, Optional[str]], ...] = (
    ("Tag", "jobs", "many", "Job", None),
    ("Category", "jobs", "many", "Job", None),
    ("Company", "jobs", "many", "Job", None),
    ("Job", "company", "one", "Company", None),
)


def load_public_schema(
    registry: RelationshipRegistry,
    *,
    types: Iterable[ResourceType] = PUBLIC_TYPES,
    relationships: Iterable[tuple[str, str, Cardinality, str, Optional[str]]] = PUBLIC_RELATIONSHIPS,
) -> RelationshipRegistry:
    """Register resource types and relationship declarations on ``registry``."""
    for resource_type in types:
        registry.register_type(resource_type)
    for owner, name, cardinality, target, foreign_key in relationships:
        registry.declare_relationship(owner, name, cardinality, target, foreign_key)
    return registry


def build_registry(fetcher: Optional[FetchCollaborator] = None) -> RelationshipRegistry:
    """Return a frozen registry loaded with the public schema."""
    registry = load_public_schema(RelationshipRegistry(fetcher))
    registry.freeze()
    return registry


_registry: Optional[RelationshipRegistry] = None


def init(fetcher: FetchCollaborator) -> RelationshipRegistry:
    """Build the process-wide registry.

    Raises
    ------
    RegistryFrozenError
        If the process-wide registry was already initialized.
    """
    global _registry
    if _registry is not None:
        raise RegistryFrozenError("Process-wide relationship registry is already initialized")
    _registry = build_registry(fetcher)
    _logger.info("Initialized relationship registry: %s", ", ".join(t.name for t in _registry.types()))
    return _registry


def get_registry() -> RelationshipRegistry:
    """Return the process-wide registry built by :func:`init`."""
    if _registry is None:
        raise RegistryError("Relationship registry is not initialized; call getonbrd.schema.init() first")
    return _registry


__all__ = [
    "CATEGORY",
    "COMPANY",
    "JOB",
    "PUBLIC_RELATIONSHIPS",
    "PUBLIC_TYPES",
    "TAG",
    "build_registry",
    "get_registry",
    "init",
    "load_public_schema",
]
