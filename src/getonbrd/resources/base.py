"""Base resource helpers."""

from __future__ import annotations

from typing import Any, ClassVar, Optional, TYPE_CHECKING

from ..registry import Related, ResourceInstance
from ._common_types import ValidationMode, _normalize_id

if TYPE_CHECKING:  # pragma: no cover
    from ..client import Getonbrd
    from ..registry import RelationshipRegistry
    from ..types import ResourceId


class Resource:
    """Shared helpers for resource classes."""

    type_name: ClassVar[str] = ""

    def __init__(self, client: "Getonbrd") -> None:
        self._client = client

    @property
    def _logger(self):
        return self._client._logger

    @property
    def _registry(self) -> "RelationshipRegistry":
        return self._client.registry

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any] | list[tuple[str, Any]]] = None,
        timeout: Optional[int] = None,
    ) -> Optional[dict[str, Any] | list[Any]]:
        return self._client.request(method, path, params=params, timeout=timeout)

    def _get(
        self,
        path: str,
        *,
        params: Optional[dict[str, Any] | list[tuple[str, Any]]] = None,
        timeout: Optional[int] = None,
    ) -> Optional[dict[str, Any] | list[Any]]:
        return self._request("GET", path, params=params, timeout=timeout)

    def instance(self, resource_id: "ResourceId", **attributes: Any) -> ResourceInstance:
        """Build an instance of this resource type without fetching it."""
        return ResourceInstance(self.type_name, resource_id, attributes)

    def _related(
        self,
        owner: "ResourceId | ResourceInstance",
        name: str,
        *,
        validation: ValidationMode = "warn",
    ) -> Related:
        """Resolve relationship ``name`` for an owner id or instance.

        Returns ``None`` in ``"warn"`` mode when the owner id is invalid.
        """
        if isinstance(owner, ResourceInstance):
            if owner.type_name != self.type_name:
                message = f"Expected a {self.type_name} instance, got {owner.type_name}"
                if validation == "strict":
                    raise ValueError(message)
                if validation == "warn":
                    self._logger.warning("%s for %s", message, name)
                    return None
            return self._registry.resolve(owner, name)

        if validation == "off":
            return self._registry.resolve(self.instance(owner), name)

        resource_id = _normalize_id(owner)
        if resource_id is None:
            if validation == "strict":
                raise ValueError(f"Invalid {self.type_name} id: {owner!r}")
            self._logger.warning("Invalid %s id for %s: %r", self.type_name, name, owner)
            return None
        return self._registry.resolve(self.instance(resource_id), name)
