"""REST fetch collaborator used by the relationship registry."""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

from ..registry import ResourceInstance
from ..types import CollectionFilter, ResourceId
from .base import Resource


class RestFetcher(Resource):
    """Fetch resource instances over the client's HTTP layer.

    Endpoints come from the registered :class:`~getonbrd.registry.ResourceType`
    of the requested type. Failed requests follow the client's
    ``raise_on_error`` setting: they either raise, or are logged and yield an
    empty collection / ``None``.
    """

    def fetch_collection(
        self,
        type_name: str,
        filter: CollectionFilter,
        *,
        timeout: Optional[int] = None,
    ) -> list[ResourceInstance]:
        """Fetch instances of ``type_name`` whose ``filter['field']`` matches.

        A nested route registered for the filter field is preferred
        (``/tags/python/jobs``); otherwise the field is sent as a query
        parameter on the collection path.
        """
        resource_type = self._registry.get_type(type_name)
        field, value = filter["field"], filter["value"]
        route = resource_type.filter_routes.get(field)
        if route is not None:
            response = self._get(route.format(value=quote(str(value), safe="")), timeout=timeout)
        else:
            response = self._get(resource_type.path, params={field: value}, timeout=timeout)

        if response is None:
            return []
        data = response.get("data") if isinstance(response, dict) else response
        if not isinstance(data, list):
            self._logger.warning("%s response missing expected data list.", type_name)
            return []

        instances: list[ResourceInstance] = []
        for item in data:
            instance = self._to_instance(type_name, item)
            if instance is not None:
                instances.append(instance)
        return instances

    def fetch_one(
        self,
        type_name: str,
        id: ResourceId,
        *,
        timeout: Optional[int] = None,
    ) -> ResourceInstance | None:
        """Fetch a single instance of ``type_name`` by id, or ``None``."""
        resource_type = self._registry.get_type(type_name)
        response = self._get(resource_type.item_path(quote(str(id), safe="")), timeout=timeout)
        if not isinstance(response, dict):
            return None

        data = response.get("data")
        if isinstance(data, dict):
            return self._to_instance(type_name, data)
        if "id" in response:
            return self._to_instance(type_name, response)
        self._logger.warning("%s %s response missing expected data.", type_name, id)
        return None

    def _to_instance(self, type_name: str, item: Any) -> ResourceInstance | None:
        """Build an instance from a JSON:API style item or a plain record.

        ``relationships.<name>.data.id`` is flattened into ``<name>_id`` so
        ``one`` relationships can read their key off the instance.
        """
        if not isinstance(item, dict) or item.get("id") is None:
            self._logger.warning("Skipping %s item without an id: %r", type_name, item)
            return None

        raw_attributes = item.get("attributes")
        if isinstance(raw_attributes, dict):
            attributes = dict(raw_attributes)
        else:
            attributes = {k: v for k, v in item.items() if k not in ("id", "type", "relationships")}

        relationships = item.get("relationships")
        if isinstance(relationships, dict):
            for name, relation in relationships.items():
                related = relation.get("data") if isinstance(relation, dict) else None
                if isinstance(related, dict) and related.get("id") is not None:
                    attributes.setdefault(f"{name}_id", related["id"])

        return ResourceInstance(type_name, item["id"], attributes)
