"""Core Get on Board client with a raw-request escape hatch."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import requests

from . import schema
from .registry import RelationshipRegistry, ResourceInstance
from .resources.categories import Categories
from .resources.companies import Companies
from .resources.fetcher import RestFetcher
from .resources.jobs import Jobs
from .resources.tags import Tags
from .tools import batch as batch_tools

DEFAULT_BASE_URL = os.environ.get("GETONBRD_BASE_URL", "https://www.getonbrd.com/api/v0")


class Getonbrd:
    """Resource-grouped client for the Get on Board public API."""

    tags: Tags
    jobs: Jobs
    categories: Categories
    companies: Companies
    tools: Any

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        default_timeout: int = 20,
        session: Optional[requests.Session] = None,
        raise_on_error: bool = False,
        registry: Optional[RelationshipRegistry] = None,
    ) -> None:
        """Create a Get on Board client bound to an API base URL.

        Parameters
        ----------
        base_url
            API root, e.g. ``https://www.getonbrd.com/api/v0``.
        default_timeout
            Default request timeout in seconds.
        session
            Optional requests session to reuse connections.
        raise_on_error
            If True, raise HTTP errors instead of returning None.
        registry
            Relationship registry to resolve through. Defaults to a private
            registry loaded with the public schema and bound to this client.
            An unbound, unfrozen registry is bound to this client; a frozen
            one must already carry its fetch collaborator.
        """
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.default_timeout = default_timeout
        self.raise_on_error = raise_on_error
        self._logger = logging.getLogger(__name__)
        self._session = session

        self.fetcher: RestFetcher = RestFetcher(self)
        if registry is None:
            registry = schema.build_registry(self.fetcher)
        elif registry.fetcher is None and not registry.frozen:
            registry.bind(self.fetcher)
        self.registry: RelationshipRegistry = registry

        self.tags: Tags = Tags(self)
        self.jobs: Jobs = Jobs(self)
        self.categories: Categories = Categories(self)
        self.companies: Companies = Companies(self)
        self.tools = type("Tools", (), {})()
        self.tools.batch = batch_tools

    def resolve(self, instance: ResourceInstance, name: str):
        """Resolve relationship ``name`` on ``instance`` through the registry."""
        return self.registry.resolve(instance, name)

    @staticmethod
    def _error_detail(response: requests.Response) -> Optional[str]:
        """Pull a readable message out of an API error body.

        Handles ``{"message": ...}``, ``{"error": ...}`` and JSON:API
        ``{"errors": [{"title": ..., "detail": ...}, ...]}`` bodies.
        """
        try:
            body = response.json()
        except (ValueError, AttributeError):
            return None
        if not isinstance(body, dict):
            return None
        for key in ("message", "error"):
            if isinstance(body.get(key), str):
                return body[key]
        errors = body.get("errors")
        if isinstance(errors, list):
            parts = []
            for error in errors:
                if isinstance(error, dict):
                    text = " - ".join(str(error[k]) for k in ("title", "detail") if error.get(k))
                    parts.append(text or str(error))
                else:
                    parts.append(str(error))
            return "; ".join(parts) or None
        return None

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any] | list[tuple[str, Any]]] = None,
        timeout: Optional[int] = None,
    ) -> Optional[dict[str, Any] | list[Any]]:
        """Send a raw request to the Get on Board API.

        Parameters
        ----------
        method
            HTTP method.
        path
            Endpoint path relative to the API root, with or without a
            leading slash.
        params
            Query parameters for the request.
        timeout
            Timeout in seconds for this request.

        Returns
        -------
        dict | list | None
            Parsed JSON payload, or None if the response is empty or non-JSON.
        """
        if not path.startswith("/"):
            path = "/" + path
        url = f"{self.base_url}{path}"

        requester = self._session or requests
        try:
            response = requester.request(
                method,
                url,
                params=params,
                timeout=timeout or self.default_timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            if self.raise_on_error:
                raise
            detail = self._error_detail(exc.response if exc.response is not None else response)
            if detail:
                self._logger.warning("Request failed for %s %s: %s (%s)", method, url, exc, detail)
            else:
                self._logger.warning("Request failed for %s %s: %s", method, url, exc)
            return None
        except Exception as exc:  # noqa: BLE001 - surface request failures
            if self.raise_on_error:
                raise
            self._logger.warning("Request failed for %s %s: %s", method, url, exc)
            return None

        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError:
            self._logger.warning("Response from %s %s was not JSON", method, url)
            return None
        if isinstance(payload, (dict, list)):
            return payload
        return None
