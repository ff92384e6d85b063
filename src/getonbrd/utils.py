"""Shared helpers for the Get on Board client."""

from __future__ import annotations

import re
from typing import Hashable, Iterable, TypeVar

_T = TypeVar("_T", bound=Hashable)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def unique_in_order(values: Iterable[_T]) -> list[_T]:
    """Return unique values preserving the original order."""
    seen: set[_T] = set()
    output: list[_T] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        output.append(value)
    return output


def snake_case(name: str) -> str:
    """Convert a resource type name (``JobCategory``) to ``job_category``."""
    return _CAMEL_BOUNDARY.sub("_", name.strip()).replace("-", "_").replace(" ", "_").lower()
