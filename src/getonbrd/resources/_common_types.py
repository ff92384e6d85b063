"""Shared types and validation helpers for resources.

This module contains:
- Validation mode type (shared across all resources)
- Identifier normalization (slugs and positive integers)
"""

from __future__ import annotations

from typing import Literal

from ..types import ResourceId

# --- Shared Validation Mode --- #
ValidationMode = Literal["off", "warn", "strict"]


# --- Identifier Normalization --- #
def _normalize_id(value: object) -> ResourceId | None:
    """Normalize a resource identifier.

    Parameters
    ----------
    value
        Positive integer id, or a slug such as ``"python"`` or
        ``"senior-python-developer-acme"``.

    Returns
    -------
    int | str | None
        The integer, the stripped slug, or ``None`` when the input is not a
        usable identifier. Booleans are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 1 else None
    if isinstance(value, str):
        slug = value.strip()
        if slug and not any(ch.isspace() or ch == "/" for ch in slug):
            return slug
    return None
