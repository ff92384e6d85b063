"""Job category resource wrapper."""

from __future__ import annotations

from typing import Optional, cast

from ..registry import RelatedCollection, ResourceInstance
from ..types import ResourceId
from ._common_types import ValidationMode
from .base import Resource


class Categories(Resource):
    """Category relationship accessors."""

    type_name = "Category"

    def jobs(
        self,
        category: ResourceId | ResourceInstance,
        *,
        validation: ValidationMode = "warn",
    ) -> RelatedCollection | None:
        """Jobs in a category (``"programming"``, ``"design-ux"``, ...).

        See :meth:`getonbrd.resources.tags.Tags.jobs` for ``validation`` and
        the returned collection.
        """
        return cast(Optional[RelatedCollection], self._related(category, "jobs", validation=validation))
