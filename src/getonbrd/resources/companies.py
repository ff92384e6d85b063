"""Company resource wrapper."""

from __future__ import annotations

from typing import Optional, cast

from ..registry import RelatedCollection, ResourceInstance
from ..types import ResourceId
from ._common_types import ValidationMode
from .base import Resource


class Companies(Resource):
    """Company relationship accessors."""

    type_name = "Company"

    def jobs(
        self,
        company: ResourceId | ResourceInstance,
        *,
        validation: ValidationMode = "warn",
    ) -> RelatedCollection | None:
        """Jobs published by a company.

        See :meth:`getonbrd.resources.tags.Tags.jobs` for ``validation`` and
        the returned collection.
        """
        return cast(Optional[RelatedCollection], self._related(company, "jobs", validation=validation))
