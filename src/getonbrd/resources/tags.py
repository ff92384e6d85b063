"""Tag resource wrapper."""

from __future__ import annotations

from typing import Optional, cast

from ..registry import RelatedCollection, ResourceInstance
from ..types import ResourceId
from ._common_types import ValidationMode
from .base import Resource


class Tags(Resource):
    """Tag relationship accessors."""

    type_name = "Tag"

    def jobs(
        self,
        tag: ResourceId | ResourceInstance,
        *,
        validation: ValidationMode = "warn",
    ) -> RelatedCollection | None:
        """Jobs published with a tag.

        Parameters
        ----------
        tag
            Tag slug (``"python"``) or a ``Tag`` instance.
        validation
            Validation mode: ``"off"`` sends inputs as-is, ``"warn"`` drops invalid
            inputs with warnings, and ``"strict"`` raises on invalid inputs.

        Returns
        -------
        RelatedCollection or None
            Lazy collection of ``Job`` instances; each iteration refetches.
            ``None`` when the tag is invalid in ``"warn"`` mode.
        """
        return cast(Optional[RelatedCollection], self._related(tag, "jobs", validation=validation))
