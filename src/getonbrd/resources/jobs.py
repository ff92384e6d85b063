"""Job resource wrapper."""

from __future__ import annotations

from typing import Optional, cast

from ..registry import ResourceInstance
from ..types import ResourceId
from ._common_types import ValidationMode, _normalize_id
from .base import Resource


class Jobs(Resource):
    """Job lookups and relationship accessors."""

    type_name = "Job"

    def get(
        self,
        job_id: ResourceId,
        *,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> ResourceInstance | None:
        """Fetch a single job.

        Parameters
        ----------
        job_id
            Job slug or numeric id.
        validation
            Validation mode: ``"off"`` sends inputs as-is, ``"warn"`` drops invalid
            inputs with warnings, and ``"strict"`` raises on invalid inputs.
        timeout
            Request timeout in seconds.

        Returns
        -------
        ResourceInstance or None
            The job, or ``None`` when it is missing or the request failed.
        """
        if validation != "off":
            normalized = _normalize_id(job_id)
            if normalized is None:
                if validation == "strict":
                    raise ValueError(f"Invalid job_id: {job_id!r}")
                self._logger.warning("Invalid job_id for get: %r", job_id)
                return None
            job_id = normalized
        return self._client.fetcher.fetch_one(self.type_name, job_id, timeout=timeout)

    def company(
        self,
        job: ResourceId | ResourceInstance,
        *,
        validation: ValidationMode = "warn",
    ) -> ResourceInstance | None:
        """Company that published a job.

        Parameters
        ----------
        job
            A ``Job`` instance, or a job id to fetch first.
        validation
            Validation mode: ``"off"`` sends inputs as-is, ``"warn"`` drops invalid
            inputs with warnings, and ``"strict"`` raises on invalid inputs.

        Returns
        -------
        ResourceInstance or None
            The company, or ``None`` when the job has no company or either
            fetch came back empty.
        """
        if not isinstance(job, ResourceInstance):
            fetched = self.get(job, validation=validation)
            if fetched is None:
                return None
            job = fetched
        return cast(Optional[ResourceInstance], self._related(job, "company", validation=validation))
