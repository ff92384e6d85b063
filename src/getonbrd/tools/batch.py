"""Resolve one relationship for many owners concurrently."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterable, Optional, Union

from tqdm import tqdm

from getonbrd.registry import RelatedCollection, RelationshipRegistry, ResourceInstance
from getonbrd.types import ResourceId
from getonbrd.utils import unique_in_order

_logger = logging.getLogger(__name__)

BatchResult = Union[list[ResourceInstance], Optional[ResourceInstance]]


def _materialize(registry: RelationshipRegistry, instance: ResourceInstance, name: str) -> BatchResult:
    related = registry.resolve(instance, name)
    if isinstance(related, RelatedCollection):
        return related.all()
    return related


def resolve_batch(
    registry: RelationshipRegistry,
    instances: Iterable[ResourceInstance],
    name: str,
    *,
    max_workers: int = 4,
    progress: bool = True,
) -> dict[ResourceId, BatchResult]:
    """Resolve relationship ``name`` for every instance.

    Owners must share one type and are deduplicated by id. The
    relationship is checked once before any fetch, so an undeclared name
    or missing target type raises immediately. Errors from the fetch
    collaborator propagate.

    Raises
    ------
    ValueError
        If ``instances`` mixes resource types.

    Parameters
    ----------
    registry
        Registry to resolve through.
    instances
        Owner instances, all of the same type.
    name
        Relationship name declared on the owners' type.
    max_workers
        Thread pool size; ``0`` resolves serially.
    progress
        Show a tqdm progress bar.

    Returns
    -------
    dict
        ``{owner_id: result}`` in input order, where ``result`` is a list for
        ``many`` relationships and an instance or ``None`` for ``one``.
    """
    instances = list(instances)
    owner_ids = unique_in_order(instance.id for instance in instances)
    if not owner_ids:
        return {}

    type_names = unique_in_order(instance.type_name for instance in instances)
    if len(type_names) > 1:
        raise ValueError(f"resolve_batch needs owners of one type, got {', '.join(type_names)}")
    declaration = registry.relationship(type_names[0], name)
    registry.get_type(declaration.target)

    by_id: dict[ResourceId, ResourceInstance] = {}
    for instance in instances:
        by_id.setdefault(instance.id, instance)

    results: dict[ResourceId, BatchResult] = {}

    if max_workers == 0:
        for owner_id in tqdm(owner_ids, desc=f"Resolving {name}", unit=" owners", disable=not progress):
            results[owner_id] = _materialize(registry, by_id[owner_id], name)
        return results

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(_materialize, registry, by_id[owner_id], name): owner_id
            for owner_id in owner_ids
        }
        with tqdm(total=len(futures), desc=f"Resolving {name} (parallel)", unit=" owners", disable=not progress) as pbar:
            for future in as_completed(futures):
                owner_id = futures[future]
                try:
                    results[owner_id] = future.result()
                except Exception:
                    _logger.warning("Resolving %s for %r failed", name, owner_id)
                    for pending in futures:
                        pending.cancel()
                    raise
                finally:
                    pbar.update(1)

    return {owner_id: results[owner_id] for owner_id in owner_ids}
