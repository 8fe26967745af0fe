"""Reconcile a parent's child collection with the list submitted on update."""

from collections.abc import Callable, Sequence
from typing import Any

from pydantic import BaseModel

from voyage.core.exceptions import NotFoundError


def sync_children(
    collection: list[Any],
    items: Sequence[BaseModel],
    factory: Callable[..., Any],
    resource: str,
) -> None:
    """
    Make ``collection`` match ``items``.

    Children whose id is missing from ``items`` are removed (the relationship
    must cascade ``delete-orphan``), items carrying an id update that child in
    place, and items without an id are appended as new children built by
    ``factory``. Runs inside the caller's transaction.

    Raises:
        NotFoundError: if an item references an id that is not a child of this parent
    """
    existing = {child.id: child for child in collection}
    keep_ids = {item.id for item in items if getattr(item, "id", None)}

    for child_id, child in existing.items():
        if child_id not in keep_ids:
            collection.remove(child)

    for item in items:
        values = item.model_dump(exclude={"id"})
        child_id = getattr(item, "id", None)
        if child_id:
            child = existing.get(child_id)
            if child is None:
                raise NotFoundError(resource, child_id)
            for field, value in values.items():
                setattr(child, field, value)
        else:
            collection.append(factory(**values))
