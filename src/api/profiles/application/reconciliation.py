"""Diff planning for profile child collections.

A submitted collection is the complete desired state. Planning compares
it with the owner's stored items and produces the minimal set of
deletes, updates and creates. Planning is pure; applying the plan is the
profile service's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

LINK_FIELDS = ("title", "url", "visible")
LINK_REQUIRED = ("title", "url")

SOCIAL_LINK_FIELDS = ("platform", "url", "visible")
SOCIAL_LINK_REQUIRED = ("platform", "url")


class _Identified(Protocol):
    @property
    def id(self) -> Any: ...


@dataclass(frozen=True)
class ItemUpdate:
    """Changed field values for one stored item."""

    item_id: int
    changes: dict[str, Any]


@dataclass(frozen=True)
class CollectionPlan:
    """Mutations needed to turn the stored collection into the submitted one."""

    deletes: list[int] = field(default_factory=list)
    updates: list[ItemUpdate] = field(default_factory=list)
    creates: list[dict[str, Any]] = field(default_factory=list)
    skipped: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.deletes or self.updates or self.creates)


def _is_provided(name: str, value: Any, required: Sequence[str]) -> bool:
    if value is None:
        return False
    if name in required and isinstance(value, str) and not value.strip():
        return False
    return True


def plan_collection(
    stored: Sequence[_Identified],
    submitted: Sequence[_Identified],
    fields: Sequence[str],
    required: Sequence[str],
) -> CollectionPlan:
    """Plan the mutations for one collection.

    Matching is by id against ``stored`` only, so an id the owner does not
    own can never select a row. Rules:

    - a stored item whose id is not submitted is deleted
    - a submitted entry matching a stored id updates the provided fields
      that differ; an entry identical to what is stored produces nothing
    - an unmatched entry carrying every required field is created, with
      ``visible`` defaulting to True
    - any other entry, including a repeat of an already matched id, is
      skipped

    Args:
        stored: The owner's persisted items (each with ``id`` and ``fields``)
        submitted: Submitted entries; ``id`` is a parsed candidate or None
            and None field values mean "not provided"
        fields: Attribute names that may be written
        required: Attribute names an entry needs to be created

    Returns:
        The collection plan; ``creates`` lists field values in submission order
    """
    by_id = {item.id: item for item in stored}
    matched: set[int] = set()
    updates: list[ItemUpdate] = []
    creates: list[dict[str, Any]] = []
    skipped = 0

    for entry in submitted:
        entry_id = entry.id
        if entry_id is not None and entry_id in matched:
            skipped += 1
            continue

        current = by_id.get(entry_id) if entry_id is not None else None
        if current is not None:
            matched.add(entry_id)
            changes = {
                name: getattr(entry, name)
                for name in fields
                if _is_provided(name, getattr(entry, name), required)
                and getattr(entry, name) != getattr(current, name)
            }
            if changes:
                updates.append(ItemUpdate(item_id=entry_id, changes=changes))
            continue

        if all(_is_provided(name, getattr(entry, name), required) for name in required):
            values = {
                name: getattr(entry, name)
                for name in fields
                if getattr(entry, name) is not None
            }
            values.setdefault("visible", True)
            creates.append(values)
        else:
            skipped += 1

    deletes = [item.id for item in stored if item.id not in matched]
    return CollectionPlan(
        deletes=deletes,
        updates=updates,
        creates=creates,
        skipped=skipped,
    )
