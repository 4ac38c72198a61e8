from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class Content:
    """
    A deliverable item (a journal prompt).

    :ivar id: Content identifier.
    :ivar text: Prompt text shown to the user.
    :ivar category: Category the item belongs to.
    """

    id: int | str
    text: str
    category: str


class ContentSelector(Protocol):
    """Port picking one active content item of a category."""

    def pick_active(self, category: str) -> Content | None:
        """Return a random active item of ``category`` or ``None`` when there is none."""


class InMemoryContentSelector(ContentSelector):
    """Selector over a fixed list of items; ``rng`` is injectable for determinism."""

    def __init__(self, items: list[Content] | None = None, *, rng: random.Random | None = None) -> None:
        self._items = list(items or [])
        self._rng = rng or random.Random()

    def add(self, item: Content) -> None:
        self._items.append(item)

    def pick_active(self, category: str) -> Content | None:
        candidates = [item for item in self._items if item.category == category]
        if not candidates:
            return None
        return self._rng.choice(candidates)
