"""The fixed bird table and the cursor that walks it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from birdrec.constants import BIRD_IMAGES, BIRDS


@dataclass(frozen=True)
class BirdEntry:
    """One "identification result": a bird name and its decibel string."""
    name: str
    decibel_range: str

    @property
    def image(self) -> Optional[str]:
        """Image resource name for this bird, if one is registered."""
        return BIRD_IMAGES.get(self.name)


DEFAULT_TABLE: tuple[BirdEntry, ...] = tuple(BirdEntry(name, db) for name, db in BIRDS)


class ResultRotator:
    """Hands out table entries in order, wrapping at the end."""

    def __init__(self, entries: Sequence[BirdEntry] = DEFAULT_TABLE):
        if not entries:
            raise ValueError("Result table must contain at least one entry")
        self._entries = tuple(entries)
        self._cursor = 0

    def next(self) -> BirdEntry:
        """Return the entry at the cursor, then advance the cursor."""
        entry = self._entries[self._cursor]
        self._cursor = (self._cursor + 1) % len(self._entries)
        return entry

    def peek(self) -> BirdEntry:
        return self._entries[self._cursor]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> tuple[BirdEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)
