"""Bounded LRU cache for per-character stroke data.

One entry per character. A stored None means "looked up, not available".
Writers racing on the same key simply overwrite each other: stroke data for
a character is deterministic, so last-writer-wins is safe.
"""

from __future__ import annotations

from collections import OrderedDict

_MISSING = object()


class StrokeCache:
    def __init__(self, max_size: int = 2048) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self._entries: OrderedDict[str, list[str] | None] = OrderedDict()

    def __contains__(self, char: str) -> bool:
        return char in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, char: str, default=_MISSING):
        """Cached strokes (or None for a known miss); KeyError if never stored."""
        if char not in self._entries:
            if default is _MISSING:
                raise KeyError(char)
            return default
        self._entries.move_to_end(char)
        return self._entries[char]

    def put(self, char: str, strokes: list[str] | None) -> None:
        self._entries[char] = list(strokes) if strokes is not None else None
        self._entries.move_to_end(char)
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
