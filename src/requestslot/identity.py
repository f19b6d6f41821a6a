from __future__ import annotations

from collections.abc import Iterable


class TagAllocator:
    """Hand out integer tags that stay unique for the allocator's lifetime."""

    def __init__(self, start: int = 0, reserved: Iterable[int] = ()) -> None:
        self._start = start
        self._counter = start
        self._used_tags: set[int] = set(reserved)

    @property
    def used_tags(self) -> frozenset[int]:
        return frozenset(self._used_tags)

    def is_allocated(self, tag: int) -> bool:
        return tag in self._used_tags

    def allocate(self) -> int:
        self._counter += 1
        while self._counter in self._used_tags:
            self._counter += 1
        self._used_tags.add(self._counter)
        return self._counter

    def reset(self) -> None:
        self._counter = self._start
        self._used_tags.clear()
