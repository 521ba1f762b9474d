from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Optional, Set

from ..pipelines.distance import hamming_distance
from .base import HashIndex


class LinearIndex(HashIndex):
    """Brute-force index: every search compares the query with every stored value."""

    def __init__(
        self,
        values: Optional[Iterable[int]] = None,
        distance: Callable[[int, int], int] = hamming_distance,
    ) -> None:
        self.distance = distance
        self._values: List[int] = []
        if values is not None:
            self.update(values)

    def add(self, value: int) -> None:
        self._values.append(int(value))

    def search(self, query: int, max_distance: int) -> Set[int]:
        if max_distance < 0:
            raise ValueError(f"max_distance must be >= 0, got {max_distance}")
        return {v for v in self._values if self.distance(v, query) <= max_distance}

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)
