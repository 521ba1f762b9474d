from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Set


class HashIndex(ABC):
    """Range-searchable collection of 64-bit fingerprints."""

    @abstractmethod
    def add(self, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def search(self, query: int, max_distance: int) -> Set[int]:
        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def __iter__(self) -> Iterator[int]:
        raise NotImplementedError

    def update(self, values: Iterable[int]) -> None:
        for v in values:
            self.add(v)
