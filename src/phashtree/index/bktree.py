from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator, List, Optional, Set

from ..pipelines.distance import hamming_distance
from .base import HashIndex


class _Node:
    __slots__ = ("value", "children")

    def __init__(self, value: int) -> None:
        self.value = value
        # distance from this node's value -> child subtree
        self.children: Dict[int, _Node] = {}


class BKTree(HashIndex):
    """Burkhard-Keller tree over a discrete metric (Hamming distance by default).

    Every child is keyed by its exact distance to the parent, fixed at
    insertion. A value whose distance to a node matches an existing key is
    pushed down into that child rather than stored beside it.

    Range search prunes with the triangle inequality: a child keyed ``k``
    under a node at distance ``d`` from the query can only contain matches
    when ``d - max_distance <= k <= d + max_distance``. The distance
    function must therefore be a true metric.
    """

    def __init__(
        self,
        values: Optional[Iterable[int]] = None,
        distance: Callable[[int, int], int] = hamming_distance,
    ) -> None:
        self.distance = distance
        self._root: Optional[_Node] = None
        self._size = 0
        if values is not None:
            self.update(values)

    def add(self, value: int) -> None:
        value = int(value)
        self._size += 1
        if self._root is None:
            self._root = _Node(value)
            return

        node = self._root
        while True:
            d = self.distance(node.value, value)
            child = node.children.get(d)
            if child is None:
                node.children[d] = _Node(value)
                return
            node = child

    def search(self, query: int, max_distance: int) -> Set[int]:
        if max_distance < 0:
            raise ValueError(f"max_distance must be >= 0, got {max_distance}")

        found: Set[int] = set()
        if self._root is None:
            return found

        stack: List[_Node] = [self._root]
        while stack:
            node = stack.pop()
            d = self.distance(node.value, query)
            if d <= max_distance:
                found.add(node.value)

            lo = max(0, d - max_distance)
            hi = d + max_distance
            for k, child in node.children.items():
                if lo <= k <= hi:
                    stack.append(child)
        return found

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[int]:
        if self._root is None:
            return
        stack: List[_Node] = [self._root]
        while stack:
            node = stack.pop()
            yield node.value
            stack.extend(reversed(list(node.children.values())))
