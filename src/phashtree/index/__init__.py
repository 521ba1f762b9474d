from __future__ import annotations

from typing import Iterable, Optional

from ..errors import ConfigError
from .base import HashIndex
from .bktree import BKTree
from .linear import LinearIndex

_BACKENDS = {
    "bktree": BKTree,
    "linear": LinearIndex,
}


def make_index(backend: str = "bktree", values: Optional[Iterable[int]] = None) -> HashIndex:
    try:
        cls = _BACKENDS[backend]
    except KeyError:
        raise ConfigError(f"Unknown index backend: {backend!r}") from None
    return cls(values)


__all__ = ["BKTree", "HashIndex", "LinearIndex", "make_index"]
