from __future__ import annotations

import contextlib
import threading
from typing import ContextManager, Dict, List, Optional, Set

from ..index import HashIndex, make_index
from ..logging import get_logger
from ..pipelines.hashing import AlgorithmKind

logger = get_logger(__name__)


class HashRepository:
    """Fingerprint -> identifier map for one algorithm, plus its cached index.

    The map and the index are guarded by one lock so a search never sees
    an index that disagrees with the map it was built from.

    Cache policies:
      - ``lazy``: a missing index is rebuilt from the whole map on the next
        store or search; a present index receives new fingerprints directly.
      - ``eager``: same, except dropping the index rebuilds it immediately so
        it is only ever absent before first use.
    """

    def __init__(
        self,
        kind: AlgorithmKind,
        backend: str = "bktree",
        cache_policy: str = "lazy",
        thread_safe: bool = True,
    ) -> None:
        self.kind = kind
        self.backend = backend
        self.cache_policy = cache_policy
        self._entries: Dict[int, str] = {}
        self._index: Optional[HashIndex] = None
        self._lock = threading.RLock() if thread_safe else None

    def locked(self) -> ContextManager:
        if self._lock is None:
            return contextlib.nullcontext()
        return self._lock

    @property
    def has_index(self) -> bool:
        return self._index is not None

    def _build_index(self) -> HashIndex:
        index = make_index(self.backend, self._entries.keys())
        logger.debug(
            "Built %s index for %s with %d fingerprints",
            self.backend,
            self.kind.value,
            len(index),
        )
        return index

    def ensure_index(self) -> HashIndex:
        with self.locked():
            if self._index is None:
                self._index = self._build_index()
            return self._index

    def put(self, fp: int, identifier: str) -> None:
        """Store ``fp -> identifier`` (last write wins) and keep the index current."""
        with self.locked():
            previous = self._entries.get(fp)
            self._entries[fp] = identifier
            if previous is not None and previous != identifier:
                logger.debug(
                    "%s %016x: %r replaces %r", self.kind.value, fp, identifier, previous
                )

            if self._index is None:
                self._index = self._build_index()
            elif previous is None:
                self._index.add(fp)

    def get(self, fp: int) -> Optional[str]:
        with self.locked():
            return self._entries.get(fp)

    def search(self, query: int, max_distance: int) -> Set[int]:
        with self.locked():
            return self.ensure_index().search(query, max_distance)

    def lookup(self, query: int, max_distance: int) -> List[str]:
        """Identifiers of every stored fingerprint within ``max_distance`` of ``query``."""
        with self.locked():
            matches = self.search(query, max_distance)
            found = (self._entries.get(fp) for fp in matches)
            return [ident for ident in found if ident is not None]

    def drop_index(self) -> None:
        with self.locked():
            self._index = None
            if self.cache_policy == "eager" and self._entries:
                self._index = self._build_index()

    def clear(self) -> None:
        with self.locked():
            self._entries.clear()
            self._index = None

    def __len__(self) -> int:
        return len(self._entries)
