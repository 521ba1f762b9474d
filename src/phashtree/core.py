from __future__ import annotations

import numbers
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from .config import PhashTreeConfig
from .logging import get_logger
from .pipelines.hashing import AlgorithmKind, check_fingerprint, compute_hash, format_fingerprint
from .pipelines.sampling import sample_grid
from .store.repository import HashRepository

logger = get_logger(__name__)

Kind = Union[AlgorithmKind, str]


class SimilarityIndex:
    """Per-algorithm fingerprint stores with lazily built BK-tree indexes.

    ``image`` arguments accept a path, a PIL image, or a 2-D intensity grid.
    Grids already at the algorithm's resolution are hashed as-is.
    """

    def __init__(
        self,
        config: Optional[PhashTreeConfig] = None,
        preset: str = "default",
    ) -> None:
        self.cfg = config or PhashTreeConfig.load_preset(preset)
        self.cfg.validate()
        self._repos: Dict[AlgorithmKind, HashRepository] = {
            kind: HashRepository(
                kind,
                backend=self.cfg.backend,
                cache_policy=self.cfg.cache_policy,
                thread_safe=self.cfg.thread_safe,
            )
            for kind in AlgorithmKind
        }

    # helpers
    def _kind(self, kind: Optional[Kind]) -> AlgorithmKind:
        return AlgorithmKind.coerce(self.cfg.default_algorithm if kind is None else kind)

    def _max_distance(self, max_distance: Optional[int]) -> int:
        d = self.cfg.max_distance if max_distance is None else max_distance
        if isinstance(d, bool) or not isinstance(d, numbers.Integral) or not 0 <= d <= 64:
            raise ValueError(f"max_distance must be an integer within [0, 64], got {d!r}")
        return int(d)

    def repository(self, kind: Optional[Kind] = None) -> HashRepository:
        return self._repos[self._kind(kind)]

    # hashing
    def compute_hash(self, image: Any, kind: Optional[Kind] = None) -> int:
        k = self._kind(kind)
        width, height = k.grid_size
        grid = sample_grid(image, width, height, resample=self.cfg.resample)
        return compute_hash(grid, k)

    def compute_and_store(
        self,
        image: Any,
        kind: Optional[Kind] = None,
        identifier: Optional[str] = None,
    ) -> int:
        if identifier is None:
            if not isinstance(image, (str, Path)):
                raise ValueError("identifier is required unless image is a file path")
            identifier = Path(image).name

        k = self._kind(kind)
        fp = self.compute_hash(image, k)
        self._repos[k].put(fp, identifier)
        logger.debug("Stored %s %s -> %s", k.value, format_fingerprint(fp), identifier)
        return fp

    # search
    def find_similar_by_fingerprint(
        self,
        fp: int,
        kind: Optional[Kind] = None,
        max_distance: Optional[int] = None,
    ) -> Set[int]:
        k = self._kind(kind)
        d = self._max_distance(max_distance)
        fp = check_fingerprint(fp)
        found = self._repos[k].search(fp, d)
        logger.debug("%s search %s within %d: %d hits", k.value, format_fingerprint(fp), d, len(found))
        return found

    def find_similar_by_image(
        self,
        image: Any,
        kind: Optional[Kind] = None,
        max_distance: Optional[int] = None,
    ) -> List[str]:
        k = self._kind(kind)
        d = self._max_distance(max_distance)
        fp = self.compute_hash(image, k)
        return sorted(self._repos[k].lookup(fp, d))

    def find_similar(
        self,
        query: Any,
        kind: Optional[Kind] = None,
        max_distance: Optional[int] = None,
    ) -> Union[Set[int], List[str]]:
        """Fingerprint queries return fingerprints; image queries return identifiers."""
        if isinstance(query, numbers.Integral) and not isinstance(query, bool):
            return self.find_similar_by_fingerprint(query, kind, max_distance)
        return self.find_similar_by_image(query, kind, max_distance)

    def identifier_for(self, fp: int, kind: Optional[Kind] = None) -> Optional[str]:
        return self.repository(kind).get(check_fingerprint(fp))

    def count(self, kind: Optional[Kind] = None) -> int:
        return len(self.repository(kind))

    def __len__(self) -> int:
        return sum(len(r) for r in self._repos.values())

    # maintenance
    def clear_all(self) -> None:
        for repo in self._repos.values():
            repo.clear()
        logger.info("Cleared all fingerprint stores and indexes")

    def clear_tree_cache(self) -> None:
        for repo in self._repos.values():
            repo.drop_index()
        logger.info("Dropped cached indexes")
