"""phashtree: perceptual image fingerprints indexed in BK-trees for near-duplicate lookup."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .config import PhashTreeConfig
from .core import SimilarityIndex
from .errors import (
    ConfigError,
    GridShapeError,
    GridValueError,
    PhashTreeError,
    UnreadableImageError,
    UnsupportedAlgorithmError,
)
from .index import BKTree
from .pipelines import AlgorithmKind, compute_hash, hamming_distance

try:
    __version__ = version("phashtree")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "AlgorithmKind",
    "BKTree",
    "ConfigError",
    "GridShapeError",
    "GridValueError",
    "PhashTreeConfig",
    "PhashTreeError",
    "SimilarityIndex",
    "UnreadableImageError",
    "UnsupportedAlgorithmError",
    "compute_hash",
    "hamming_distance",
    "__version__",
]
