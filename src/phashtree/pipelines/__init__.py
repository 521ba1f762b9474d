"""Grid sampling, fingerprint computation and the Hamming metric."""

from .distance import hamming_distance
from .hashing import (
    AlgorithmKind,
    blockhash,
    compute_hash,
    dhash,
    format_fingerprint,
    parse_fingerprint,
    phash,
)
from .sampling import sample_grid

__all__ = [
    "AlgorithmKind",
    "blockhash",
    "compute_hash",
    "dhash",
    "format_fingerprint",
    "hamming_distance",
    "parse_fingerprint",
    "phash",
    "sample_grid",
]
