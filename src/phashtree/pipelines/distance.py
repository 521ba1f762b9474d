from __future__ import annotations


def hamming_distance(a: int, b: int) -> int:
    """Number of differing bits between two fingerprints."""
    return (int(a) ^ int(b)).bit_count()
