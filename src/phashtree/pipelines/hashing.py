from __future__ import annotations

import enum
import numbers
from typing import Callable, Dict, Iterable, Tuple, Union

import numpy as np

from ..errors import GridShapeError, GridValueError, UnsupportedAlgorithmError

FINGERPRINT_BITS = 64
FINGERPRINT_MASK = (1 << FINGERPRINT_BITS) - 1

PHASH_SIZE = 32
PHASH_LOW_FREQ = 8


class AlgorithmKind(enum.Enum):
    PHASH = "phash"
    DHASH = "dhash"
    BLOCKHASH = "blockhash"

    @property
    def grid_size(self) -> Tuple[int, int]:
        """(width, height) of the intensity grid this algorithm consumes."""
        return _GRID_SIZES[self]

    @classmethod
    def coerce(cls, kind: Union["AlgorithmKind", str]) -> "AlgorithmKind":
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            try:
                return cls(kind.strip().lower())
            except ValueError:
                pass
        raise UnsupportedAlgorithmError(f"Unsupported hash algorithm: {kind!r}")


_GRID_SIZES: Dict[AlgorithmKind, Tuple[int, int]] = {
    AlgorithmKind.PHASH: (PHASH_SIZE, PHASH_SIZE),
    AlgorithmKind.DHASH: (9, 8),
    AlgorithmKind.BLOCKHASH: (8, 8),
}


def check_intensities(arr: np.ndarray) -> np.ndarray:
    """Require integer samples within [0, 255]; returns them as int16."""
    arr = np.asarray(arr)
    if not np.issubdtype(arr.dtype, np.integer):
        raise GridValueError(f"Intensity grid must hold integers, got dtype {arr.dtype}")
    if arr.size and (arr.min() < 0 or arr.max() > 255):
        raise GridValueError(
            f"Intensities must be within [0, 255], got [{arr.min()}, {arr.max()}]"
        )
    return arr.astype(np.int16)


def check_fingerprint(fp: int) -> int:
    if isinstance(fp, bool) or not isinstance(fp, numbers.Integral):
        raise ValueError(f"Fingerprint must be an integer, got {fp!r}")
    fp = int(fp)
    if not 0 <= fp <= FINGERPRINT_MASK:
        raise ValueError(f"Fingerprint does not fit in {FINGERPRINT_BITS} unsigned bits: {fp}")
    return fp


def _check_grid(grid: np.ndarray, kind: AlgorithmKind) -> np.ndarray:
    width, height = kind.grid_size
    arr = np.asarray(grid)
    if arr.shape != (height, width):
        raise GridShapeError(
            f"{kind.value} expects a {height}x{width} grid (rows x cols), got shape {arr.shape}"
        )
    return check_intensities(arr)


def pack_bits(bits: Iterable[bool]) -> int:
    """Pack booleans into an int, first element as the most significant bit."""
    h = 0
    for b in bits:
        h = (h << 1) | int(bool(b))
    return h


def median_upper(values: np.ndarray) -> float:
    """Middle element of the ascending sort; the upper middle for even lengths."""
    flat = np.sort(np.asarray(values).ravel())
    return flat[flat.size // 2]


def _dct_basis(n: int) -> np.ndarray:
    k = np.arange(n, dtype=np.float64)[:, None]
    i = np.arange(n, dtype=np.float64)[None, :]
    return np.cos((2.0 * i + 1.0) * k * np.pi / (2.0 * n))


def dct2(f: np.ndarray) -> np.ndarray:
    """Type-II 2-D DCT with 0.25*C(u)*C(v) scaling, C(0) = 1/sqrt(2).

    Separable form of F(u,v) = 0.25 C(u) C(v) sum_ij f(i,j) cos(..u..) cos(..v..):
    B @ f @ B.T where B[u, i] = cos((2i+1) u pi / 2N).
    """
    f = np.asarray(f, dtype=np.float64)
    n = f.shape[0]
    basis = _dct_basis(n)
    c = np.ones(n, dtype=np.float64)
    c[0] = 1.0 / np.sqrt(2.0)
    return 0.25 * np.outer(c, c) * (basis @ f @ basis.T)


def phash(grid: np.ndarray) -> int:
    """Perceptual hash from the 8x8 lowest DCT frequencies of a 32x32 grid."""
    arr = _check_grid(grid, AlgorithmKind.PHASH)
    coeffs = dct2(arr)[:PHASH_LOW_FREQ, :PHASH_LOW_FREQ].ravel()
    med = median_upper(coeffs)
    return pack_bits((coeffs > med).tolist())


def dhash(grid: np.ndarray) -> int:
    """Difference hash: bit is set where a pixel is brighter than its right neighbour."""
    arr = _check_grid(grid, AlgorithmKind.DHASH)
    diff = arr[:, :-1] > arr[:, 1:]
    return pack_bits(diff.ravel().tolist())


def blockhash(grid: np.ndarray) -> int:
    arr = _check_grid(grid, AlgorithmKind.BLOCKHASH).ravel()
    med = median_upper(arr)
    return pack_bits((arr > med).tolist())


_HASHERS: Dict[AlgorithmKind, Callable[[np.ndarray], int]] = {
    AlgorithmKind.PHASH: phash,
    AlgorithmKind.DHASH: dhash,
    AlgorithmKind.BLOCKHASH: blockhash,
}


def compute_hash(grid: np.ndarray, kind: Union[AlgorithmKind, str]) -> int:
    kind = AlgorithmKind.coerce(kind)
    hasher = _HASHERS.get(kind)
    if hasher is None:
        raise UnsupportedAlgorithmError(f"No hash function registered for {kind.value}")
    return hasher(grid)


def format_fingerprint(fp: int) -> str:
    return f"{fp:016x}"


def parse_fingerprint(text: str) -> int:
    try:
        fp = int(text.strip(), 16)
    except ValueError as e:
        raise ValueError(f"Not a hex fingerprint: {text!r}") from e
    if not 0 <= fp <= FINGERPRINT_MASK:
        raise ValueError(f"Fingerprint does not fit in {FINGERPRINT_BITS} bits: {text!r}")
    return fp
