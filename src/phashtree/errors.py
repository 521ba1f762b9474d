from __future__ import annotations


class PhashTreeError(RuntimeError):
    """Base error for phashtree."""


class ConfigError(PhashTreeError):
    """Raised for invalid configuration or a missing preset."""


class UnreadableImageError(PhashTreeError):
    """Raised when an image cannot be opened or decoded."""


class UnsupportedAlgorithmError(PhashTreeError):
    """Raised when a hash algorithm kind is not recognised."""


class GridShapeError(PhashTreeError, ValueError):
    """Raised when an intensity grid has the wrong shape for an algorithm."""


class GridValueError(PhashTreeError, ValueError):
    """Raised when an intensity grid is not integers within [0, 255]."""
