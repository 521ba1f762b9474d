from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import ConfigError, GridShapeError, UnreadableImageError
from .hashing import check_intensities

ImageSource = Union[str, Path, Image.Image, np.ndarray]

RESAMPLE_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "box": Image.Resampling.BOX,
    "bilinear": Image.Resampling.BILINEAR,
    "hamming": Image.Resampling.HAMMING,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


def _resample_filter(name: str) -> Image.Resampling:
    try:
        return RESAMPLE_FILTERS[name]
    except KeyError:
        raise ConfigError(
            f"Unknown resample filter {name!r}; expected one of {sorted(RESAMPLE_FILTERS)}"
        ) from None


def _resize(im: Image.Image, width: int, height: int, resample: str) -> np.ndarray:
    im = im.convert("L").resize((width, height), _resample_filter(resample))
    return np.asarray(im, dtype=np.int16)


def sample_grid(
    image: ImageSource,
    width: int,
    height: int,
    resample: str = "lanczos",
) -> np.ndarray:
    """Turn an image into a ``(height, width)`` grid of 0-255 intensities.

    ``image`` may be a path, a PIL image, or a 2-D array of intensities.
    Arrays must hold integers within [0, 255]. Those that already have the
    requested shape are passed through as-is; everything else is converted
    to grayscale and resized with Pillow.
    """
    if isinstance(image, Image.Image):
        return _resize(image, width, height, resample)

    if isinstance(image, (str, Path)):
        path = Path(image)
        try:
            with Image.open(path) as im:
                return _resize(im, width, height, resample)
        except (UnidentifiedImageError, OSError) as e:
            raise UnreadableImageError(f"Cannot read image {path}: {e}") from e

    arr = np.asarray(image)
    if arr.ndim != 2:
        raise GridShapeError(f"Intensity grid must be 2-D, got shape {arr.shape}")
    arr = check_intensities(arr)
    if arr.shape == (height, width):
        return arr

    # Wrong resolution: let Pillow resample it like any other image
    return _resize(Image.fromarray(arr.astype(np.uint8)), width, height, resample)
