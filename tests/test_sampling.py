from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from phashtree.errors import ConfigError, GridShapeError, GridValueError, UnreadableImageError
from phashtree.pipelines.sampling import sample_grid


def _gradient_image(width: int = 100, height: int = 60) -> Image.Image:
    row = np.linspace(0, 255, width).astype(np.uint8)
    return Image.fromarray(np.tile(row, (height, 1)))


def test_sample_pil_image_shape_and_range():
    grid = sample_grid(_gradient_image(), 9, 8)
    assert grid.shape == (8, 9)
    assert grid.min() >= 0 and grid.max() <= 255


def test_sample_path_matches_pil_image(tmp_path: Path):
    im = _gradient_image().convert("RGB")
    p = tmp_path / "grad.png"
    im.save(p)
    assert np.array_equal(sample_grid(p, 32, 32), sample_grid(im, 32, 32))
    assert np.array_equal(sample_grid(str(p), 8, 8), sample_grid(im, 8, 8))


def test_grid_with_target_shape_passes_through():
    grid = np.arange(72).reshape(8, 9)
    out = sample_grid(grid, 9, 8)
    assert np.array_equal(out, grid)


def test_grid_with_other_shape_is_resampled():
    grid = np.full((40, 40), 200)
    out = sample_grid(grid, 8, 8)
    assert out.shape == (8, 8)
    assert np.all(np.abs(out - 200) <= 1)


def test_non_2d_grid_rejected():
    with pytest.raises(GridShapeError):
        sample_grid(np.zeros((8, 8, 3)), 8, 8)


def test_missing_file(tmp_path: Path):
    with pytest.raises(UnreadableImageError):
        sample_grid(tmp_path / "nonexistent.png", 8, 8)


def test_corrupted_file(tmp_path: Path):
    corrupted = tmp_path / "corrupted.png"
    corrupted.write_bytes(b"not an image")
    with pytest.raises(UnreadableImageError):
        sample_grid(corrupted, 8, 8)


def test_unknown_resample_filter():
    with pytest.raises(ConfigError):
        sample_grid(_gradient_image(), 8, 8, resample="sinc")


@pytest.mark.parametrize("shape", [(8, 8), (40, 40)])
def test_float_grid_rejected(shape):
    grid = np.random.default_rng(0).random(shape)
    with pytest.raises(GridValueError):
        sample_grid(grid, 8, 8)


@pytest.mark.parametrize("shape", [(8, 8), (40, 40)])
@pytest.mark.parametrize("value", [-5, 256, 70000])
def test_out_of_range_grid_rejected(shape, value):
    grid = np.full(shape, value)
    with pytest.raises(GridValueError):
        sample_grid(grid, 8, 8)
