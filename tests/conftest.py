"""Pytest fixtures for Image Tweener tests."""

import numpy as np
import pytest
from PIL import Image

from tweener.models import FrameImage, Pixel


BLACK = Pixel(0, 0, 0)
WHITE = Pixel(255, 255, 255)


@pytest.fixture
def black_2x2():
    return FrameImage.solid(BLACK, 2, 2)


@pytest.fixture
def white_2x2():
    return FrameImage.solid(WHITE, 2, 2)


@pytest.fixture
def gradient_images():
    """Four distinct 3x2 images with varied channel values."""
    rng = np.random.default_rng(1234)
    return [
        FrameImage.from_array(rng.integers(0, 256, size=(2, 3, 3), dtype=np.uint8))
        for _ in range(4)
    ]


@pytest.fixture
def write_png(tmp_path):
    """Write an (H, W, C) uint8 array as a PNG and return its path."""
    def _write(name, array, mode=None):
        path = tmp_path / name
        img = Image.fromarray(np.asarray(array, dtype=np.uint8))
        if mode:
            img = img.convert(mode)
        img.save(path)
        return path
    return _write
