from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from xstitch.core.errors import ImageLoadError
from xstitch.cv.resampler import load_image, resample_to_grid
from tests.utils import make_noise, make_stripes, png_bytes


def test_load_image_returns_rgba():
    rgb = np.zeros((4, 6, 3), dtype=np.uint8)
    img = load_image(png_bytes(rgb))
    assert img.mode == "RGBA"
    assert img.size == (6, 4)


@pytest.mark.parametrize("payload", [b"", b"not an image"])
def test_load_image_rejects_garbage(payload):
    with pytest.raises(ImageLoadError):
        load_image(payload)


def test_same_size_is_a_copy():
    arr = make_noise(5, 3)
    out = resample_to_grid(arr, 5, 3)
    assert out.shape == (3, 5, 4)
    assert np.array_equal(out, arr)
    out[0, 0, 0] ^= 1
    assert not np.array_equal(out, arr)


def test_shrink_gives_one_sample_per_cell():
    out = resample_to_grid(Image.fromarray(make_noise(40, 30)), 8, 6)
    assert out.shape == (6, 8, 4)
    assert out.dtype == np.uint8


def test_enlarge_keeps_source_colours():
    arr = make_stripes(2, 1, [(255, 0, 0), (0, 0, 255)])
    out = resample_to_grid(arr, 4, 2)
    assert out.shape == (2, 4, 4)
    assert tuple(out[1, 0]) == (255, 0, 0, 255)
    assert tuple(out[0, 3]) == (0, 0, 255, 255)


def test_rgb_array_gets_opaque_alpha():
    arr = np.full((2, 2, 3), 7, dtype=np.uint8)
    out = resample_to_grid(arr, 2, 2)
    assert out.shape == (2, 2, 4)
    assert (out[..., 3] == 255).all()
