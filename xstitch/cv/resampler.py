from __future__ import annotations

import io
import logging

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..core.errors import ImageLoadError

logger = logging.getLogger(__name__)


def load_image(data: bytes) -> Image.Image:
    """Decode image bytes into an RGBA Pillow image."""
    if not data:
        raise ImageLoadError("Image is empty")
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageLoadError(f"Cannot decode image: {exc}") from exc
    return img.convert("RGBA")


def resample_to_grid(image: Image.Image | np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Scale the image so that every stitch cell gets exactly one RGBA sample.

    Shrinking uses area averaging; anything else uses nearest neighbour so that
    enlarged cells keep the exact source colours.
    """
    import cv2

    if isinstance(image, Image.Image):
        arr = np.asarray(image.convert("RGBA"), dtype=np.uint8)
    else:
        arr = np.asarray(image, dtype=np.uint8)
        if arr.ndim == 2:
            arr = np.stack([arr, arr, arr, np.full_like(arr, 255)], axis=-1)
        elif arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)

    src_h, src_w = arr.shape[:2]
    if (src_w, src_h) == (width, height):
        return arr.copy()

    shrinking = width <= src_w and height <= src_h
    interpolation = cv2.INTER_AREA if shrinking else cv2.INTER_NEAREST
    out = cv2.resize(np.ascontiguousarray(arr), (width, height), interpolation=interpolation)
    logger.debug("Resampled %sx%s -> %sx%s", src_w, src_h, width, height)
    return out
