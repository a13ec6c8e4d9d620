"""Write pixel buffers to image files with Pillow."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from .rasterizer import PixelBuffer

PathLike = Union[str, Path]

DEFAULT_SUFFIX = ".bmp"


def to_image(buffer: PixelBuffer) -> Image.Image:
    """Unpack ``red<<24 | green<<16 | blue<<8`` pixels into an RGB image."""
    pixels = buffer.pixels
    channels = np.stack(
        [
            (pixels >> 24) & 0xFF,
            (pixels >> 16) & 0xFF,
            (pixels >> 8) & 0xFF,
        ],
        axis=-1,
    ).astype(np.uint8)
    return Image.fromarray(channels)


def save_buffer(buffer: PixelBuffer, path: PathLike) -> Path:
    """Encode ``buffer`` to ``path``; the format follows the suffix, BMP when missing."""
    target = Path(path)
    if not target.suffix:
        target = target.with_suffix(DEFAULT_SUFFIX)
    target.parent.mkdir(parents=True, exist_ok=True)
    to_image(buffer).save(target)
    return target


__all__ = ["DEFAULT_SUFFIX", "save_buffer", "to_image"]
