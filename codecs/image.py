"""Conversion between Pillow images and packed rasters."""

import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from ..core import PixelLayout, Raster, aligned_stride

logger = logging.getLogger(__name__)

# RGB(A) <-> BGR(A); each permutation is its own inverse
_CHANNEL_ORDER = {
    PixelLayout.RGB24: [2, 1, 0],
    PixelLayout.ARGB32: [2, 1, 0, 3],
}

_NO_ALPHA_SUFFIXES = {".jpg", ".jpeg", ".bmp"}


def from_pil(image: Image.Image, alignment: int = 4) -> Raster:
    """Convert a Pillow image to a raster with B,G,R,[A] pixel bytes.

    "L", "RGB" and "RGBA" map directly to Indexed8, RGB24 and ARGB32. Other
    modes are converted to RGBA if they carry transparency, else to RGB.
    Rows are padded to a multiple of ``alignment`` bytes.
    """
    if image.mode not in ("L", "RGB", "RGBA"):
        has_alpha = "A" in image.getbands() or "transparency" in image.info
        target = "RGBA" if has_alpha else "RGB"
        logger.debug("Converting %s image to %s", image.mode, target)
        image = image.convert(target)

    layout = PixelLayout.from_pil_mode(image.mode)
    arr = np.array(image, dtype=np.uint8)
    if layout in _CHANNEL_ORDER:
        arr = arr[..., _CHANNEL_ORDER[layout]]
    stride = aligned_stride(image.width, layout, alignment)
    return Raster.from_array(arr, layout, stride)


def to_pil(raster: Raster) -> Image.Image:
    """Convert a raster back to an "L", "RGB" or "RGBA" Pillow image."""
    arr = raster.to_array()
    if raster.layout in _CHANNEL_ORDER:
        arr = arr[..., _CHANNEL_ORDER[raster.layout]]
    else:
        arr = arr[..., 0]
    return Image.fromarray(np.ascontiguousarray(arr))


def load_image(path: Union[str, Path], alignment: int = 4) -> Raster:
    """Decode an image file into a raster."""
    with Image.open(path) as img:
        img.load()
        raster = from_pil(img, alignment)
    logger.info("Loaded %s: %dx%d %s", path, raster.width, raster.height, raster.layout.name)
    return raster


def save_image(path: Union[str, Path], raster: Raster) -> None:
    """Encode a raster to an image file; the format follows the suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    img = to_pil(raster)
    if img.mode == "RGBA" and path.suffix.lower() in _NO_ALPHA_SUFFIXES:
        img = img.convert("RGB")
    img.save(path)
    logger.info("Saved %s", path)
