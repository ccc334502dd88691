"""DirBlur Codecs: image and raw raster conversion."""

from .image import from_pil, to_pil, load_image, save_image
from .raster import RasterCodec

__all__ = ["from_pil", "to_pil", "load_image", "save_image", "RasterCodec"]
