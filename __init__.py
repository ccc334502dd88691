"""DirBlur: horizontal convolution blur over packed-pixel rasters.

Main components:
- core: pixel layouts, rasters, precise colors and the convolution filter
- codecs: Pillow image and raw .npy raster conversion
"""

from .core import (
    RasterError,
    UnsupportedLayoutError,
    KernelError,
    RasterAllocationError,
    FilterCancelled,
    PixelLayout,
    Color32,
    PreciseColor,
    clamp_0_255,
    Raster,
    aligned_stride,
    REFERENCE_KERNEL,
    ConvolutionFilter,
    convolve,
    FilterConfig,
)
from .codecs import RasterCodec, from_pil, to_pil, load_image, save_image

__version__ = "0.1.0"
__all__ = [
    # Errors
    "RasterError",
    "UnsupportedLayoutError",
    "KernelError",
    "RasterAllocationError",
    "FilterCancelled",
    # Core
    "PixelLayout",
    "Color32",
    "PreciseColor",
    "clamp_0_255",
    "Raster",
    "aligned_stride",
    "REFERENCE_KERNEL",
    "ConvolutionFilter",
    "convolve",
    "FilterConfig",
    # Codecs
    "RasterCodec",
    "from_pil",
    "to_pil",
    "load_image",
    "save_image",
]
