"""DirBlur Core: packed rasters and horizontal convolution."""

from .errors import (
    RasterError,
    UnsupportedLayoutError,
    KernelError,
    RasterAllocationError,
    FilterCancelled,
)
from .layout import PixelLayout
from .color import Color32, PreciseColor, clamp_0_255
from .raster import Raster, aligned_stride
from .filter import REFERENCE_KERNEL, ConvolutionFilter, convolve, plan_bands
from .config import FilterConfig

__all__ = [
    "RasterError",
    "UnsupportedLayoutError",
    "KernelError",
    "RasterAllocationError",
    "FilterCancelled",
    "PixelLayout",
    "Color32",
    "PreciseColor",
    "clamp_0_255",
    "Raster",
    "aligned_stride",
    "REFERENCE_KERNEL",
    "ConvolutionFilter",
    "convolve",
    "plan_bands",
    "FilterConfig",
]
