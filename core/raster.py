"""Packed-pixel raster with bounds-checked pixel access."""

from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np

from .color import Color32, PreciseColor
from .errors import RasterAllocationError, RasterError, UnsupportedLayoutError
from .layout import PixelLayout


def aligned_stride(width: int, layout: PixelLayout, alignment: int = 4) -> int:
    """Row size in bytes rounded up to a multiple of ``alignment``."""
    if alignment < 1:
        raise RasterError(f"Row alignment must be >= 1, got {alignment}")
    row = width * layout.bytes_per_pixel
    return -(-row // alignment) * alignment


def _allocate(size: int) -> bytearray:
    try:
        return bytearray(size)
    except MemoryError as e:
        raise RasterAllocationError(f"Cannot allocate {size} bytes for raster") from e


@dataclass
class Raster:
    """Raw image buffer: ``height`` rows of ``stride`` bytes each.

    Each pixel occupies ``layout.bytes_per_pixel`` bytes stored as
    B, G, R, [A]. Bytes between ``row_bytes`` and ``stride`` are padding.

    Pixel reads outside the image return a zero color and writes outside the
    image are ignored, which gives convolutions zero padding at the edges.
    """
    width: int
    height: int
    stride: int
    layout: PixelLayout
    data: bytearray = field(repr=False)

    def __post_init__(self):
        if not isinstance(self.layout, PixelLayout):
            raise UnsupportedLayoutError(f"Unsupported pixel layout: {self.layout!r}")
        if self.width <= 0 or self.height <= 0:
            raise RasterError(f"Raster size must be positive, got {self.width}x{self.height}")
        if self.stride < self.row_bytes:
            raise RasterError(
                f"Stride {self.stride} is smaller than row size {self.row_bytes} "
                f"({self.width} px x {self.layout.bytes_per_pixel} bytes)"
            )
        if not isinstance(self.data, bytearray):
            self.data = bytearray(self.data)
        expected = self.stride * self.height
        if len(self.data) != expected:
            raise RasterError(
                f"Buffer length {len(self.data)} does not match stride*height = {expected}"
            )

    @property
    def row_bytes(self) -> int:
        return self.width * self.layout.bytes_per_pixel

    @property
    def shape(self):
        """(width, height, stride, layout) tuple shared by filter input and output."""
        return self.width, self.height, self.stride, self.layout

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        layout: PixelLayout,
        stride: Optional[int] = None,
    ) -> "Raster":
        """Zero-filled raster. Default stride has no row padding."""
        if stride is None:
            stride = width * layout.bytes_per_pixel
        if width <= 0 or height <= 0:
            raise RasterError(f"Raster size must be positive, got {width}x{height}")
        if stride < width * layout.bytes_per_pixel:
            raise RasterError(f"Stride {stride} is smaller than row size {width * layout.bytes_per_pixel}")
        return cls(width, height, stride, layout, _allocate(stride * height))

    def blank_like(self) -> "Raster":
        return Raster.blank(self.width, self.height, self.layout, self.stride)

    def copy(self) -> "Raster":
        return Raster(self.width, self.height, self.stride, self.layout, bytearray(self.data))

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def offset(self, x: int, y: int) -> int:
        return self.stride * y + self.layout.bytes_per_pixel * x

    def get_pixel(self, x: int, y: int) -> PreciseColor:
        """Read pixel (x, y); outside the image this is transparent black."""
        if not self.contains(x, y):
            return PreciseColor.zero()

        i = self.offset(x, y)
        data = self.data
        if self.layout is PixelLayout.INDEXED8:
            # single grey level
            v = data[i]
            return PreciseColor.from_argb(255, v, v, v)

        a = data[i + 3] if self.layout.has_alpha else 255
        return PreciseColor.from_argb(a, data[i + 2], data[i + 1], data[i])

    def set_pixel(self, x: int, y: int, color: Union[PreciseColor, Color32]) -> None:
        """Write pixel (x, y); a no-op outside the image.

        ``PreciseColor`` values are clamped and rounded per channel first.
        Layouts without alpha drop the alpha channel.
        """
        if not self.contains(x, y):
            return
        if isinstance(color, PreciseColor):
            color = color.to_color32()

        i = self.offset(x, y)
        data = self.data
        if self.layout is PixelLayout.INDEXED8:
            data[i] = (color.r + color.g + color.b + 1) // 3
            return

        data[i] = color.b
        data[i + 1] = color.g
        data[i + 2] = color.r
        if self.layout.has_alpha:
            data[i + 3] = color.a

    def to_array(self) -> np.ndarray:
        """Pixel bytes as a [H, W, C] uint8 view, padding removed, B,G,R,[A] order."""
        rows = np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.stride)
        return rows[:, :self.row_bytes].reshape(self.height, self.width, self.layout.components)

    @classmethod
    def from_array(
        cls,
        array: np.ndarray,
        layout: PixelLayout,
        stride: Optional[int] = None,
    ) -> "Raster":
        """Build a raster from a [H, W] or [H, W, C] uint8 array in B,G,R,[A] order."""
        array = np.asarray(array)
        if array.ndim == 2:
            array = array[..., None]
        if array.ndim != 3 or array.shape[2] != layout.components:
            raise RasterError(
                f"Array shape {array.shape} does not match layout {layout.name}"
            )
        height, width = array.shape[:2]
        raster = cls.blank(width, height, layout, stride)
        rows = np.frombuffer(raster.data, dtype=np.uint8).reshape(height, raster.stride)
        rows[:, :raster.row_bytes] = np.clip(array, 0, 255).astype(np.uint8).reshape(height, -1)
        return raster
