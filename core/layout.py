"""Pixel layouts of packed raster buffers."""

from enum import Enum

from .errors import UnsupportedLayoutError


class PixelLayout(Enum):
    """Byte encoding of one pixel.

    Channels are always stored in B, G, R, [A] order. The value of each
    member is the number of bytes one pixel occupies.
    """
    INDEXED8 = 1
    RGB24 = 3
    ARGB32 = 4

    @property
    def components(self) -> int:
        return self.value

    @property
    def bytes_per_pixel(self) -> int:
        return self.value

    @property
    def has_alpha(self) -> bool:
        return self is PixelLayout.ARGB32

    @property
    def pil_mode(self) -> str:
        return _PIL_MODES[self]

    @classmethod
    def from_components(cls, components: int) -> "PixelLayout":
        """Map a channel count (1, 3 or 4) to its layout."""
        for layout in cls:
            if layout.components == components:
                return layout
        raise UnsupportedLayoutError(f"Unsupported channel count: {components}")

    @classmethod
    def from_pil_mode(cls, mode: str) -> "PixelLayout":
        for layout, pil_mode in _PIL_MODES.items():
            if pil_mode == mode:
                return layout
        raise UnsupportedLayoutError(f"Unsupported image mode: {mode!r}")


_PIL_MODES = {
    PixelLayout.INDEXED8: "L",
    PixelLayout.RGB24: "RGB",
    PixelLayout.ARGB32: "RGBA",
}
