"""Exceptions raised by the filtering core."""


class RasterError(ValueError):
    """Raster shape, buffer or layout does not satisfy a precondition."""


class UnsupportedLayoutError(RasterError):
    """Pixel layout (or image mode) is not one of the supported variants."""


class KernelError(ValueError):
    """Kernel weights or filter method are invalid."""


class RasterAllocationError(MemoryError):
    """Output raster buffer could not be allocated."""


class FilterCancelled(RuntimeError):
    """Filter pass was abandoned before completion."""
