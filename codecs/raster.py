"""Raw raster encoding/decoding for storage."""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from ..core import PixelLayout, Raster, RasterError


class RasterCodec:
    """Encode/decode rasters to/from .npy files.

    Format: Single .npy file containing a dict with:
        - version: format version
        - width, height, stride: raster geometry
        - layout: PixelLayout name ("INDEXED8" | "RGB24" | "ARGB32")
        - data: [height * stride] uint8 buffer, padding included
        - meta: additional metadata (optional)
    """

    VERSION = 1

    @classmethod
    def encode(cls, raster: Raster, meta: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Encode a raster to a dict ready for np.save."""
        data = {
            "version": cls.VERSION,
            "width": raster.width,
            "height": raster.height,
            "stride": raster.stride,
            "layout": raster.layout.name,
            "data": np.frombuffer(bytes(raster.data), dtype=np.uint8),
        }
        if meta is not None:
            data["meta"] = meta
        return data

    @classmethod
    def decode(cls, data: Dict[str, Any]) -> Raster:
        """Decode a raster from a loaded dict."""
        version = data.get("version", 0)
        if version > cls.VERSION:
            raise RasterError(f"Unsupported raster format version {version}")
        try:
            layout = PixelLayout[data["layout"]]
        except KeyError as e:
            raise RasterError(f"Missing or unknown raster field: {e}") from e
        return Raster(
            width=int(data["width"]),
            height=int(data["height"]),
            stride=int(data["stride"]),
            layout=layout,
            data=bytearray(np.asarray(data["data"], dtype=np.uint8).tobytes()),
        )

    @classmethod
    def save(cls, path: Union[str, Path], raster: Raster, meta: Optional[Dict[str, Any]] = None) -> None:
        """Save a raster to a .npy file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            np.save(f, cls.encode(raster, meta), allow_pickle=True)

    @classmethod
    def load(cls, path: Union[str, Path]) -> Tuple[Raster, Dict[str, Any]]:
        """Load a raster and its metadata from a .npy file."""
        data = np.load(path, allow_pickle=True).item()
        return cls.decode(data), data.get("meta", {})
