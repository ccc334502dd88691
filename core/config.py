"""Filter configuration."""

from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Tuple, Optional, Dict, Any, Union

import yaml

from .errors import KernelError
from .filter import METHODS, REFERENCE_KERNEL, ConvolutionFilter, validate_weights


def _check_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


@dataclass
class FilterConfig:
    """Settings for a blur pass.

    YAML format:
    ```yaml
    weights: [0.0545, 0.224, 0.4026, 0.224, 0.0545]
    method: numpy        # "direct" | "numpy" | "ndimage"
    num_workers: 4
    band_rows: 64
    row_alignment: 4
    progress: true
    ```
    """
    weights: Tuple[float, ...] = REFERENCE_KERNEL
    method: str = "direct"
    num_workers: int = 1
    band_rows: Optional[int] = None
    row_alignment: int = 4  # stride alignment used when loading images
    progress: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check every field; raises ValueError (or KernelError) on bad values."""
        self.weights = validate_weights(self.weights)
        if self.method not in METHODS:
            raise KernelError(f"Unknown filter method: {self.method!r} (expected one of {METHODS})")
        _check_positive_int("num_workers", self.num_workers)
        if self.band_rows is not None:
            _check_positive_int("band_rows", self.band_rows)
        _check_positive_int("row_alignment", self.row_alignment)

    def build_filter(self) -> ConvolutionFilter:
        self.validate()
        return ConvolutionFilter(self.weights, self.method)

    def apply_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``ConvolutionFilter.apply``."""
        return {
            "num_workers": self.num_workers,
            "band_rows": self.band_rows,
            "progress": self.progress,
        }

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["weights"] = list(self.weights)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "FilterConfig":
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "FilterConfig":
        with open(path) as f:
            d = yaml.safe_load(f) or {}
        if not isinstance(d, dict):
            raise ValueError(f"Filter config must be a mapping: {path}")
        return cls.from_dict(d)

    def save_yaml(self, path: Union[str, Path]) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
