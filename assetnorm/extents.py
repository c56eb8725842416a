from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class Extent:
    """Per-axis bounding range. ``(+inf, -inf)`` on every axis means empty."""

    minimum: Tuple[float, ...]
    maximum: Tuple[float, ...]

    @property
    def dims(self) -> int:
        return len(self.minimum)

    @property
    def is_empty(self) -> bool:
        return any(lo > hi for lo, hi in zip(self.minimum, self.maximum))

    @property
    def span(self) -> Tuple[float, ...]:
        return tuple(hi - lo for lo, hi in zip(self.minimum, self.maximum))

    @property
    def center(self) -> Tuple[float, ...]:
        return tuple((hi + lo) / 2.0 for lo, hi in zip(self.minimum, self.maximum))

    def report_lines(self, precision: int = 4, sign: str = " ") -> Tuple[str, str]:
        fmt = f"{sign}.{precision}f"
        hi = "  ".join(format(v, fmt) for v in self.maximum)
        lo = "  ".join(format(v, fmt) for v in self.minimum)
        return f"max {hi}", f"min {lo}"


class ExtentAccumulator:
    """Running per-axis min/max over observed coordinates."""

    def __init__(self, dims: int):
        self.dims = dims
        self.count = 0
        self._min = np.full(dims, np.inf)
        self._max = np.full(dims, -np.inf)

    def observe(self, coords: Sequence[float]) -> None:
        pt = np.asarray(coords, dtype=float)
        if pt.shape != (self.dims,):
            raise ValueError(f"expected {self.dims} components, got {pt.shape}")
        np.minimum(self._min, pt, out=self._min)
        np.maximum(self._max, pt, out=self._max)
        self.count += 1

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def finalize(self) -> Extent:
        return Extent(
            minimum=tuple(float(v) for v in self._min),
            maximum=tuple(float(v) for v in self._max),
        )
