"""Transform policy: turn a mode, user values and an extent into parameters."""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

import numpy as np

from .errors import EmptyGeometry, InvalidArguments
from .extents import Extent

_LOG = logging.getLogger(__name__)


class Mode(Enum):
    REPORT = "report"
    SCALE = "scale"
    TRANSLATE = "translate"
    UNITIZE = "unitize"


@dataclass(frozen=True)
class TransformParameters:
    """Per-axis ``output = (input + offset) * scale``."""

    offset: Tuple[float, ...]
    scale: Tuple[float, ...]

    @property
    def dims(self) -> int:
        return len(self.offset)

    def apply(self, coords: Sequence[float]) -> Tuple[float, ...]:
        pt = (np.asarray(coords, dtype=float) + np.asarray(self.offset)) * np.asarray(self.scale)
        return tuple(float(v) for v in pt)

    @classmethod
    def identity(cls, dims: int) -> "TransformParameters":
        return cls(offset=(0.0,) * dims, scale=(1.0,) * dims)


def scale_parameters(dims: int, factor: float) -> TransformParameters:
    if not factor > 0.0:
        raise InvalidArguments(f"scale factor must be positive, got {factor}")
    return TransformParameters(offset=(0.0,) * dims, scale=(float(factor),) * dims)


def translate_parameters(dims: int, amounts: Sequence[float]) -> TransformParameters:
    if len(amounts) > dims:
        raise InvalidArguments(f"at most {dims} offsets expected, got {len(amounts)}")
    offset = tuple(float(a) for a in amounts) + (0.0,) * (dims - len(amounts))
    return TransformParameters(offset=offset, scale=(1.0,) * dims)


def unitize_parameters(extent: Extent) -> TransformParameters:
    """Center the extent on the origin and fit its longest axis to [-1, 1]."""

    if extent.is_empty:
        raise EmptyGeometry("no geometry records found; cannot unitize")
    largest = max(extent.span)
    if largest <= 0.0:
        raise EmptyGeometry("all geometry records coincide; cannot unitize a zero-size extent")
    offset = tuple(-c for c in extent.center)
    factor = 1.0 / (largest / 2.0)
    _LOG.debug("unitize offset=%s scale=%s", offset, factor)
    return TransformParameters(offset=offset, scale=(factor,) * extent.dims)


def check_values(mode: Mode, dims: int, values: Sequence[float]) -> None:
    """Reject argument arity that does not fit the mode, before any file is read."""

    if not all(math.isfinite(v) for v in values):
        raise InvalidArguments(f"numeric arguments must be finite, got {tuple(values)}")
    if mode is Mode.SCALE:
        if len(values) != 1:
            raise InvalidArguments(f"scale mode takes exactly one factor, got {len(values)}")
        if not values[0] > 0.0:
            raise InvalidArguments(f"scale factor must be positive, got {values[0]}")
    elif mode is Mode.TRANSLATE:
        if not 1 <= len(values) <= dims:
            raise InvalidArguments(f"translate mode takes 1 to {dims} offsets, got {len(values)}")
    elif values:
        raise InvalidArguments(f"{mode.value} mode takes no numeric arguments")


def derive_parameters(mode: Mode, extent: Extent, values: Sequence[float] = ()) -> TransformParameters:
    dims = extent.dims
    check_values(mode, dims, values)
    if mode is Mode.SCALE:
        return scale_parameters(dims, values[0])
    if mode is Mode.TRANSLATE:
        return translate_parameters(dims, values)
    if mode is Mode.UNITIZE:
        return unitize_parameters(extent)
    raise InvalidArguments(f"mode {mode.value!r} does not produce a transform")
