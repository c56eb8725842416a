"""Record variants shared by every asset format.

A file is read as an ordered stream of records. Only ``Geometry`` and
``Bounds`` carry coordinates; everything else is re-emitted as read.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

Coordinate = Tuple[float, ...]


@dataclass(frozen=True)
class Geometry:
    coords: Coordinate
    tag: Optional[str] = None
    trailing: str = ""


@dataclass(frozen=True)
class Passthrough:
    text: str


@dataclass(frozen=True)
class Bounds:
    """Declared figure extent of a line-strip file, as two corners."""

    corners: Tuple[Coordinate, Coordinate]


@dataclass(frozen=True)
class Count:
    value: int
    # Token as it appeared in the input; re-emitted verbatim when present.
    text: Optional[str] = field(default=None, compare=False)


Record = Union[Geometry, Passthrough, Bounds, Count]
