"""Mesh (OBJ style) records: one tagged record per line.

Only vertex lines carry coordinates. Faces, normals, texture coordinates and
material directives are copied through untouched.
"""

import logging
from enum import Enum
from typing import Iterator, Optional

from ..config import OutputStyle
from ..policy import TransformParameters
from ..records import Geometry, Passthrough, Record
from ..scanner import TokenScanner

_LOG = logging.getLogger(__name__)

DIMENSIONS = 3


class MeshTag(Enum):
    # Declaration order is match order: the first prefix that fits wins.
    COMMENT = "#"
    TEXTURE = "vt"
    NORMAL = "vn"
    FACE = "f"
    SMOOTHING = "s"
    GROUP = "g"
    OBJECT = "o"
    USE_MATERIAL = "usemtl"
    MATERIAL_LIBRARY = "mtllib"
    VERTEX = "v"


GEOMETRY_TAGS = frozenset({MeshTag.VERTEX})


def classify(token: str) -> Optional[MeshTag]:
    """Return the tag a leading token belongs to, or None when unrecognized."""

    for tag in MeshTag:
        if token.startswith(tag.value):
            return tag
    return None


def read_records(scanner: TokenScanner) -> Iterator[Record]:
    while True:
        raw = scanner.start_line()
        if raw is None:
            return
        token = scanner.next_token(cross_lines=False)
        if token is None:
            yield Passthrough(raw)
            continue
        tag = classify(token)
        if tag in GEOMETRY_TAGS:
            coords = tuple(scanner.next_float(cross_lines=False) for _ in range(DIMENSIONS))
            yield Geometry(coords, tag=token, trailing=scanner.rest_of_line())
            continue
        if tag is None:
            _LOG.warning("line %d: unrecognized record copied as-is: %s", scanner.line_no, raw)
        yield Passthrough(raw)


def render(record: Record, params: TransformParameters, style: OutputStyle) -> str:
    if isinstance(record, Passthrough):
        return record.text
    if isinstance(record, Geometry):
        fields = "  ".join(style.number(v, style.mesh) for v in params.apply(record.coords))
        line = f"{record.tag or MeshTag.VERTEX.value} {fields}"
        if record.trailing.strip():
            line += record.trailing
        return line
    raise TypeError(f"mesh files have no {type(record).__name__} records")
