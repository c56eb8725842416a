"""Line-strip (GRS) figures.

Layout: free-form comment lines, a line starting with ``*``, the figure
extent ``left top right bottom``, the number of strips, then for each strip
its vertex count followed by that many ``x y`` pairs. Numbers after the
``*`` line are whitespace separated and may wrap lines freely.
"""

import logging
from typing import Iterator

from ..config import OutputStyle
from ..errors import InputReadError
from ..policy import TransformParameters
from ..records import Bounds, Count, Geometry, Passthrough, Record
from ..scanner import TokenScanner

_LOG = logging.getLogger(__name__)

DIMENSIONS = 2
PREAMBLE_END = "*"


def read_records(scanner: TokenScanner) -> Iterator[Record]:
    while True:
        line = scanner.next_line()
        if line is None:
            raise InputReadError(f"no '{PREAMBLE_END}' line ends the comment preamble")
        yield Passthrough(line)
        if line.startswith(PREAMBLE_END):
            break

    left, top, right, bottom = (scanner.next_float() for _ in range(4))
    yield Bounds(((left, top), (right, bottom)))

    num_strips = scanner.next_int()
    yield Count(num_strips, scanner.token)
    for _ in range(num_strips):
        num_vertices = scanner.next_int()
        yield Count(num_vertices, scanner.token)
        for _ in range(num_vertices):
            x = scanner.next_float()
            y = scanner.next_float()
            yield Geometry((x, y))

    rest = scanner.rest_of_line()
    if rest and rest.strip():
        yield _trailer(rest, scanner.line_no)
    while True:
        line = scanner.next_line()
        if line is None:
            return
        yield _trailer(line, scanner.line_no)


def _trailer(line: str, line_no: int) -> Passthrough:
    if line.strip():
        _LOG.warning("line %d: unrecognized record copied as-is: %s", line_no, line)
    return Passthrough(line)


def render(record: Record, params: TransformParameters, style: OutputStyle) -> str:
    if isinstance(record, Passthrough):
        return record.text
    if isinstance(record, Count):
        return record.text if record.text is not None else str(record.value)
    if isinstance(record, Geometry):
        x, y = params.apply(record.coords)
        return f"  {style.number(x, style.line_strip)}  {style.number(y, style.line_strip)}"
    if isinstance(record, Bounds):
        fields = [v for corner in record.corners for v in params.apply(corner)]
        return "  ".join(style.number(v, style.line_strip_bounds) for v in fields)
    raise TypeError(f"unknown record {record!r}")
