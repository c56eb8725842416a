import logging
from typing import Callable, Iterable, TextIO

from .config import OutputStyle
from .errors import OutputWriteError
from .policy import TransformParameters
from .records import Record

_LOG = logging.getLogger(__name__)

RenderFn = Callable[[Record, TransformParameters, OutputStyle], str]


class Rewriter:
    """Second pass: re-emit every record, transforming only those with coordinates."""

    def __init__(self, render: RenderFn, params: TransformParameters, style: OutputStyle):
        self.render = render
        self.params = params
        self.style = style
        self.records_written = 0

    def write(self, records: Iterable[Record], out: TextIO) -> int:
        for record in records:
            line = self.render(record, self.params, self.style)
            try:
                out.write(line + "\n")
            except OSError as exc:
                raise OutputWriteError(f"write failed after {self.records_written} records: {exc}") from exc
            self.records_written += 1
        try:
            out.flush()
        except OSError as exc:
            raise OutputWriteError(f"flush failed: {exc}") from exc
        _LOG.debug("Rewrote %d records", self.records_written)
        return self.records_written
