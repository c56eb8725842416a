"""Two-pass driver: read extents, derive parameters, rewrite into a new file.

Pass 1 folds every geometry record into an extent. Pass 2 is an independent
re-read of the same input that streams each record through the rewriter into
a freshly created output file. The output path is derived from the input
name and is never overwritten.
"""

import logging
import re
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, Optional, TextIO, Tuple

from .config import load_config, output_style
from .errors import InputNotFound, InputReadError, InvalidArguments, OutputCreateError, OutputExists
from .extents import Extent, ExtentAccumulator
from .formats import line_strip, mesh
from .policy import Mode, TransformParameters, check_values, derive_parameters
from .records import Geometry
from .rewriter import Rewriter
from .scanner import TokenScanner

_LOG = logging.getLogger(__name__)

ENCODING = "utf-8"
# Undecodable bytes survive the round trip instead of aborting the read.
ENCODING_ERRORS = "surrogateescape"


class AssetFormat(Enum):
    MESH = "mesh"
    LINE_STRIP = "line_strip"


FORMATS = {
    AssetFormat.MESH: mesh,
    AssetFormat.LINE_STRIP: line_strip,
}

# Mode used when numbers are given without an explicit --mode.
DEFAULT_MODES = {
    AssetFormat.MESH: Mode.SCALE,
    AssetFormat.LINE_STRIP: Mode.TRANSLATE,
}


@dataclass
class Job:
    input_path: str
    mode: Optional[Mode] = None
    values: Tuple[float, ...] = ()
    fmt: Optional[AssetFormat] = None
    out_dir: Optional[str] = None
    config: Dict = field(default_factory=load_config)


@dataclass
class RunResult:
    fmt: AssetFormat
    mode: Mode
    extent: Extent
    params: Optional[TransformParameters] = None
    output_path: Optional[Path] = None
    records_written: int = 0


def resolve_format(input_path: str, explicit: Optional[AssetFormat], extensions: Dict[str, str]) -> AssetFormat:
    if explicit is not None:
        return explicit
    suffix = Path(input_path).suffix.lower()
    name = extensions.get(suffix)
    if name is None:
        raise InvalidArguments(f"cannot tell the format of '{input_path}' from its extension; pass --format")
    try:
        return AssetFormat(name)
    except ValueError as exc:
        raise InvalidArguments(f"config maps '{suffix}' to unknown format '{name}'") from exc


def derive_output_path(input_path: str, suffix: str = "_", out_dir: Optional[str] = None) -> Path:
    """``some/dir/model.obj`` -> ``model_.obj`` (inside ``out_dir`` when given)."""

    name = re.split(r"[\\/]", str(input_path))[-1]
    dot = name.rfind(".")
    if dot > 0:
        stem, ext = name[:dot], name[dot:]
    else:
        stem, ext = name, ""
    return Path(out_dir or ".") / f"{stem}{suffix}{ext}"


@contextmanager
def open_input(path: str) -> Iterator[TextIO]:
    try:
        f = open(path, "r", encoding=ENCODING, errors=ENCODING_ERRORS)
    except OSError as exc:
        raise InputNotFound(f"Could not open input file: {path} ({exc.strerror or exc})") from exc
    with f:
        yield f


def create_output(path: Path) -> TextIO:
    if path.exists():
        raise OutputExists(f"Output file already exists: {path}")
    try:
        return open(path, "x", encoding=ENCODING, errors=ENCODING_ERRORS, newline="\n")
    except FileExistsError as exc:
        raise OutputExists(f"Output file already exists: {path}") from exc
    except OSError as exc:
        raise OutputCreateError(f"Could not create output file {path}: {exc.strerror or exc}") from exc


def scan_extent(input_path: str, fmt: AssetFormat) -> Extent:
    module = FORMATS[fmt]
    acc = ExtentAccumulator(module.DIMENSIONS)
    with open_input(input_path) as stream:
        try:
            for record in module.read_records(TokenScanner(stream)):
                if isinstance(record, Geometry):
                    acc.observe(record.coords)
        except OSError as exc:
            raise InputReadError(f"Could not read input file {input_path}: {exc}") from exc
    _LOG.info("Read %d geometry records from %s", acc.count, input_path)
    return acc.finalize()


def report_extent(extent: Extent, precision: int = 4, sign: str = " ", stream: Optional[TextIO] = None):
    stream = stream or sys.stderr
    for line in extent.report_lines(precision, sign):
        print(line, file=stream, flush=True)


def rewrite(input_path: str, fmt: AssetFormat, params: TransformParameters, output_path: Path, style) -> int:
    module = FORMATS[fmt]
    with create_output(output_path) as out:
        print(f"Created file {output_path}", file=sys.stderr, flush=True)
        with open_input(input_path) as stream:
            rewriter = Rewriter(module.render, params, style)
            try:
                return rewriter.write(module.read_records(TokenScanner(stream)), out)
            except OSError as exc:
                raise InputReadError(f"Could not re-read input file {input_path}: {exc}") from exc


def run(job: Job) -> RunResult:
    cfg = job.config
    fmt = resolve_format(job.input_path, job.fmt, cfg.get("extensions", {}))
    mode = job.mode
    if mode is None:
        mode = DEFAULT_MODES[fmt] if job.values else Mode.REPORT
    check_values(mode, FORMATS[fmt].DIMENSIONS, job.values)
    style = output_style(cfg)

    extent = scan_extent(job.input_path, fmt)
    report_extent(extent, style.report, style.sign)
    result = RunResult(fmt=fmt, mode=mode, extent=extent)
    if mode is Mode.REPORT:
        return result

    result.params = derive_parameters(mode, extent, job.values)
    result.output_path = derive_output_path(job.input_path, cfg.get("output_suffix", "_"), job.out_dir)
    result.records_written = rewrite(job.input_path, fmt, result.params, result.output_path, style)
    _LOG.info("%s %s -> %s (%d records)", mode.value, job.input_path, result.output_path, result.records_written)
    return result
