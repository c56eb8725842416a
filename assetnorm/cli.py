#!/usr/bin/env python
"""Command line entry points: ``assetnorm transform|unitize`` and the ``transform``/``unitize`` shortcuts."""

import argparse
import json
import logging
import math
import sys
from typing import List, Optional, Sequence, Tuple

from .config import load_config, setup_logging
from .errors import AssetNormError, InvalidArguments
from .pipeline import AssetFormat, Job, run
from .policy import Mode
from .scanner import numeric
from .verify import summarize_mesh

_LOG = logging.getLogger(__name__)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input_path", help="Mesh (.obj) or line-strip (.grs) file to read")
    parser.add_argument(
        "--format",
        choices=[f.value for f in AssetFormat],
        default=None,
        help="Input format; inferred from the file extension when omitted",
    )
    parser.add_argument("--out-dir", dest="out_dir", default=None, help="Directory for the output file (default: cwd)")
    parser.add_argument("--config", default=None, help="YAML config file (default: $ASSETNORM_CONFIG)")
    parser.add_argument("--log-level", dest="log_level", default=None, help="Logging level, e.g. DEBUG or WARNING")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Load a rewritten mesh back with trimesh and print a JSON summary",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assetnorm",
        description="Report extents of mesh/line-strip assets, or scale, translate or unitize them into a new file",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    transform = sub.add_parser("transform", help="Report extents, or scale/translate into <name>_<ext>")
    _add_common(transform)
    transform.add_argument(
        "values",
        nargs="*",
        help="Scale factor (mesh) or x [y [z]] offsets (line-strip); none to only report extents",
    )
    transform.add_argument(
        "--mode",
        choices=[Mode.SCALE.value, Mode.TRANSLATE.value],
        default=None,
        help="Override the per-format default (mesh: scale, line_strip: translate)",
    )

    unitize = sub.add_parser("unitize", help="Center and fit into the [-1, 1] cube, writing <name>_<ext>")
    _add_common(unitize)
    return parser


def parse_values(raw: Sequence[str]) -> Tuple[float, ...]:
    values: List[float] = []
    for item in raw:
        try:
            if not numeric(item):
                raise ValueError(item)
            value = float(item)
        except ValueError as exc:
            raise InvalidArguments(f"not a number: {item!r}") from exc
        if not math.isfinite(value):
            raise InvalidArguments(f"not a finite number: {item!r}")
        values.append(value)
    return tuple(values)


def job_from_args(args: argparse.Namespace, config: dict) -> Job:
    if args.command == "unitize":
        mode: Optional[Mode] = Mode.UNITIZE
        values: Tuple[float, ...] = ()
    else:
        values = parse_values(args.values)
        mode = Mode(args.mode) if args.mode else None
        if mode is not None and not values:
            raise InvalidArguments(f"--mode {mode.value} needs numeric arguments")
    return Job(
        input_path=args.input_path,
        mode=mode,
        values=values,
        fmt=AssetFormat(args.format) if args.format else None,
        out_dir=args.out_dir,
        config=config,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
        setup_logging(args.log_level or config.get("log_level", "INFO"))
        result = run(job_from_args(args, config))
    except AssetNormError as exc:
        _LOG.error("ERROR! %s", exc)
        return exc.exit_code

    if args.check and result.output_path is not None:
        if result.fmt is AssetFormat.MESH:
            print(json.dumps(summarize_mesh(result.output_path)), flush=True)
        else:
            _LOG.warning("--check only applies to mesh output; skipped for %s", result.output_path)
    return 0


def transform_main() -> int:
    return main(["transform", *sys.argv[1:]])


def unitize_main() -> int:
    return main(["unitize", *sys.argv[1:]])


if __name__ == "__main__":
    sys.exit(main())
