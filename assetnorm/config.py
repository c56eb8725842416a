"""Runtime configuration: built-in defaults merged with an optional YAML file."""

import copy
import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from .errors import InvalidArguments

_LOG = logging.getLogger(__name__)

CONFIG_ENV = "ASSETNORM_CONFIG"

DEFAULTS: Dict[str, Any] = {
    "log_level": "INFO",
    "output_suffix": "_",
    "sign": " ",
    "precision": {
        "mesh": 6,
        "line_strip": 4,
        "line_strip_bounds": 6,
        "report": 4,
    },
    "extensions": {
        ".obj": "mesh",
        ".grs": "line_strip",
    },
}


@dataclass(frozen=True)
class OutputStyle:
    """How coordinates are printed: sign flag (" " or "+") and decimals per record kind."""

    sign: str = " "
    mesh: int = 6
    line_strip: int = 4
    line_strip_bounds: int = 6
    report: int = 4

    def number(self, value: float, precision: int) -> str:
        return format(value, f"{self.sign}.{precision}f")


def setup_logging(level: str):
    lvl = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def load_yaml(path: str) -> Dict:
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise InvalidArguments(f"cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise InvalidArguments(f"config file {path} is not valid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidArguments(f"config file {path} must hold a mapping")
    return data


def _merge(base: Dict, override: Dict, where: str = "") -> Dict:
    for key, value in override.items():
        if key not in base:
            _LOG.warning("Ignoring unknown config key '%s%s'", where, key)
            continue
        if isinstance(base[key], dict):
            if not isinstance(value, dict):
                raise InvalidArguments(f"config key '{where}{key}' must be a mapping")
            if key == "extensions":
                base[key].update({str(k).lower(): str(v) for k, v in value.items()})
            else:
                _merge(base[key], value, f"{where}{key}.")
        else:
            base[key] = value
    return base


def load_config(path: Optional[str] = None) -> Dict:
    """Return the effective config; ``path`` wins over ``$ASSETNORM_CONFIG``."""

    cfg = copy.deepcopy(DEFAULTS)
    path = path or os.environ.get(CONFIG_ENV)
    if path:
        _merge(cfg, load_yaml(path))
    return cfg


def output_style(cfg: Dict) -> OutputStyle:
    sign = cfg.get("sign", " ")
    if sign not in (" ", "+", ""):
        raise InvalidArguments(f"config 'sign' must be ' ', '+' or '', got {sign!r}")
    precision = cfg.get("precision", {})
    try:
        digits = {k: int(v) for k, v in precision.items()}
    except (TypeError, ValueError) as exc:
        raise InvalidArguments(f"config 'precision' values must be integers: {exc}") from exc
    if any(v < 0 for v in digits.values()):
        raise InvalidArguments("config 'precision' values must not be negative")
    return OutputStyle(sign=sign, **digits)
