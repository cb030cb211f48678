"""Load render parameters from INI configuration files.

Recognized keys::

    [calculation]
    julia_set = yes
    initial_real = -0.8
    initial_imag = 0.156
    iterations = 64
    radius = 20

    [image]
    xlim_lower = -1.6
    xlim_upper = 1.6
    ylim_lower = -1.0
    ylim_upper = 1.0

    [window]
    width = 800
    height = 600

Everything else is ignored. A key that is missing keeps its default value.
"""

from __future__ import annotations

import configparser
from pathlib import Path
from typing import Any, Callable, Optional, Union

from .params import DEFAULT_PARAMETERS, FractalKind, ParameterSet, Range


class ConfigError(Exception):
    """Raised when a configuration source cannot be turned into parameters."""


def _parse_kind(value: str) -> FractalKind:
    return FractalKind.JULIA if value[:1] in ("t", "T", "y", "Y") else FractalKind.MANDELBROT


_PARSERS: dict[tuple[str, str], tuple[str, Callable[[str], Any]]] = {
    ("calculation", "julia_set"): ("kind", _parse_kind),
    ("calculation", "initial_real"): ("initial_real", float),
    ("calculation", "initial_imag"): ("initial_imag", float),
    ("calculation", "iterations"): ("max_iterations", int),
    ("calculation", "radius"): ("escape_radius_squared", float),
    ("image", "xlim_lower"): ("xlim_lower", float),
    ("image", "xlim_upper"): ("xlim_upper", float),
    ("image", "ylim_lower"): ("ylim_lower", float),
    ("image", "ylim_upper"): ("ylim_upper", float),
    ("window", "width"): ("width", int),
    ("window", "height"): ("height", int),
}


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        comment_prefixes=("#", ";"),
        inline_comment_prefixes=(";",),
        default_section="\x00",
    )
    parser.optionxform = str  # keys are case sensitive
    return parser


def _collect_values(parser: configparser.ConfigParser, source: str) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for section in parser.sections():
        for key, raw in parser.items(section, raw=True):
            target = _PARSERS.get((section, key))
            if target is None:
                continue
            name, convert = target
            try:
                values[name] = convert(raw.strip())
            except ValueError as exc:
                raise ConfigError(f"{source}: [{section}] {key} has invalid value {raw!r}") from exc
    return values


def _apply_values(defaults: ParameterSet, values: dict[str, Any], source: str) -> ParameterSet:
    changes: dict[str, Any] = {}
    for name in ("kind", "max_iterations", "escape_radius_squared", "width", "height"):
        if name in values:
            changes[name] = values[name]

    if "initial_real" in values or "initial_imag" in values:
        changes["initial"] = complex(
            values.get("initial_real", defaults.initial.real),
            values.get("initial_imag", defaults.initial.imag),
        )

    try:
        if any(key in values for key in ("xlim_lower", "xlim_upper")):
            changes["x_range"] = Range(
                values.get("xlim_lower", defaults.x_range.lower),
                values.get("xlim_upper", defaults.x_range.upper),
            )
        if any(key in values for key in ("ylim_lower", "ylim_upper")):
            changes["y_range"] = Range(
                values.get("ylim_lower", defaults.y_range.lower),
                values.get("ylim_upper", defaults.y_range.upper),
            )
        return defaults.with_overrides(**changes)
    except ValueError as exc:
        raise ConfigError(f"{source}: {exc}") from exc


def parse_parameters(text: str, source: str = "<string>", defaults: Optional[ParameterSet] = None) -> ParameterSet:
    """Build a :class:`ParameterSet` from INI ``text``."""

    defaults = defaults if defaults is not None else DEFAULT_PARAMETERS
    parser = _new_parser()
    try:
        parser.read_string(text, source=source)
    except configparser.Error as exc:
        raise ConfigError(f"{source}: {exc}") from exc
    return _apply_values(defaults, _collect_values(parser, source), source)


def load_parameters(
    path: Union[str, Path, None] = None,
    defaults: Optional[ParameterSet] = None,
) -> ParameterSet:
    """Read parameters from ``path``; without a path the defaults are returned."""

    defaults = defaults if defaults is not None else DEFAULT_PARAMETERS
    if path is None:
        return defaults

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Error reading {path}: {exc}") from exc
    return parse_parameters(text, source=str(path), defaults=defaults)
