"""Public API for escape-time fractal rendering."""

from .colors import Color, color_of, color_table
from .config import ConfigError, load_parameters, parse_parameters
from .iteration import escape_time, iterator_for, julia_iterations, mandelbrot_iterations
from .params import DEFAULT_PARAMETERS, FractalKind, ParameterSet, Range
from .renderer import RENDER_MODES, Raster, SamplingMetadata, render_frame

__all__ = [
    "Color",
    "ConfigError",
    "DEFAULT_PARAMETERS",
    "FractalKind",
    "ParameterSet",
    "RENDER_MODES",
    "Range",
    "Raster",
    "SamplingMetadata",
    "color_of",
    "color_table",
    "escape_time",
    "iterator_for",
    "julia_iterations",
    "load_parameters",
    "mandelbrot_iterations",
    "parse_parameters",
    "render_frame",
]
