"""Parameter records consumed by the fractal engine."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum


class FractalKind(Enum):
    """Which operand of the recurrence varies per pixel."""

    MANDELBROT = "mandelbrot"
    JULIA = "julia"


@dataclass(frozen=True)
class Range:
    """Bounds of one axis of the complex plane.

    ``lower`` may exceed ``upper``; the renderer then mirrors the axis.
    """

    lower: float
    upper: float

    def __post_init__(self) -> None:
        _check_finite("lower", self.lower)
        _check_finite("upper", self.upper)

    @property
    def span(self) -> float:
        return self.upper - self.lower


@dataclass(frozen=True)
class ParameterSet:
    """Immutable description of a single render."""

    kind: FractalKind = FractalKind.MANDELBROT
    initial: complex = 0j
    max_iterations: int = 15
    escape_radius_squared: float = 20.0
    x_range: Range = field(default_factory=lambda: Range(-2.25, 1.0))
    y_range: Range = field(default_factory=lambda: Range(-1.3, 1.3))
    width: int = 800
    height: int = 600

    def __post_init__(self) -> None:
        if not isinstance(self.kind, FractalKind):
            raise ValueError(f"kind must be a FractalKind, got {self.kind!r}")
        object.__setattr__(self, "initial", complex(self.initial))
        _check_finite("initial.real", self.initial.real)
        _check_finite("initial.imag", self.initial.imag)
        for name in ("max_iterations", "width", "height"):
            _check_count(name, getattr(self, name))
        _check_finite("escape_radius_squared", self.escape_radius_squared)
        if self.escape_radius_squared <= 0:
            raise ValueError(
                f"escape_radius_squared must be positive, got {self.escape_radius_squared!r}"
            )

    def with_overrides(self, **changes) -> "ParameterSet":
        return replace(self, **changes)

    @property
    def is_julia(self) -> bool:
        return self.kind is FractalKind.JULIA


def _check_finite(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a real number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}")


def _check_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value!r}")


DEFAULT_PARAMETERS = ParameterSet()
