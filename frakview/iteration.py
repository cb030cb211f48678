"""Escape-time recurrence z -> z**2 + c and its two fractal bindings."""

from __future__ import annotations

from typing import Callable

from .params import FractalKind, ParameterSet


def escape_time(z0: complex, c: complex, max_iterations: int, escape_radius_squared: float) -> int:
    """Count the steps taken before the orbit of ``z0`` leaves the escape disk.

    Returns the index of the step whose squared modulus first exceeds
    ``escape_radius_squared``, or ``max_iterations`` if the orbit stays bounded.
    """

    real, imag = z0.real, z0.imag
    c_real, c_imag = c.real, c.imag

    step = 0
    while step < max_iterations:
        previous = real
        real = c_real + real * real - imag * imag
        imag = c_imag + 2 * previous * imag

        if escape_radius_squared < real * real + imag * imag:
            break
        step += 1
    return step


def mandelbrot_iterations(point: complex, params: ParameterSet) -> int:
    return escape_time(params.initial, point, params.max_iterations, params.escape_radius_squared)


def julia_iterations(point: complex, params: ParameterSet) -> int:
    return escape_time(point, params.initial, params.max_iterations, params.escape_radius_squared)


Iterator = Callable[[complex, ParameterSet], int]

_ITERATORS: dict[FractalKind, Iterator] = {
    FractalKind.MANDELBROT: mandelbrot_iterations,
    FractalKind.JULIA: julia_iterations,
}


def iterator_for(kind: FractalKind) -> Iterator:
    """Return the binding that evaluates one plane point for ``kind``."""

    return _ITERATORS[kind]
