"""Four-band color gradient for escape counts."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np


class Color(NamedTuple):
    red: int
    green: int
    blue: int
    alpha: int = 0


BLACK = Color(0, 0, 0)


def _byte(value: float) -> int:
    # Narrowing to 8 bits truncates toward zero and keeps the low byte.
    return int(value) & 0xFF


def color_of(value: float, vmin: float, vmax: float) -> Color:
    """Map ``value`` within ``[vmin, vmax]`` onto the gradient.

    Values below ``vmin`` are clamped, values above ``vmax`` are black. Each
    band only assigns two channels; the third keeps whatever the white start
    color left in it.
    """

    red = green = blue = 255
    dv = vmax - vmin

    if value < vmin:
        value = vmin
    elif value > vmax:
        return BLACK

    ratio = 1020 * (value - vmin) / dv if dv else 0.0

    if value < vmin + 0.25 * dv:
        red = 0
        green = _byte(ratio)
    elif value < vmin + 0.5 * dv:
        red = 0
        blue = _byte(255 - ratio)
    elif value < vmin + 0.75 * dv:
        red = _byte(ratio)
        blue = 0
    else:
        green = _byte(255 - ratio)
        blue = 0

    return Color(red, green, blue)


def color_table(max_iterations: int) -> np.ndarray:
    """Colors for every count the iterator can return, indexed by count."""

    vmax = max_iterations - 1
    return np.array(
        [color_of(count, 0, vmax) for count in range(max_iterations + 1)],
        dtype=np.uint8,
    ).reshape(max_iterations + 1, 4)
