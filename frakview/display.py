"""Show finished rasters in a matplotlib window."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import matplotlib.pyplot as plt

from .renderer import Raster

APP_NAME = "FrakView"
DPI = 100


def window_title(source: Union[str, Path, None] = None) -> str:
    if source is None:
        return f"{APP_NAME} (default)"
    return f"{APP_NAME} ({source})"


def build_figure(raster: Raster, title: str):
    """Create a figure whose canvas is exactly ``width x height`` pixels."""

    width = max(raster.width, 1)
    height = max(raster.height, 1)
    fig = plt.figure(figsize=(width / DPI, height / DPI), dpi=DPI, frameon=False)
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.set_axis_off()
    if raster.width and raster.height:
        ax.imshow(raster.to_image(), interpolation="nearest", aspect="auto")

    manager = getattr(fig.canvas, "manager", None)
    if manager is not None:
        manager.set_window_title(title)
    return fig


def show_raster(raster: Raster, title: str) -> None:
    """Display ``raster`` and block until its window is closed."""

    fig = build_figure(raster, title)
    try:
        plt.show()
    finally:
        plt.close(fig)
