"""Rendering primitives for escape-time frames."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from multiprocessing import Pool, cpu_count
from typing import Optional

import numpy as np
import PIL.Image

from .colors import color_of, color_table
from .iteration import iterator_for
from .params import FractalKind, ParameterSet

RENDER_MODES = ("sequential", "parallel", "tensor")


@dataclass(frozen=True)
class SamplingMetadata:
    """Metadata describing the sampling grid for a rendered frame."""

    x_min: float
    y_max: float
    x_step: float
    y_step: float
    width: int
    height: int

    def point_at(self, x: int, y: int) -> complex:
        return complex(self.x_min + self.x_step * x, self.y_max + self.y_step * y)


@dataclass(frozen=True)
class Raster:
    """A completely rendered frame.

    ``pixels`` is ``(height, width, 4)`` RGBA with the alpha channel left at
    zero; ``iterations`` holds the escape count behind every pixel.
    """

    pixels: np.ndarray
    iterations: np.ndarray
    metadata: SamplingMetadata

    @property
    def width(self) -> int:
        return self.metadata.width

    @property
    def height(self) -> int:
        return self.metadata.height

    def point_at(self, x: int, y: int) -> complex:
        return self.metadata.point_at(x, y)

    def to_image(self) -> PIL.Image.Image:
        return PIL.Image.fromarray(np.ascontiguousarray(self.pixels[..., :3]), "RGB")


def _compute_metadata(params: ParameterSet) -> SamplingMetadata:
    width = params.width
    height = params.height

    # The imaginary axis runs downward: row 0 sits on y_range.upper.
    x_step = (params.x_range.upper - params.x_range.lower) / width if width else 0.0
    y_step = (params.y_range.lower - params.y_range.upper) / height if height else 0.0

    return SamplingMetadata(
        x_min=params.x_range.lower,
        y_max=params.y_range.upper,
        x_step=x_step,
        y_step=y_step,
        width=width,
        height=height,
    )


def _render_row(y: int, params: ParameterSet, metadata: SamplingMetadata) -> tuple[np.ndarray, np.ndarray]:
    """Evaluate and color one raster row."""

    iterate = iterator_for(params.kind)
    vmax = params.max_iterations - 1

    counts = np.zeros(metadata.width, dtype=np.uint32)
    colors = np.zeros((metadata.width, 4), dtype=np.uint8)
    for x in range(metadata.width):
        count = iterate(metadata.point_at(x, y), params)
        counts[x] = count
        colors[x] = color_of(count, 0, vmax)
    return counts, colors


def _render_rows(params: ParameterSet, metadata: SamplingMetadata, workers: Optional[int]) -> list:
    row = partial(_render_row, params=params, metadata=metadata)
    if workers is None:
        return [row(y) for y in range(metadata.height)]
    with Pool(workers) as pool:
        return pool.map(row, range(metadata.height))


def _render_tensor(params: ParameterSet, metadata: SamplingMetadata, device: Optional[str]) -> np.ndarray:
    from .tensor import escape_counts

    xs = metadata.x_min + metadata.x_step * np.arange(metadata.width, dtype=np.float64)
    ys = metadata.y_max + metadata.y_step * np.arange(metadata.height, dtype=np.float64)
    grid_real, grid_imag = np.meshgrid(xs, ys)
    fixed_real = np.float64(params.initial.real)
    fixed_imag = np.float64(params.initial.imag)

    if params.kind is FractalKind.MANDELBROT:
        seeds = (fixed_real, fixed_imag)
        constants = (grid_real, grid_imag)
    else:
        seeds = (grid_real, grid_imag)
        constants = (fixed_real, fixed_imag)

    return escape_counts(
        np.asarray(seeds[0]),
        np.asarray(seeds[1]),
        np.asarray(constants[0]),
        np.asarray(constants[1]),
        params.max_iterations,
        params.escape_radius_squared,
        device=device,
    )


def render_frame(
    params: ParameterSet,
    *,
    mode: str = "sequential",
    workers: Optional[int] = None,
    device: Optional[str] = None,
) -> Raster:
    """Render ``params`` into a complete raster.

    ``mode`` picks how pixels are evaluated: ``"sequential"`` walks the rows
    in-process, ``"parallel"`` spreads rows over a process pool of ``workers``
    processes and ``"tensor"`` iterates the whole grid with TensorFlow on
    ``device``. All modes produce identical rasters.
    """

    if mode not in RENDER_MODES:
        raise ValueError(f"Unknown render mode '{mode}'. Valid choices: {', '.join(RENDER_MODES)}.")

    metadata = _compute_metadata(params)
    width, height = metadata.width, metadata.height

    if width == 0 or height == 0:
        return Raster(
            pixels=np.zeros((height, width, 4), dtype=np.uint8),
            iterations=np.zeros((height, width), dtype=np.uint32),
            metadata=metadata,
        )

    if mode == "tensor":
        iterations = _render_tensor(params, metadata, device)
        pixels = color_table(params.max_iterations)[iterations]
    else:
        if mode == "parallel":
            workers = workers or cpu_count()
        else:
            workers = None
        rows = _render_rows(params, metadata, workers)
        iterations = np.stack([counts for counts, _ in rows])
        pixels = np.stack([colors for _, colors in rows])

    return Raster(pixels=pixels, iterations=iterations, metadata=metadata)
