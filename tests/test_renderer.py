import numpy as np
import pytest

from frakview.colors import color_of
from frakview.iteration import julia_iterations, mandelbrot_iterations
from frakview.params import FractalKind, ParameterSet, Range
from frakview.renderer import render_frame


@pytest.fixture
def small_params():
    return ParameterSet(width=16, height=12)


def test_raster_shape_matches_parameters(small_params):
    raster = render_frame(small_params)
    assert raster.pixels.shape == (12, 16, 4)
    assert raster.pixels.dtype == np.uint8
    assert raster.iterations.shape == (12, 16)
    assert (raster.width, raster.height) == (16, 12)


def test_top_left_pixel_maps_to_lower_x_and_upper_y(small_params):
    raster = render_frame(small_params)
    assert raster.point_at(0, 0) == complex(-2.25, 1.3)
    # steps use the full span over the pixel count, the far edge is never sampled
    assert raster.metadata.x_step == pytest.approx(3.25 / 16)
    assert raster.metadata.y_step == pytest.approx(-2.6 / 12)


def test_pixels_follow_iterator_and_color_mapper(small_params):
    raster = render_frame(small_params)
    for y in range(small_params.height):
        for x in range(small_params.width):
            point = complex(-2.25 + (3.25 / 16) * x, 1.3 + ((-1.3 - 1.3) / 12) * y)
            count = mandelbrot_iterations(point, small_params)
            assert raster.iterations[y, x] == count
            assert tuple(raster.pixels[y, x]) == color_of(count, 0, small_params.max_iterations - 1)


def test_julia_pixels_use_julia_binding():
    params = ParameterSet(kind=FractalKind.JULIA, initial=-0.8 + 0.156j, width=10, height=8)
    raster = render_frame(params)
    for y in range(params.height):
        for x in range(params.width):
            assert raster.iterations[y, x] == julia_iterations(raster.point_at(x, y), params)


def test_render_is_idempotent(small_params):
    first = render_frame(small_params)
    second = render_frame(small_params)
    assert first.pixels.tobytes() == second.pixels.tobytes()
    np.testing.assert_array_equal(first.iterations, second.iterations)


@pytest.mark.parametrize("x_range, y_range", [
    (Range(1.0, -2.25), Range(-1.3, 1.3)),
    (Range(-2.25, 1.0), Range(1.3, -1.3)),
    (Range(1.0, -2.25), Range(1.3, -1.3)),
    (Range(0.5, 0.5), Range(0.0, 0.0)),
])
def test_mirrored_and_flat_ranges_keep_dimensions(x_range, y_range):
    params = ParameterSet(x_range=x_range, y_range=y_range, width=9, height=7)
    raster = render_frame(params)
    assert raster.pixels.shape == (7, 9, 4)
    assert raster.point_at(0, 0) == complex(x_range.lower, y_range.upper)


def test_mirrored_x_axis_walks_downward():
    params = ParameterSet(x_range=Range(1.0, -2.25), width=4, height=2)
    raster = render_frame(params)
    assert raster.metadata.x_step < 0
    assert raster.point_at(3, 0).real < raster.point_at(0, 0).real


@pytest.mark.parametrize("width, height", [(0, 5), (5, 0), (0, 0)])
def test_empty_rasters(width, height):
    raster = render_frame(ParameterSet(width=width, height=height))
    assert raster.pixels.shape == (height, width, 4)
    assert raster.iterations.shape == (height, width)


def test_zero_iterations_render_black():
    raster = render_frame(ParameterSet(max_iterations=0, width=6, height=4))
    assert not raster.pixels.any()
    assert not raster.iterations.any()


def test_interior_points_are_black():
    # the origin never escapes, its count is above the mapper's vmax
    params = ParameterSet(x_range=Range(-0.1, 0.1), y_range=Range(-0.1, 0.1), width=4, height=4)
    raster = render_frame(params)
    assert (raster.iterations == params.max_iterations).all()
    assert not raster.pixels.any()


def test_parallel_matches_sequential():
    params = ParameterSet(kind=FractalKind.JULIA, initial=0.285 + 0.01j, width=24, height=10)
    sequential = render_frame(params)
    parallel = render_frame(params, mode="parallel", workers=2)
    np.testing.assert_array_equal(parallel.pixels, sequential.pixels)
    np.testing.assert_array_equal(parallel.iterations, sequential.iterations)


def test_tensor_matches_sequential():
    pytest.importorskip("tensorflow")
    for kind in FractalKind:
        params = ParameterSet(kind=kind, initial=-0.4 + 0.6j, max_iterations=30, width=20, height=14)
        sequential = render_frame(params)
        tensor = render_frame(params, mode="tensor")
        np.testing.assert_array_equal(tensor.iterations, sequential.iterations)
        np.testing.assert_array_equal(tensor.pixels, sequential.pixels)


def test_tensor_mode_handles_empty_raster():
    pytest.importorskip("tensorflow")
    raster = render_frame(ParameterSet(width=0, height=3), mode="tensor")
    assert raster.pixels.shape == (3, 0, 4)


def test_unknown_mode_is_rejected(small_params):
    with pytest.raises(ValueError, match="Unknown render mode"):
        render_frame(small_params, mode="threads")


def test_kinds_are_distinct_computations():
    mandelbrot = render_frame(ParameterSet(width=40, height=30))
    julia = render_frame(ParameterSet(kind=FractalKind.JULIA, width=40, height=30))
    differing = np.count_nonzero(mandelbrot.iterations != julia.iterations)
    assert differing > 0.4 * mandelbrot.iterations.size


def test_to_image_drops_alpha(small_params):
    raster = render_frame(small_params)
    image = raster.to_image()
    assert image.mode == "RGB"
    assert image.size == (16, 12)
    assert image.getpixel((0, 0)) == tuple(int(v) for v in raster.pixels[0, 0, :3])
