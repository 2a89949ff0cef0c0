"""Tests for the curve lookup table and its queries."""

import math
import warnings

import numpy as np
import pytest

from config.settings import DK_CURVE_SEGMENTS
from core.curve_sampler import CubicSegment, CurvePoint, CurveSampler


def test_table_has_all_samples_sorted_by_x(sampler):
    table = sampler.table
    assert table.shape == (4 * 51, 2)
    assert np.all(np.diff(table[:, 0]) >= 0)


def test_table_is_read_only(sampler):
    with pytest.raises(ValueError):
        sampler.table[0, 0] = 0.5


def test_shared_instance_is_reused():
    assert CurveSampler.shared() is CurveSampler.shared()


def test_segments_are_contiguous(sampler):
    for current, following in zip(sampler.segments, sampler.segments[1:]):
        assert current.p3 == following.p0


def test_segment_endpoints_evaluate_to_control_points():
    seg = CubicSegment.from_control_points(DK_CURVE_SEGMENTS[1])
    start, end = seg.evaluate(np.array([0.0, 1.0]))
    assert tuple(start) == pytest.approx(seg.p0)
    assert tuple(end) == pytest.approx(seg.p3)


def test_curve_height_at_known_points(sampler):
    assert sampler.curve_height(0.0) == pytest.approx(0.15)
    assert sampler.curve_height(0.15) == pytest.approx(0.95)
    assert sampler.curve_height(0.40) == pytest.approx(0.12)
    assert sampler.curve_height(0.70) == pytest.approx(0.60)
    assert sampler.curve_height(1.0) == pytest.approx(0.75)


def test_curve_height_clamps_out_of_range(sampler):
    assert sampler.curve_height(-3.0) == sampler.curve_height(0.0)
    assert sampler.curve_height(7.0) == sampler.curve_height(1.0)


def test_curve_height_never_raises_on_nan(sampler):
    assert math.isfinite(sampler.curve_height(float("nan")))


@pytest.mark.parametrize("junction", [0.15, 0.40, 0.70])
def test_curve_is_continuous_at_segment_junctions(sampler, junction):
    left = sampler.curve_height(junction - 1e-6)
    right = sampler.curve_height(junction + 1e-6)
    assert abs(left - right) < 1e-3


def test_curve_height_interpolates_between_samples(sampler):
    xs, ys = sampler.table[:, 0], sampler.table[:, 1]
    i = 30
    mid = (xs[i] + xs[i + 1]) / 2
    assert sampler.curve_height(mid) == pytest.approx((ys[i] + ys[i + 1]) / 2)


def test_snap_keeps_x_and_replaces_y(sampler):
    point = sampler.snap((0.5, 0.99))
    assert isinstance(point, CurvePoint)
    assert point.x == 0.5
    assert point.y == sampler.curve_height(0.5)


def test_snap_clamps_x(sampler):
    assert sampler.snap((1.4, 0.0)).x == 1.0
    assert sampler.snap((-0.2, 0.0)).x == 0.0


def test_nearest_point_is_always_a_table_sample(sampler):
    samples = {(float(x), float(y)) for x, y in sampler.table}
    for target in [(0.0, 0.0), (0.5, 0.5), (0.9, 0.1), (0.2, 1.2), (-1.0, 3.0)]:
        point = sampler.nearest_point(target, 1.6)
        assert (point.x, point.y) in samples


def test_nearest_point_on_curve_returns_itself(sampler):
    x, y = sampler.table[77]
    assert sampler.nearest_point((x, y)) == CurvePoint(float(x), float(y))


def test_nearest_point_respects_aspect_ratio(sampler):
    # Target sits above the valley. On a very wide chart, horizontal distance
    # dominates and the answer stays close in x; on a tall one it does not.
    target = (0.40, 0.60)
    wide = sampler.nearest_point(target, 20.0)
    tall = sampler.nearest_point(target, 0.05)
    assert abs(wide.x - 0.40) < abs(tall.x - 0.40)
    assert abs(tall.y - 0.60) < abs(wide.y - 0.60)


@pytest.mark.parametrize("aspect", [0.0, -2.0, float("nan"), float("inf")])
def test_nearest_point_invalid_aspect_falls_back_to_square(sampler, aspect):
    target = (0.3, 0.7)
    assert sampler.nearest_point(target, aspect) == sampler.nearest_point(target, 1.0)


def test_nearest_point_ties_resolve_to_earliest_index():
    # Two identical segments produce duplicated samples; the first one wins.
    flat = ((0.0, 0.5), (0.0, 0.5), (0.0, 0.5), (0.0, 0.5))
    sampler = CurveSampler(segments=[flat, flat], samples_per_segment=2)
    point = sampler.nearest_point((0.0, 0.5))
    assert point == CurvePoint(0.0, 0.5)


def test_degenerate_bracket_returns_left_sample():
    flat = ((0.2, 0.3), (0.2, 0.3), (0.2, 0.3), (0.2, 0.3))
    sampler = CurveSampler(segments=[flat], samples_per_segment=3)
    assert sampler.curve_height(0.2) == pytest.approx(0.3)


@pytest.mark.parametrize("target", [(1e308, 1e308), (float("inf"), 0.2), (1e9, 0.75)])
def test_nearest_point_far_right_target_picks_right_end(sampler, target):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        point = sampler.nearest_point(target, 1.7)
    assert point == CurvePoint(float(sampler.table[-1, 0]), float(sampler.table[-1, 1]))
    assert point.x == 1.0


def test_nearest_point_far_left_target_picks_left_end(sampler):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        point = sampler.nearest_point((float("-inf"), 0.15), 1.7)
    assert point.x == 0.0


def test_nearest_point_huge_aspect_ratio_does_not_overflow(sampler):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        point = sampler.nearest_point((0.5, 0.5), 1e300)
    assert point.x == pytest.approx(0.5, abs=0.02)
