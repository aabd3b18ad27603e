"""
Test suite for cubic Bezier evaluation and per-frame resampling.

Tests cover:
- Exact endpoints
- Continuity of the sampled polyline
- Tangent against a central-difference derivative
- Sample and marker layout after resample
- Shared identity with the control points
"""
from __future__ import annotations

import numpy as np
import pytest

from springcurve.curve import BezierCurve, bezier_derivatives, bezier_points
from springcurve.models import ControlPoint, Vector2


def make_curve() -> BezierCurve:
    return BezierCurve(
        ControlPoint(160.0, 250.0, fixed=True),
        ControlPoint(320.0, 150.0),
        ControlPoint(480.0, 350.0),
        ControlPoint(640.0, 250.0, fixed=True),
    )


def skewed_curve() -> BezierCurve:
    return BezierCurve(
        ControlPoint(10.0, 400.0, fixed=True),
        ControlPoint(700.0, 20.0),
        ControlPoint(-50.0, 80.0),
        ControlPoint(300.0, 480.0, fixed=True),
    )


class TestEvaluate:
    @pytest.mark.parametrize("factory", [make_curve, skewed_curve])
    def test_endpoints_are_exact(self, factory) -> None:
        curve = factory()
        start, end = curve.evaluate(0.0), curve.evaluate(1.0)
        p0, p3 = curve.points[0].position, curve.points[3].position
        assert start.distance_to(p0) < 1e-9
        assert end.distance_to(p3) < 1e-9

    def test_midpoint_of_symmetric_curve(self) -> None:
        # 0.125 * (P0 + 3 P1 + 3 P2 + P3)
        mid = make_curve().evaluate(0.5)
        assert mid.x == pytest.approx(400.0)
        assert mid.y == pytest.approx(250.0)

    @pytest.mark.parametrize("factory", [make_curve, skewed_curve])
    def test_continuity(self, factory) -> None:
        curve = factory()
        prev = curve.evaluate(0.0)
        for i in range(1, 1001):
            cur = curve.evaluate(i / 1000)
            assert prev.distance_to(cur) < 2.5
            prev = cur

    def test_follows_control_point_mutation(self) -> None:
        curve = make_curve()
        before = curve.evaluate(0.3)
        curve.points[1].position = Vector2(320.0, 0.0)
        after = curve.evaluate(0.3)
        assert after.y < before.y


class TestTangent:
    @pytest.mark.parametrize("t", [0.05, 0.25, 0.5, 0.75, 0.95])
    @pytest.mark.parametrize("factory", [make_curve, skewed_curve])
    def test_matches_central_difference(self, factory, t: float) -> None:
        curve = factory()
        h = 1e-6
        numeric = (curve.evaluate(t + h) - curve.evaluate(t - h)) / (2 * h)
        analytic = curve.tangent(t)
        assert analytic.x == pytest.approx(numeric.x, rel=1e-5, abs=1e-3)
        assert analytic.y == pytest.approx(numeric.y, rel=1e-5, abs=1e-3)

    def test_endpoint_tangents_follow_control_legs(self) -> None:
        curve = make_curve()
        assert curve.tangent(0.0) == Vector2(3 * 160.0, 3 * -100.0)
        assert curve.tangent(1.0) == Vector2(3 * 160.0, 3 * -100.0)

    def test_degenerate_tangent_normalizes_to_zero(self) -> None:
        points = [ControlPoint(5.0, 5.0) for _ in range(4)]
        curve = BezierCurve(*points)
        assert curve.tangent(0.5).normalize() == Vector2(0.0, 0.0)


class TestResample:
    def test_default_sample_and_marker_counts(self) -> None:
        curve = make_curve()
        curve.resample()
        assert curve.samples.shape == (101, 2)
        assert len(curve.sampled_points) == 101
        assert len(curve.tangent_markers) == 11

    def test_samples_match_evaluate(self) -> None:
        curve = skewed_curve()
        curve.resample()
        for i, point in enumerate(curve.sampled_points):
            expected = curve.evaluate(i / 100)
            assert point.distance_to(expected) < 1e-9

    def test_markers_use_every_stride_sample(self) -> None:
        curve = skewed_curve()
        curve.resample()
        for k, marker in enumerate(curve.tangent_markers):
            t = (k * 10) / 100
            assert marker.point.distance_to(curve.evaluate(t)) < 1e-9
            expected = curve.tangent(t).normalize()
            assert marker.direction.distance_to(expected) < 1e-9
            assert marker.direction.length() == pytest.approx(1.0)

    def test_custom_segments_and_stride(self) -> None:
        curve = make_curve()
        curve.resample(segments=25, tangent_stride=10)
        assert curve.samples.shape == (26, 2)
        # indices 0, 10, 20
        assert len(curve.tangent_markers) == 3

    def test_idempotent_for_same_state(self) -> None:
        curve = skewed_curve()
        curve.resample()
        first = curve.samples.copy()
        markers = list(curve.tangent_markers)
        curve.resample()
        np.testing.assert_array_equal(first, curve.samples)
        assert markers == curve.tangent_markers

    def test_degenerate_markers_have_zero_direction(self) -> None:
        curve = BezierCurve(*[ControlPoint(1.0, 2.0) for _ in range(4)])
        curve.resample()
        assert all(m.direction == Vector2(0.0, 0.0) for m in curve.tangent_markers)


class TestConstruction:
    def test_holds_references_not_copies(self) -> None:
        points = [ControlPoint(float(i), 0.0) for i in range(4)]
        curve = BezierCurve.from_points(points)
        assert all(a is b for a, b in zip(curve.points, points))

    def test_rejects_wrong_point_count(self) -> None:
        with pytest.raises(ValueError, match="exactly 4"):
            BezierCurve.from_points([ControlPoint(0.0, 0.0)] * 3)

    def test_control_array(self) -> None:
        arr = make_curve().control_array()
        assert arr.shape == (4, 2)
        assert arr[1].tolist() == [320.0, 150.0]


class TestKernels:
    def test_points_and_derivatives_shapes(self) -> None:
        ctrl = make_curve().control_array()
        ts = np.linspace(0.0, 1.0, 7)
        assert bezier_points(ctrl, ts).shape == (7, 2)
        assert bezier_derivatives(ctrl, ts).shape == (7, 2)

    def test_kernel_endpoints(self) -> None:
        ctrl = skewed_curve().control_array()
        out = bezier_points(ctrl, np.array([0.0, 1.0]))
        np.testing.assert_allclose(out[0], ctrl[0], atol=1e-9)
        np.testing.assert_allclose(out[1], ctrl[3], atol=1e-9)
