"""
Test suite for the per-frame driver.

Tests cover:
- Frame timestep defaults and clamping
- Scene construction
- End-to-end integration through update()
- Frame loop start/stop
"""
from __future__ import annotations

import numpy as np
import pytest

from springcurve.models import Vector2
from springcurve.sim import FrameLoop, RenderFrame, frame_dt, step_physics, update
from springcurve.state import AppState, SteeringMode

DT = 1.0 / 60.0


@pytest.fixture
def state() -> AppState:
    return AppState.create(800, 500)


class TestFrameDt:
    def test_first_frame_uses_default(self) -> None:
        assert frame_dt(0.0, 12345.0) == pytest.approx(1.0 / 60.0)

    def test_elapsed_milliseconds(self) -> None:
        assert frame_dt(1000.0, 1016.0) == pytest.approx(0.016)

    def test_slow_frames_are_clamped(self) -> None:
        assert frame_dt(1000.0, 1100.0) == pytest.approx(1.0 / 30.0)
        assert frame_dt(1000.0, 61000.0) == pytest.approx(1.0 / 30.0)


class TestScene:
    def test_default_layout(self, state) -> None:
        positions = [p.position for p in state.points]
        assert positions == [
            Vector2(160.0, 250.0),
            Vector2(320.0, 150.0),
            Vector2(480.0, 350.0),
            Vector2(640.0, 250.0),
        ]
        assert [p.is_fixed for p in state.points] == [True, False, False, True]

    def test_curve_shares_points(self, state) -> None:
        assert all(a is b for a, b in zip(state.curve.points, state.points))

    def test_initial_state(self, state) -> None:
        assert state.mode is SteeringMode.POINTER
        assert state.dragged is None
        assert state.last_time == 0.0
        assert state.curve.samples.shape == (101, 2)


class TestUpdate:
    def test_point_at_rest_stays_at_rest(self, state) -> None:
        state.p1.target = Vector2(320.0, 150.0)
        for _ in range(600):
            step_physics(state, DT)
        assert state.p1.position.distance_to(Vector2(320.0, 150.0)) < 0.01

    def test_first_step_matches_closed_form(self, state) -> None:
        state.p2.target = Vector2(500.0, 200.0)
        update(state, 16.0)
        assert state.p2.velocity.x == pytest.approx((500 - 480) * 0.08 * DT * 0.99)
        assert state.p2.velocity.y == pytest.approx((200 - 350) * 0.08 * DT * 0.99)

    def test_fixed_endpoints_never_move(self, state) -> None:
        state.points[0].target = Vector2(0.0, 0.0)
        t = 0.0
        for _ in range(120):
            t += 16.0
            update(state, t)
        assert state.points[0].position == Vector2(160.0, 250.0)
        assert state.points[3].position == Vector2(640.0, 250.0)

    def test_returns_render_frame(self, state) -> None:
        frame = update(state, 16.0)
        assert isinstance(frame, RenderFrame)
        assert len(frame.control_points) == 4
        assert frame.samples.shape == (101, 2)
        assert len(frame.tangent_markers) == 11
        assert frame.mode is SteeringMode.POINTER
        assert frame.physics is state.physics

    def test_records_timestamp(self, state) -> None:
        update(state, 500.0)
        assert state.last_time == 500.0

    def test_samples_follow_physics(self, state) -> None:
        state.p1.target = Vector2(320.0, 60.0)
        before = state.curve.samples.copy()
        update(state, 16.0)
        update(state, 32.0)
        assert not np.array_equal(before, state.curve.samples)
        np.testing.assert_allclose(state.curve.samples[0], [160.0, 250.0], atol=1e-9)
        np.testing.assert_allclose(state.curve.samples[-1], [640.0, 250.0], atol=1e-9)

    def test_parameter_changes_apply_next_step(self, state) -> None:
        state.p2.target = Vector2(500.0, 350.0)
        state.physics.set_stiffness(0.3)
        update(state, 16.0)
        assert state.p2.velocity.x == pytest.approx(20 * 0.3 * DT * 0.99)


class TestFrameLoop:
    def test_runs_until_stopped(self) -> None:
        loop = FrameLoop(fps=1000)
        calls: list[float] = []

        def on_frame(timestamp: float) -> None:
            calls.append(timestamp)
            if len(calls) == 3:
                loop.stop()

        loop.request(on_frame)
        assert loop.running
        loop.run()

        assert len(calls) == 3
        assert not loop.running

    def test_run_without_callback_returns(self) -> None:
        loop = FrameLoop()
        loop.run()
        assert not loop.running
