# curve.py
"""
Cubic Bezier evaluation over four spring-driven control points.

Scalar evaluation works on ``Vector2`` directly. Per-frame resampling runs
the same closed forms through jitted kernels over a (4, 2) control array.
"""

from numba import njit  # type: ignore
import numpy as np

from springcurve import config
from springcurve.models import ControlPoint, TangentMarker, Vector2
from springcurve.types import CONTROL, PARAMS, SAMPLES

# ===============================
# SAMPLING KERNELS
# ===============================


@njit(fastmath=True, cache=True)  # type: ignore
def bezier_points(ctrl: CONTROL, ts: PARAMS) -> SAMPLES:
    """B(t) = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3"""
    out = np.empty((len(ts), 2), dtype=np.float64)
    for i in range(len(ts)):
        t = ts[i]
        u = 1.0 - t
        b0 = u * u * u
        b1 = 3.0 * u * u * t
        b2 = 3.0 * u * t * t
        b3 = t * t * t
        for k in range(2):
            out[i, k] = b0 * ctrl[0, k] + b1 * ctrl[1, k] + b2 * ctrl[2, k] + b3 * ctrl[3, k]
    return out


@njit(fastmath=True, cache=True)  # type: ignore
def bezier_derivatives(ctrl: CONTROL, ts: PARAMS) -> SAMPLES:
    """B'(t) = 3(1-t)^2 (P1-P0) + 6(1-t) t (P2-P1) + 3 t^2 (P3-P2)"""
    out = np.empty((len(ts), 2), dtype=np.float64)
    for i in range(len(ts)):
        t = ts[i]
        u = 1.0 - t
        d0 = 3.0 * u * u
        d1 = 6.0 * u * t
        d2 = 3.0 * t * t
        for k in range(2):
            out[i, k] = (
                d0 * (ctrl[1, k] - ctrl[0, k])
                + d1 * (ctrl[2, k] - ctrl[1, k])
                + d2 * (ctrl[3, k] - ctrl[2, k])
            )
    return out


# ===============================
# CURVE CLASS
# ===============================


class BezierCurve:
    """
    Cubic Bezier over four control points held by reference.

    ``P0`` and ``P3`` are the fixed endpoints, ``P1`` and ``P2`` the free
    interior points. ``samples`` and ``tangent_markers`` are derived state,
    rebuilt by ``resample()`` once per frame.

    ``evaluate`` and ``tangent`` expect ``t`` in [0, 1] and do not clamp.
    """

    def __init__(
        self,
        p0: ControlPoint,
        p1: ControlPoint,
        p2: ControlPoint,
        p3: ControlPoint,
        segments: int = config.CURVE_SEGMENTS,
        tangent_stride: int = config.TANGENT_STRIDE,
    ) -> None:
        self.points = [p0, p1, p2, p3]
        self.segments = segments
        self.tangent_stride = tangent_stride

        self.samples: SAMPLES = np.empty((0, 2), dtype=np.float64)
        self.tangent_markers: list[TangentMarker] = []

    @classmethod
    def from_points(cls, points: list[ControlPoint], **kwargs: int) -> "BezierCurve":
        if len(points) != 4:
            raise ValueError(f"Cubic Bezier requires exactly 4 control points, got {len(points)}")
        return cls(*points, **kwargs)

    def evaluate(self, t: float) -> Vector2:
        u = 1.0 - t
        tt = t * t
        uu = u * u
        p0, p1, p2, p3 = (p.position for p in self.points)

        return p0 * (uu * u) + p1 * (3 * uu * t) + p2 * (3 * u * tt) + p3 * (tt * t)

    def tangent(self, t: float) -> Vector2:
        """Unnormalized derivative of the curve at ``t``."""
        u = 1.0 - t
        p0, p1, p2, p3 = (p.position for p in self.points)

        term1 = (p1 - p0) * (3 * u * u)
        term2 = (p2 - p1) * (6 * u * t)
        term3 = (p3 - p2) * (3 * t * t)
        return term1 + term2 + term3

    def control_array(self) -> CONTROL:
        return np.array([[p.position.x, p.position.y] for p in self.points], dtype=np.float64)

    def resample(self, segments: int | None = None, tangent_stride: int | None = None) -> None:
        """Rebuild the polyline and tangent markers from current positions."""
        if segments is not None:
            self.segments = segments
        if tangent_stride is not None:
            self.tangent_stride = tangent_stride

        ctrl = self.control_array()
        ts = np.arange(self.segments + 1, dtype=np.float64) / self.segments
        self.samples = bezier_points(ctrl, ts)

        marker_idx = np.arange(0, self.segments + 1, self.tangent_stride)
        directions = bezier_derivatives(ctrl, ts[marker_idx])

        self.tangent_markers = [
            TangentMarker(
                point=Vector2(float(self.samples[i, 0]), float(self.samples[i, 1])),
                direction=Vector2(float(d[0]), float(d[1])).normalize(),
            )
            for i, d in zip(marker_idx, directions)
        ]

    @property
    def sampled_points(self) -> list[Vector2]:
        return [Vector2(float(x), float(y)) for x, y in self.samples]
