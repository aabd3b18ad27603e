"""
Application state for one interactive curve.

Everything the per-frame update and the input handlers touch lives on an
explicit ``AppState`` so the physics can be driven without a window.
"""
from __future__ import annotations

from enum import Enum

from springcurve import config
from springcurve.curve import BezierCurve
from springcurve.models import ControlPoint, PhysicsParameters, Vector2


class SteeringMode(Enum):
    POINTER = "mouse"
    MOTION = "motion"

    def toggled(self) -> SteeringMode:
        return SteeringMode.MOTION if self is SteeringMode.POINTER else SteeringMode.POINTER


def layout_point(width: float, height: float, fraction: tuple[float, float]) -> Vector2:
    return Vector2(width * fraction[0], height * fraction[1])


class AppState:
    def __init__(
        self,
        width: float,
        height: float,
        points: list[ControlPoint],
        physics: PhysicsParameters | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.points = points
        self.curve = BezierCurve.from_points(points)
        self.physics = physics if physics is not None else PhysicsParameters()

        self.mode = SteeringMode.POINTER
        self.dragged: ControlPoint | None = None
        self.pointer = Vector2(width / 2, height / 2)
        self.last_time = 0.0

    @classmethod
    def create(
        cls,
        width: float = config.CANVAS_WIDTH,
        height: float = config.CANVAS_HEIGHT,
    ) -> AppState:
        """Default scene: fixed endpoints at mid-height, free points above and below."""
        fractions = (
            config.P0_FRACTION,
            config.P1_FRACTION,
            config.P2_FRACTION,
            config.P3_FRACTION,
        )
        points = []
        for i, fraction in enumerate(fractions):
            pos = layout_point(width, height, fraction)
            points.append(ControlPoint(pos.x, pos.y, fixed=i in (0, 3)))

        state = cls(width, height, points)
        state.curve.resample()
        return state

    @property
    def p1(self) -> ControlPoint:
        return self.points[1]

    @property
    def p2(self) -> ControlPoint:
        return self.points[2]

    @property
    def center(self) -> Vector2:
        return Vector2(self.width / 2, self.height / 2)

    def p1_rest(self) -> Vector2:
        return layout_point(self.width, self.height, config.P1_FRACTION)

    def p2_rest(self) -> Vector2:
        return layout_point(self.width, self.height, config.P2_FRACTION)
