# models.py
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
import math

from springcurve import config

# Extra per-step velocity decay applied after integration, independent of damping.
VELOCITY_DECAY = 0.99


class Vector2:
    __slots__ = ["x", "y"]

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x, self.y = x, y

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __repr__(self) -> str:
        return f"Vector2({self.x!r}, {self.y!r})"

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vector2:  # Handles: scalar * vector
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vector2:
        return Vector2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    # Named forms, same semantics as the operators
    def add(self, other: Vector2) -> Vector2:
        return self + other

    def subtract(self, other: Vector2) -> Vector2:
        return self - other

    def scale(self, scalar: float) -> Vector2:
        return self * scalar

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> Vector2:
        length = self.length()
        return self / length if length != 0 else Vector2(0.0, 0.0)

    def distance_to(self, other: Vector2) -> float:
        return (self - other).length()

    def copy(self) -> Vector2:
        return Vector2(self.x, self.y)

    def clamp(self, lo_x: float, hi_x: float, lo_y: float, hi_y: float) -> Vector2:
        return Vector2(max(lo_x, min(self.x, hi_x)), max(lo_y, min(self.y, hi_y)))


class ControlPoint:
    """
    A curve control point pulled toward ``target`` by a damped spring.

    Fixed points never move after construction. While ``is_dragging`` is set
    the position is driven from outside and the integrator is suspended.
    Input handling may write ``position``, ``target``, ``velocity`` and
    ``is_dragging`` directly.
    """

    def __init__(
        self,
        x: float,
        y: float,
        fixed: bool = False,
        radius: float = config.POINT_RADIUS,
    ) -> None:
        self.position = Vector2(x, y)
        self.velocity = Vector2(0.0, 0.0)
        self.target = Vector2(x, y)
        self.is_fixed = fixed  # If True, physics won't move this point
        self.is_dragging = False
        self.radius = radius

    def __repr__(self) -> str:
        return (
            f"ControlPoint(position={self.position!r}, target={self.target!r}, "
            f"fixed={self.is_fixed}, dragging={self.is_dragging})"
        )

    def step(self, stiffness: float, damping: float, dt: float) -> None:
        """Advance one semi-implicit Euler step toward the target."""
        if self.is_fixed or self.is_dragging:
            return

        spring_force = (self.target - self.position) * stiffness
        damping_force = self.velocity * -damping
        acceleration = spring_force + damping_force

        self.velocity = self.velocity + acceleration * dt
        self.position = self.position + self.velocity * dt
        self.velocity = self.velocity * VELOCITY_DECAY

    def contains(self, point: Vector2) -> bool:
        return self.position.distance_to(point) <= self.radius

    def settle_at(self, point: Vector2) -> None:
        self.position = point.copy()
        self.target = point.copy()
        self.velocity = Vector2(0.0, 0.0)


@dataclass
class PhysicsParameters:
    """
    Spring coefficients read by the integrator on every step.

    Attributes:
        stiffness: Spring constant, kept within the slider range
        damping: Velocity damping in [0, 1]
    """

    stiffness: float = config.DEFAULT_STIFFNESS
    damping: float = config.DEFAULT_DAMPING

    def set_stiffness(self, value: float) -> float:
        self.stiffness = max(config.STIFFNESS_MIN, min(config.STIFFNESS_MAX, value))
        return self.stiffness

    def set_damping(self, value: float) -> float:
        self.damping = max(config.DAMPING_MIN, min(config.DAMPING_MAX, value))
        return self.damping


@dataclass(frozen=True)
class TangentMarker:
    point: Vector2
    direction: Vector2
