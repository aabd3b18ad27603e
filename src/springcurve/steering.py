# steering.py
"""
Input handling: direct dragging plus ambient steering of the interior targets.

Pointer steering maps the pointer's offset from the canvas center onto the
two interior targets with opposite signs, giving an S-shaped response.
Motion steering integrates device rotation rates into the same targets.
Either way the targets are clamped back inside the canvas margin.
"""
from __future__ import annotations

import asyncio

import pygame

from springcurve import config
from springcurve.models import Vector2
from springcurve.state import AppState, SteeringMode

# ===============================
# MOTION SENSORS
# ===============================


class MotionSensor:
    """Rotation-rate source. The base class reports no capability."""

    name = "none"

    def available(self) -> bool:
        return False

    async def request_permission(self) -> bool:
        return False

    def poll(self) -> tuple[float, float] | None:
        """Latest (beta, gamma) rotation rates in degrees per second."""
        return None


class NullMotionSensor(MotionSensor):
    pass


class JoystickMotionSensor(MotionSensor):
    """
    Uses the first pygame joystick as a rotation-rate source.

    Axis 0 drives gamma (left/right), axis 1 drives beta (forward/back).
    Deflections inside the deadzone read as zero.
    """

    name = "joystick"

    def __init__(
        self,
        rate_scale: float = config.JOYSTICK_RATE_SCALE,
        deadzone: float = config.JOYSTICK_DEADZONE,
    ) -> None:
        self.rate_scale = rate_scale
        self.deadzone = deadzone
        self.joystick: pygame.joystick.JoystickType | None = None

    def available(self) -> bool:
        if not pygame.joystick.get_init():
            pygame.joystick.init()
        return pygame.joystick.get_count() > 0

    async def request_permission(self) -> bool:
        if not self.available():
            return False
        self.joystick = pygame.joystick.Joystick(0)
        self.joystick.init()
        return True

    def _axis(self, idx: int) -> float:
        if self.joystick is None:
            return 0.0
        value = self.joystick.get_axis(idx)
        return 0.0 if abs(value) < self.deadzone else value * self.rate_scale

    def poll(self) -> tuple[float, float] | None:
        if self.joystick is None or self.joystick.get_numaxes() < 2:
            return None
        return self._axis(1), self._axis(0)


# ===============================
# INPUT CONTROLLER
# ===============================


class InputController:
    def __init__(self, state: AppState, sensor: MotionSensor | None = None) -> None:
        self.state = state
        self.sensor = sensor if sensor is not None else NullMotionSensor()
        self.motion_granted = False

    # ------------------------
    # Pointer
    # ------------------------

    def pointer_down(self, pos: Vector2) -> None:
        for point in self.state.curve.points:
            if not point.is_fixed and point.contains(pos):
                self.state.dragged = point
                point.is_dragging = True
                break

    def pointer_move(self, pos: Vector2) -> None:
        state = self.state
        state.pointer = pos.copy()

        if state.dragged is not None:
            state.dragged.position = pos.copy()
            state.dragged.target = pos.copy()
            state.dragged.velocity = Vector2(0.0, 0.0)
        elif state.mode is SteeringMode.POINTER:
            offset = (pos - state.center) * config.POINTER_OFFSET_SCALE

            state.p1.target = state.p1_rest() + offset * config.POINTER_P1_GAIN
            state.p2.target = state.p2_rest() - offset * config.POINTER_P2_GAIN

            self.clamp_targets()

    def pointer_up(self) -> None:
        if self.state.dragged is not None:
            self.state.dragged.is_dragging = False
            self.state.dragged = None

    # ------------------------
    # Rotation
    # ------------------------

    def rotation(self, beta: float | None, gamma: float | None) -> None:
        if self.state.mode is not SteeringMode.MOTION:
            return
        rate = Vector2(gamma or 0.0, beta or 0.0) * config.ROTATION_SENSITIVITY

        self.state.p1.target = self.state.p1.target + rate
        self.state.p2.target = self.state.p2.target - rate * config.ROTATION_P2_RATIO

        self.clamp_targets()

    def poll_sensor(self) -> None:
        if not self.motion_granted:
            return
        try:
            rates = self.sensor.poll()
        except pygame.error as e:
            print(f"[Input] Motion sensor lost: {e}")
            self.motion_granted = False
            self.fall_back_to_pointer()
            return
        if rates is not None:
            self.rotation(*rates)

    # ------------------------
    # Targets & modes
    # ------------------------

    def clamp_targets(self, margin: float = config.TARGET_MARGIN) -> None:
        w, h = self.state.width, self.state.height
        for point in (self.state.p1, self.state.p2):
            point.target = point.target.clamp(margin, w - margin, margin, h - margin)

    async def grant_motion(self) -> bool:
        """Best-effort permission request; any failure leaves pointer-only steering."""
        if not self.sensor.available():
            print(f"[Input] Motion sensor '{self.sensor.name}' unavailable, pointer only")
            return False
        try:
            self.motion_granted = await self.sensor.request_permission()
        except (pygame.error, OSError) as e:
            print(f"[Input] Motion denied: {e}")
            self.motion_granted = False
        else:
            if not self.motion_granted:
                print("[Input] Motion denied")
        return self.motion_granted

    def switch_mode(self) -> SteeringMode:
        self.state.mode = self.state.mode.toggled()
        print(f"[Input] Mode: {self.state.mode.value.capitalize()}")

        if self.state.mode is SteeringMode.MOTION and not self.motion_granted:
            if not asyncio.run(self.grant_motion()):
                self.fall_back_to_pointer()
        return self.state.mode

    def fall_back_to_pointer(self) -> None:
        if self.state.mode is not SteeringMode.POINTER:
            self.state.mode = SteeringMode.POINTER
            print("[Input] Mode: Mouse (motion unavailable)")

    def reset(self) -> None:
        self.state.p1.settle_at(self.state.p1_rest())
        self.state.p2.settle_at(self.state.p2_rest())

        if self.state.dragged is not None:
            self.state.dragged.is_dragging = False
        self.state.dragged = None
        print("[Input] Reset")
