import sys
from collections.abc import Callable
from dataclasses import dataclass

import moderngl
import pygame

from springcurve import config
from springcurve.models import ControlPoint, PhysicsParameters, TangentMarker, Vector2
from springcurve.renderer import Renderer
from springcurve.state import AppState, SteeringMode
from springcurve.steering import InputController, JoystickMotionSensor
from springcurve.types import SAMPLES


@dataclass(frozen=True)
class RenderFrame:
    """Read-only snapshot handed to the render sink once per frame."""

    control_points: list[ControlPoint]
    samples: SAMPLES
    tangent_markers: list[TangentMarker]
    mode: SteeringMode
    physics: PhysicsParameters


def frame_dt(last_time: float, timestamp: float) -> float:
    """Seconds since the previous frame, clamped to keep the integrator stable.

    Timestamps are in milliseconds. ``last_time == 0`` marks the first frame.
    """
    dt = config.DEFAULT_DT if last_time == 0 else (timestamp - last_time) / 1000.0
    return min(dt, config.MAX_DT)


def step_physics(state: AppState, dt: float) -> None:
    for point in state.curve.points:
        point.step(state.physics.stiffness, state.physics.damping, dt)


def update(state: AppState, timestamp: float) -> RenderFrame:
    """Advance one animation frame: integrate, resample, snapshot."""
    dt = frame_dt(state.last_time, timestamp)
    state.last_time = timestamp

    step_physics(state, dt)
    state.curve.resample()

    return RenderFrame(
        control_points=list(state.curve.points),
        samples=state.curve.samples,
        tangent_markers=list(state.curve.tangent_markers),
        mode=state.mode,
        physics=state.physics,
    )


class FrameLoop:
    """
    Calls ``callback(timestamp_ms)`` once per display frame until stopped.

    ``stop()`` deregisters the callback; the loop exits after the frame in
    progress.
    """

    def __init__(self, fps: int = config.TARGET_FPS) -> None:
        self.fps = fps
        self.clock = pygame.time.Clock()
        self.callback: Callable[[float], None] | None = None

    @property
    def running(self) -> bool:
        return self.callback is not None

    def request(self, callback: Callable[[float], None]) -> None:
        self.callback = callback

    def stop(self) -> None:
        self.callback = None

    def run(self) -> None:
        while self.callback is not None:
            self.callback(float(pygame.time.get_ticks()))
            self.clock.tick(self.fps)

    def get_fps(self) -> float:
        return self.clock.get_fps()


def handle_key(event: pygame.event.Event, state: AppState, controller: InputController) -> None:
    shift_held = bool(event.mod & pygame.KMOD_SHIFT)
    factor = 10 if shift_held else 1
    physics = state.physics

    if event.key == pygame.K_r:
        controller.reset()

    elif event.key == pygame.K_m:
        controller.switch_mode()

    # Stiffness
    elif event.key == pygame.K_q:
        physics.set_stiffness(physics.stiffness + config.STIFFNESS_STEP * factor)
        print(f"Stiffness: {physics.stiffness:.2f}")

    elif event.key == pygame.K_a:
        physics.set_stiffness(physics.stiffness - config.STIFFNESS_STEP * factor)
        print(f"Stiffness: {physics.stiffness:.2f}")

    # Damping
    elif event.key == pygame.K_e:
        physics.set_damping(physics.damping + config.DAMPING_STEP * factor)
        print(f"Damping:   {physics.damping:.2f}")

    elif event.key == pygame.K_d:
        physics.set_damping(physics.damping - config.DAMPING_STEP * factor)
        print(f"Damping:   {physics.damping:.2f}")


def main() -> None:
    width, height = config.CANVAS_WIDTH, config.CANVAS_HEIGHT

    pygame.init()
    pygame.display.set_mode((width, height), pygame.OPENGL | pygame.DOUBLEBUF)
    pygame.display.set_caption("Interactive Bezier Curve")
    ctx = moderngl.create_context()

    state = AppState.create(width, height)
    controller = InputController(state, JoystickMotionSensor())
    renderer = Renderer(ctx, width, height)
    loop = FrameLoop()

    print("\n" + "=" * 60)
    print("INTERACTIVE BEZIER CURVE")
    print("=" * 60)
    print("Mouse:")
    print("  Left Click+Drag - Move an interior control point")
    print("  Move            - Steer the curve (mouse mode)")
    print("\nKeys:")
    print("  M               - Toggle mouse / motion steering")
    print("  R               - Reset control points")
    print("  Q / A           - Increase/Decrease Stiffness")
    print("  E / D           - Increase/Decrease Damping")
    print("  Shift + Q/A/E/D - 10x faster adjustment")
    print("  Esc             - Quit")
    print("=" * 60)
    print(f"  Stiffness: {state.physics.stiffness:.2f}")
    print(f"  Damping:   {state.physics.damping:.2f}")
    print()

    frame_count = 0

    def on_frame(timestamp: float) -> None:
        nonlocal frame_count

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                loop.stop()

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    loop.stop()
                else:
                    handle_key(event, state, controller)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                controller.pointer_down(Vector2(*event.pos))

            elif event.type == pygame.MOUSEMOTION:
                controller.pointer_move(Vector2(*event.pos))

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                controller.pointer_up()

            elif event.type == pygame.WINDOWLEAVE:
                controller.pointer_up()

        if not loop.running:
            return

        controller.poll_sensor()
        frame = update(state, timestamp)
        renderer.draw(frame, loop.get_fps())

        frame_count += 1
        if frame_count % (config.TARGET_FPS * 10) == 0:
            p1, p2 = state.p1.position, state.p2.position
            print(
                f"[Sim] {frame_count} frames | P1 ({p1.x:.1f}, {p1.y:.1f}) "
                f"P2 ({p2.x:.1f}, {p2.y:.1f}) | {loop.get_fps():.0f} FPS"
            )

    loop.request(on_frame)
    loop.run()

    print("\n[Main] Shutting down...")
    renderer.release()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
