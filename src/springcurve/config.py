"""
Configuration & Scene Constants
===============================
Central registry for the canvas layout, physics defaults, steering
sensitivities and drawing style.

Everything here is a plain module-level constant. Physics coefficients are
only defaults: the live values sit in ``PhysicsParameters`` and are changed
at runtime from the keyboard.
"""
from pathlib import Path

# Canvas
CANVAS_WIDTH: int = 800
CANVAS_HEIGHT: int = 500
TARGET_MARGIN: float = 50.0

# Default layout as fractions of (width, height)
P0_FRACTION: tuple[float, float] = (0.2, 0.5)
P1_FRACTION: tuple[float, float] = (0.4, 0.3)
P2_FRACTION: tuple[float, float] = (0.6, 0.7)
P3_FRACTION: tuple[float, float] = (0.8, 0.5)
POINT_RADIUS: float = 10.0

# Physics
DEFAULT_STIFFNESS: float = 0.08
DEFAULT_DAMPING: float = 0.92
STIFFNESS_MIN: float = 0.01
STIFFNESS_MAX: float = 0.3
DAMPING_MIN: float = 0.0
DAMPING_MAX: float = 1.0
STIFFNESS_STEP: float = 0.01
DAMPING_STEP: float = 0.01

# Frame timing (seconds)
DEFAULT_DT: float = 1.0 / 60.0
MAX_DT: float = 1.0 / 30.0
TARGET_FPS: int = 60

# Sampling
CURVE_SEGMENTS: int = 100
TANGENT_STRIDE: int = 10

# Steering
POINTER_OFFSET_SCALE: float = 0.005
POINTER_P1_GAIN: float = 200.0
POINTER_P2_GAIN: float = 150.0
ROTATION_SENSITIVITY: float = 8.0
ROTATION_P2_RATIO: float = 0.7
# Joystick axis deflection of 1.0 maps to this many degrees per second
JOYSTICK_RATE_SCALE: float = 2.0
JOYSTICK_DEADZONE: float = 0.1

# Drawing
TANGENT_LENGTH: float = 30.0
ARROW_HEAD_SIZE: float = 8.0
TARGET_DOT_RADIUS: float = 3.0
BACKGROUND_COLOR: str = "#0a192f"
CURVE_COLOR: str = "#64ffda"
POLYGON_COLOR: tuple[float, float, float, float] = (100 / 255, 1.0, 218 / 255, 0.3)
POLYGON_DASH: tuple[float, float] = (5.0, 3.0)
TANGENT_COLOR: str = "#ff4081"
FIXED_POINT_COLOR: str = "#64ffda"
DRAGGING_POINT_COLOR: str = "#ff4081"
FREE_POINT_COLOR: str = "#ffffff"
OUTLINE_COLOR: str = "#ffffff"
TARGET_DOT_COLOR: tuple[float, float, float, float] = (1.0, 64 / 255, 129 / 255, 0.5)

SHADERS_PATH: Path = Path(__file__).parent / "shaders"
