"""
Interactive Bezier Curve Package

A cubic Bezier curve whose two interior control points are pulled toward
their targets by damped springs, steered by the mouse or a motion sensor.
"""

from .curve import BezierCurve
from .models import VELOCITY_DECAY, ControlPoint, PhysicsParameters, TangentMarker, Vector2

__version__ = "0.1.0"

__all__ = [
    "VELOCITY_DECAY",
    "Vector2",
    "ControlPoint",
    "PhysicsParameters",
    "TangentMarker",
    "BezierCurve",
]
