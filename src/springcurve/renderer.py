# renderer.py
from __future__ import annotations

from typing import TYPE_CHECKING

import moderngl
import numpy as np
import pygame

from springcurve import config
from springcurve.models import ControlPoint, TangentMarker
from springcurve.types import PROJ, SAMPLES, VERTS

if TYPE_CHECKING:
    from springcurve.sim import RenderFrame

RGBA = tuple[float, float, float, float]

# ------------------------
# Geometry helpers
# ------------------------


def hex_to_rgba(color: str, alpha: float = 1.0) -> RGBA:
    color = color.lstrip("#")
    r, g, b = (int(color[i : i + 2], 16) / 255.0 for i in (0, 2, 4))
    return (r, g, b, alpha)


def ortho(width: float, height: float) -> PROJ:
    """Canvas pixels (origin top-left, y down) to clip space."""
    return np.array(
        [
            [2.0 / width, 0.0, 0.0, -1.0],
            [0.0, -2.0 / height, 0.0, 1.0],
            [0.0, 0.0, -1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float32,
    ).T


def circle_fan(cx: float, cy: float, radius: float, segments: int = 32) -> VERTS:
    """Triangle-fan vertices: the center followed by a closed rim."""
    angles = np.linspace(0.0, 2.0 * np.pi, segments + 1, dtype=np.float64)
    rim = np.column_stack((cx + radius * np.cos(angles), cy + radius * np.sin(angles)))
    return np.vstack(([cx, cy], rim)).astype(np.float32)


def arrow_segments(
    markers: list[TangentMarker],
    length: float = config.TANGENT_LENGTH,
    head: float = config.ARROW_HEAD_SIZE,
) -> VERTS:
    """Line-list vertices for one arrow per marker: shaft plus two head strokes."""
    if not markers:
        return np.empty((0, 2), dtype=np.float32)

    start = np.array([[m.point.x, m.point.y] for m in markers], dtype=np.float64)
    direction = np.array([[m.direction.x, m.direction.y] for m in markers], dtype=np.float64)
    end = start + direction * length

    angle = np.arctan2(end[:, 1] - start[:, 1], end[:, 0] - start[:, 0])
    left = end - head * np.column_stack((np.cos(angle - np.pi / 6), np.sin(angle - np.pi / 6)))
    right = end - head * np.column_stack((np.cos(angle + np.pi / 6), np.sin(angle + np.pi / 6)))

    # (start, end), (end, left), (end, right) per marker
    segs = np.stack((start, end, end, left, end, right), axis=1)
    return segs.reshape(-1, 2).astype(np.float32)


def dashed_segments(
    polyline: VERTS | SAMPLES,
    dash: float = config.POLYGON_DASH[0],
    gap: float = config.POLYGON_DASH[1],
) -> VERTS:
    """Line-list vertices for a dash pattern running continuously along a polyline."""
    pts = np.asarray(polyline, dtype=np.float64)
    period = dash + gap
    out: list[np.ndarray] = []

    travelled = 0.0
    for a, b in zip(pts[:-1], pts[1:]):
        length = float(np.hypot(*(b - a)))
        if length == 0.0:
            continue
        unit = (b - a) / length
        d0, d1 = travelled, travelled + length

        for k in range(int(d0 // period), int(d1 // period) + 1):
            lo = max(d0, k * period)
            hi = min(d1, k * period + dash)
            if hi > lo:
                out.append(a + unit * (lo - d0))
                out.append(a + unit * (hi - d0))
        travelled = d1

    if not out:
        return np.empty((0, 2), dtype=np.float32)
    return np.array(out, dtype=np.float32)


def point_color(point: ControlPoint) -> RGBA:
    if point.is_dragging:
        return hex_to_rgba(config.DRAGGING_POINT_COLOR)
    if point.is_fixed:
        return hex_to_rgba(config.FIXED_POINT_COLOR)
    return hex_to_rgba(config.FREE_POINT_COLOR)


# ------------------------
# Renderer
# ------------------------


class Renderer:
    def __init__(
        self,
        ctx: moderngl.Context,
        width: int = config.CANVAS_WIDTH,
        height: int = config.CANVAS_HEIGHT,
    ):
        self.ctx = ctx
        self.ctx.enable(moderngl.BLEND)
        self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA

        self.width = width
        self.height = height

        pygame.font.init()
        self.font = pygame.font.SysFont("monospace", 14)

        base = config.SHADERS_PATH

        # 2D program
        self.prog = self.ctx.program(
            vertex_shader=(base / "line.vert").read_text(),
            fragment_shader=(base / "line.frag").read_text(),
        )
        self.prog["u_proj"].write(ortho(width, height).tobytes())  # type: ignore

        # UI program
        self.ui_prog = self.ctx.program(
            vertex_shader=(base / "ui.vert").read_text(),
            fragment_shader=(base / "ui.frag").read_text(),
        )

        # UI quad (updated every frame)
        self.ui_vbo = self.ctx.buffer(reserve=4 * 4 * 4)
        self.ui_vao = self.ctx.vertex_array(
            self.ui_prog,
            [(self.ui_vbo, "2f 2f", "in_pos", "in_uv")],
        )
        self.ui_texture: moderngl.Texture | None = None

        # Geometry buffer, resized on demand
        self.vbo = self.ctx.buffer(reserve=(config.CURVE_SEGMENTS + 1) * 2 * 4, dynamic=True)
        self.vao = self.ctx.vertex_array(self.prog, [(self.vbo, "2f", "in_position")])

        print(f"[Renderer] initialized: {width}x{height}")

    # ------------------------
    # Draw
    # ------------------------

    def _draw(self, verts: VERTS | SAMPLES, color: RGBA, mode: int) -> None:
        if len(verts) == 0:
            return
        data = np.ascontiguousarray(verts, dtype="f4")
        self.vbo.orphan(data.nbytes)
        self.vbo.write(data.tobytes())
        self.prog["u_color"].value = color  # type: ignore
        self.vao.render(mode=mode, vertices=len(data))

    def draw(self, frame: RenderFrame, fps: float) -> None:
        self.ctx.clear(*hex_to_rgba(config.BACKGROUND_COLOR))

        # Control polygon
        polygon = np.array(
            [[p.position.x, p.position.y] for p in frame.control_points], dtype=np.float32
        )
        self._draw(dashed_segments(polygon), config.POLYGON_COLOR, moderngl.LINES)

        # Curve
        self._draw(frame.samples, hex_to_rgba(config.CURVE_COLOR), moderngl.LINE_STRIP)

        # Tangents
        self._draw(
            arrow_segments(frame.tangent_markers),
            hex_to_rgba(config.TANGENT_COLOR),
            moderngl.LINES,
        )

        # Points
        for point in frame.control_points:
            disc = circle_fan(point.position.x, point.position.y, point.radius)
            self._draw(disc, point_color(point), moderngl.TRIANGLE_FAN)
            self._draw(disc[1:], hex_to_rgba(config.OUTLINE_COLOR), moderngl.LINE_LOOP)
            if not point.is_fixed and not point.is_dragging:
                self._draw(
                    circle_fan(point.target.x, point.target.y, config.TARGET_DOT_RADIUS, 12),
                    config.TARGET_DOT_COLOR,
                    moderngl.TRIANGLE_FAN,
                )

        self._draw_ui_overlay(frame, fps)
        pygame.display.flip()

    # ------------------------
    # UI Overlay
    # ------------------------

    def _surface_to_texture(self, surface: pygame.Surface) -> moderngl.Texture:
        surface = pygame.transform.flip(surface, False, True)
        data = pygame.image.tobytes(surface, "RGBA", False)

        tex = self.ctx.texture(surface.get_size(), 4, data)
        tex.filter = (moderngl.NEAREST, moderngl.NEAREST)
        tex.swizzle = "RGBA"
        return tex

    def _draw_ui_overlay(self, frame: RenderFrame, fps: float) -> None:
        lines = [
            f"Mode: {frame.mode.value}",
            f"Stiffness: {frame.physics.stiffness:.2f}",
            f"Damping: {frame.physics.damping:.2f}",
            f"FPS: {fps:.1f}",
        ]

        line_h = self.font.get_height() + 6
        w = max(self.font.size(line)[0] for line in lines)
        h = line_h * len(lines)

        surface = pygame.Surface((w, h), pygame.SRCALPHA)

        y = 0
        for line in lines:
            surface.blit(self.font.render(line, True, (255, 255, 255, 204)), (0, y))
            y += line_h

        if self.ui_texture:
            self.ui_texture.release()
        self.ui_texture = self._surface_to_texture(surface)
        self.ui_texture.use(0)

        # --- Compute top-left quad ---
        margin = 10
        ndc_w = 2.0 * w / self.width
        ndc_h = 2.0 * h / self.height
        mx = 2.0 * margin / self.width
        my = 2.0 * margin / self.height

        x0 = -1.0 + mx
        y0 = 1.0 - my
        x1 = x0 + ndc_w
        y1 = y0 - ndc_h

        quad = np.array(
            [
                [x0, y0, 0.0, 1.0],
                [x0, y1, 0.0, 0.0],
                [x1, y0, 1.0, 1.0],
                [x1, y1, 1.0, 0.0],
            ],
            dtype="f4",
        )

        self.ui_vbo.write(quad.tobytes())
        self.ui_prog["u_texture"] = 0
        self.ui_vao.render(mode=moderngl.TRIANGLE_STRIP)

    def release(self) -> None:
        if self.ui_texture:
            self.ui_texture.release()
        for resource in (self.vao, self.vbo, self.ui_vao, self.ui_vbo, self.prog, self.ui_prog):
            resource.release()
