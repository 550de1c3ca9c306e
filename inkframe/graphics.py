"""Rasterisation of lines, polygons, bezier strokes and circles."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

from .common import MxcfbRect

Point = tuple[int, int]
PixelWriter = Callable[[Point], None]


def _half(value: int) -> int:
    """Integer halving that truncates toward zero."""
    return -((-value) // 2) if value < 0 else value // 2


def stamp_along_line(stamp: PixelWriter, start, end) -> MxcfbRect:
    """Call `stamp` on every point of a Bresenham line; return its bounding rect."""
    x, y = start
    end_x, end_y = end
    dx = abs(end_x - x)
    dy = abs(end_y - y)
    sx = 1 if x < end_x else -1
    sy = 1 if y < end_y else -1
    err = _half(dx if dx > dy else -dy)

    min_x = max_x = x
    min_y = max_y = y
    while True:
        stamp((x, y))
        min_x, max_x = min(min_x, x), max(max_x, x)
        min_y, max_y = min(min_y, y), max(max_y, y)
        if x == end_x and y == end_y:
            break
        err2 = 2 * err
        if err2 > -dx:
            err -= dy
            x += sx
        if err2 < dy:
            err += dx
            y += sy

    return MxcfbRect(top=min_y, left=min_x, width=max_x - min_x, height=max_y - min_y)


@dataclass(slots=True)
class _Edge:
    ymax: int
    ymin: int
    x: int
    sign: int
    direction: int
    dx: int
    dy: int
    total: int = 0


def fill_polygon(write_pixel: PixelWriter, points: Sequence[Point]) -> MxcfbRect:
    """Scan-line fill a polygon with the non-zero winding rule."""
    if not points:
        raise ValueError("cannot fill a polygon without points")

    edge_table: list[_Edge] = []
    for p0, p1 in zip(points, [*points[1:], points[0]]):
        if p0[1] < p1[1]:
            lower, higher, direction = p0, p1, 1
        else:
            lower, higher, direction = p1, p0, -1
        edge_table.append(
            _Edge(
                ymax=higher[1],
                ymin=lower[1],
                x=lower[0],
                sign=1 if lower[0] > higher[0] else -1,
                direction=direction,
                dx=abs(higher[0] - lower[0]),
                dy=abs(higher[1] - lower[1]),
            )
        )
    edge_table.sort(key=lambda edge: edge.ymin)

    active: list[_Edge] = []
    scanline = edge_table[0].ymin
    while edge_table:
        edge_table = [edge for edge in edge_table if edge.ymax != scanline]
        active = [edge for edge in active if edge.ymax != scanline]
        active.extend(
            _Edge(e.ymax, e.ymin, e.x, e.sign, e.direction, e.dx, e.dy, e.total)
            for e in edge_table
            if e.ymin == scanline
        )
        active.sort(key=lambda edge: edge.x)

        prev_x = 0
        winding = 0
        for edge in active:
            if winding != 0:
                for x in range(prev_x, edge.x):
                    write_pixel((x, scanline))
            prev_x = edge.x
            winding += edge.direction

        scanline += 1
        for edge in active:
            if edge.dx != 0:
                edge.total += edge.dx
            while edge.total >= edge.dy:
                edge.x -= edge.sign
                edge.total -= edge.dy

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return MxcfbRect(
        top=min(ys), left=min(xs), width=max(xs) - min(xs), height=max(ys) - min(ys)
    )


def sample_bezier(startpt, ctrlpt, endpt, samples: int) -> list[tuple[float, tuple[float, float]]]:
    """Sample a quadratic bezier at `samples` evenly spaced parameters."""
    if samples == 1:
        raise ValueError("a bezier needs at least two samples")
    points = []
    for i in range(max(samples, 0)):
        t = i / (samples - 1)
        a, b, c = (1.0 - t) ** 2, 2.0 * (1.0 - t) * t, t**2
        points.append(
            (
                t,
                (
                    a * startpt[0] + b * ctrlpt[0] + c * endpt[0],
                    a * startpt[1] + b * ctrlpt[1] + c * endpt[1],
                ),
            )
        )
    return points


def draw_dynamic_bezier(write_pixel: PixelWriter, startpt, ctrlpt, endpt, samples: int) -> MxcfbRect:
    """Fill a quadratic bezier stroke whose width varies along its length.

    Each of `startpt`, `ctrlpt` and `endpt` is a ``((x, y), width)`` pair.
    """
    (start, start_w), (ctrl, ctrl_w), (end, end_w) = startpt, ctrlpt, endpt
    left_edge: list[Point] = []
    right_edge: list[Point] = []
    for t, (px, py) in sample_bezier(start, ctrl, end, samples):
        if t < 0.5:
            width = 2.0 * (start_w * (0.5 - t) + ctrl_w * t)
        else:
            width = 2.0 * (ctrl_w * (1.0 - t) + end_w * (t - 0.5))

        vx = 2.0 * (1.0 - t) * (ctrl[0] - start[0]) + 2.0 * t * (end[0] - ctrl[0])
        vy = 2.0 * (1.0 - t) * (ctrl[1] - start[1]) + 2.0 * t * (end[1] - ctrl[1])
        speed = math.hypot(vx, vy)
        if speed > 0.0:
            tx, ty = vx / speed, vy / speed
        else:
            ex, ey = start[0] - end[0], start[1] - end[1]
            extent = math.hypot(ex, ey)
            tx, ty = (ex / extent, ey / extent) if extent > 0.0 else (0.0, 0.0)

        half = width / 2.0
        left_pt = (int(px - ty * half), int(py + tx * half))
        if not left_edge or left_edge[-1] != left_pt:
            left_edge.append(left_pt)
        right_pt = (int(px + ty * half), int(py - tx * half))
        if not right_edge or right_edge[-1] != right_pt:
            right_edge.append(right_pt)

    outline = left_edge + right_edge[::-1]
    if len(outline) > 2:
        return fill_polygon(write_pixel, outline)
    return MxcfbRect.invalid()


def bresenham_circle(cx: int, cy: int, radius: int) -> Iterator[Point]:
    """Yield the points of a Bresenham circle, four quadrants at a time."""
    x, y = -radius, 0
    error = 2 - 2 * radius
    quadrant = 1
    while x < 0:
        if quadrant == 1:
            point = (cx - x, cy + y)
        elif quadrant == 2:
            point = (cx - y, cy - x)
        elif quadrant == 3:
            point = (cx + x, cy - y)
        else:
            point = (cx + y, cy + x)
        if quadrant == 4:
            current = error
            if current <= y:
                y += 1
                error += y * 2 + 1
            if current > x or error > y:
                x += 1
                error += x * 2 + 1
        quadrant = quadrant % 4 + 1
        yield point