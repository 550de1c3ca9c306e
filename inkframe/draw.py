"""Drawing primitives on top of framebuffer pixel access."""

from __future__ import annotations

import math
from functools import lru_cache

from PIL import Image, ImageDraw, ImageFont

from .common import Color, MxcfbRect
from .fbio import FramebufferIO
from .graphics import bresenham_circle, draw_dynamic_bezier, fill_polygon, stamp_along_line


@lru_cache(maxsize=32)
def _load_font(path: str | None, size: int):
    if path is None:
        return ImageFont.load_default(size=size)
    return ImageFont.truetype(path, size)


class FramebufferDraw(FramebufferIO):
    """A framebuffer with line, shape, image and text drawing."""

    font_path: str | None = None

    def draw_image(self, img: Image.Image, pos) -> MxcfbRect:
        """Draw `img` at `pos` with 1:1 scaling."""
        px, py = pos
        rgb = img if img.mode == "RGB" else img.convert("RGB")
        pixels = rgb.load()
        width, height = rgb.size
        for y in range(height):
            for x in range(width):
                r, g, b = pixels[x, y]
                self.write_pixel((px + x, py + y), Color.rgb(r, g, b))
        return MxcfbRect(top=py, left=px, width=width, height=height)

    def draw_line(self, start, end, width: int, v: Color) -> MxcfbRect:
        """Draw a straight line `width` pixels thick."""
        half = width // 2

        def stamp(p):
            if width == 1:
                self.write_pixel(p, v)
            else:
                self.fill_rect((p[0] - half, p[1] - half), (width, width), v)

        margin = (width + 1) // 2
        return stamp_along_line(stamp, start, end).expand(margin)

    def draw_polygon(self, points, fill: bool, c: Color) -> MxcfbRect:
        """Draw a polygon outline, or fill it when `fill` is true."""
        points = list(points)
        if fill:
            return fill_polygon(lambda p: self.write_pixel(p, c), points)
        rect = MxcfbRect.invalid()
        for p0, p1 in zip(points, [*points[1:], *points[:1]]):
            rect = rect.merge_rect(self.draw_line(p0, p1, 1, c))
        return rect

    def draw_circle(self, pos, rad: int, v: Color) -> MxcfbRect:
        """Draw a circle outline using the Bresenham algorithm."""
        x0, y0 = pos
        for point in bresenham_circle(x0, y0, rad):
            self.write_pixel(point, v)
        return MxcfbRect(top=y0 - rad, left=x0 - rad, width=2 * rad, height=2 * rad)

    def fill_circle(self, pos, rad: int, v: Color) -> MxcfbRect:
        """Fill a circle of radius `rad` around `pos`."""
        x0, y0 = pos
        rad_square = rad * rad
        search = rad + 1
        for y in range(-search, search):
            for x in range(-search, search):
                if x * x + y * y <= rad_square:
                    self.write_pixel((x0 + x, y0 + y), v)
        return MxcfbRect(top=y0 - rad, left=x0 - rad, width=2 * rad, height=2 * rad)

    def draw_bezier(self, startpt, ctrlpt, endpt, width: float, samples: int, v: Color) -> MxcfbRect:
        """Draw a quadratic bezier stroke of constant width."""
        return self.draw_dynamic_bezier(
            (startpt, width), (ctrlpt, width), (endpt, width), samples, v
        )

    def draw_dynamic_bezier(self, startpt, ctrlpt, endpt, samples: int, v: Color) -> MxcfbRect:
        """Draw a quadratic bezier stroke with a width given at each point."""
        return draw_dynamic_bezier(
            lambda p: self.write_pixel(p, v), startpt, ctrlpt, endpt, samples
        )

    def draw_text(self, pos, text: str, size: float, col: Color, dryrun: bool) -> MxcfbRect:
        """Draw `text` with its baseline starting at `pos`; return the covered region.

        With `dryrun` nothing is drawn, but the region is still measured.
        """
        x0, y0 = pos
        font = _load_font(self.font_path, max(1, round(size)))

        min_y = int(max(math.floor(y0), 0.0))
        max_y = int(max(math.ceil(y0), 0.0))
        min_x = int(max(math.floor(x0), 0.0))
        max_x = int(max(math.ceil(x0), 0.0))

        r8, g8, b8 = col.to_rgb8()
        c1, c2, c3 = 255 - r8, 255 - g8, 255 - b8

        for index, char in enumerate(text):
            origin_x = x0 + font.getlength(text[:index])
            left, top, right, bottom = font.getbbox(char, anchor="ls")
            bb_min_x = math.floor(origin_x + left)
            bb_min_y = math.floor(y0 + top)
            bb_max_x = math.ceil(origin_x + right)
            bb_max_y = math.ceil(y0 + bottom)
            if bb_max_x <= bb_min_x or bb_max_y <= bb_min_y:
                continue

            max_y = max(max_y, bb_max_y)
            max_x = max(max_x, bb_max_x)
            min_y = min(min_y, bb_min_y)
            min_x = min(min_x, bb_min_x)

            if dryrun:
                continue

            glyph = Image.new("L", (bb_max_x - bb_min_x, bb_max_y - bb_min_y), 0)
            ImageDraw.Draw(glyph).text(
                (origin_x - bb_min_x, y0 - bb_min_y), char, font=font, fill=255, anchor="ls"
            )
            coverage = glyph.load()
            for gy in range(glyph.height):
                for gx in range(glyph.width):
                    mult = min(1.0 - coverage[gx, gy] / 255.0, 1.0)
                    self.write_pixel(
                        (gx + bb_min_x, gy + bb_min_y),
                        Color.rgb(int(c1 * mult), int(c2 * mult), int(c3 * mult)),
                    )

        return MxcfbRect(top=min_y, left=min_x, width=max_x - min_x, height=max_y - min_y)

    def draw_rect(self, pos, size, border_px: int, c: Color) -> None:
        """Draw the border of a rectangle `border_px` pixels thick."""
        x, y = pos
        width, height = size
        top_left = (x, y)
        top_right = (x + width, y)
        bottom_left = (x, y + height)
        bottom_right = (x + width, y + height)
        self.draw_line(top_left, top_right, border_px, c)
        self.draw_line(top_left, bottom_left, border_px, c)
        self.draw_line(top_right, bottom_right, border_px, c)
        self.draw_line(bottom_left, bottom_right, border_px, c)

    def fill_rect(self, pos, size, c: Color) -> None:
        """Fill a rectangle of `size` at `pos`."""
        x0, y0 = pos
        width, height = size
        for y in range(y0, y0 + height):
            for x in range(x0, x0 + width):
                self.write_pixel((x, y), c)

    def clear(self) -> None:
        """Fill the visible screen with white without refreshing it."""
        length = self.fix_screen_info.line_length * self.var_screen_info.yres
        self.frame[0:length] = b"\xff" * length