"""
Display surface contract and the in-memory numpy implementation.
A hardware driver is attached to FrameSurface as a present-sink.
"""

import logging
from typing import Callable, Protocol, runtime_checkable

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from screenflow.render.frame import Frame

logger = logging.getLogger(__name__)

BLACK = 0
WHITE = 1


@runtime_checkable
class DisplaySurface(Protocol):
    """What the orchestration core needs from a display"""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def clear(self) -> None:
        """Resets the in-memory buffer to background, no hardware push"""
        ...

    def present(self) -> None:
        """Pushes the buffer to the device"""
        ...

    def fill_rect(self, x: int, y: int, w: int, h: int, color: int) -> None: ...


@runtime_checkable
class BufferedSurface(DisplaySurface, Protocol):
    """Surface whose buffer can be captured and replaced (needed for compositing)"""

    def snapshot(self) -> np.ndarray: ...

    def load(self, pixels: np.ndarray) -> None: ...


class FrameSurface:
    """
    Display surface over a monochrome Frame.
    present() hands a copy of the buffer to the sink (driver, emulator, test).
    """

    def __init__(
        self,
        width: int = 128,
        height: int = 32,
        on_present: Callable[[Frame], None] | None = None,
    ):
        self.frame = Frame(width, height)
        self.on_present = on_present
        self.present_count = 0
        self.last_presented: Frame | None = None
        self._font = None

    @property
    def width(self) -> int:
        return self.frame.width

    @property
    def height(self) -> int:
        return self.frame.height

    # ------ buffer control ------

    def clear(self) -> None:
        self.frame.pixels.fill(BLACK)

    def present(self) -> None:
        self.present_count += 1
        self.last_presented = self.frame.copy()
        logger.debug(f"Frame presented: #{self.present_count}")
        if self.on_present is not None:
            self.on_present(self.last_presented)

    def snapshot(self) -> np.ndarray:
        return self.frame.pixels.copy()

    def load(self, pixels: np.ndarray) -> None:
        if pixels.shape != self.frame.pixels.shape:
            raise ValueError(f"Buffer shape {pixels.shape} does not match surface {self.frame.pixels.shape}")
        self.frame.pixels[:] = (pixels != 0)

    def to_bytes(self) -> bytes:
        return self.frame.to_bytes()

    def to_image(self, scale: int = 1) -> Image.Image:
        """Returns the buffer as a grayscale PIL image, optionally upscaled"""
        image = Image.fromarray((self.frame.pixels * 255).astype(np.uint8))
        if scale > 1:
            image = image.resize((self.width * scale, self.height * scale), Image.Resampling.NEAREST)
        return image

    # ------ primitives ------

    def draw_pixel(self, x: int, y: int, color: int = WHITE) -> None:
        self.frame.set_pixel(x, y, color)

    def get_pixel(self, x: int, y: int) -> bool:
        return self.frame.get_pixel(x, y)

    def fill_rect(self, x: int, y: int, w: int, h: int, color: int = WHITE) -> None:
        # clamp to frame bounds
        x_start = max(0, min(self.width, int(x)))
        y_start = max(0, min(self.height, int(y)))
        x_end = max(0, min(self.width, int(x + w)))
        y_end = max(0, min(self.height, int(y + h)))

        if x_start >= x_end or y_start >= y_end:
            return

        self.frame.pixels[y_start:y_end, x_start:x_end] = 1 if color else 0

    def fill_screen(self, color: int = WHITE) -> None:
        self.frame.pixels.fill(1 if color else 0)

    def draw_hline(self, x: int, y: int, w: int, color: int = WHITE) -> None:
        self.fill_rect(x, y, w, 1, color)

    def draw_vline(self, x: int, y: int, h: int, color: int = WHITE) -> None:
        self.fill_rect(x, y, 1, h, color)

    def draw_rect(self, x: int, y: int, w: int, h: int, color: int = WHITE) -> None:
        if w <= 0 or h <= 0:
            return
        self.draw_hline(x, y, w, color)
        self.draw_hline(x, y + h - 1, w, color)
        self.draw_vline(x, y, h, color)
        self.draw_vline(x + w - 1, y, h, color)

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, color: int = WHITE) -> None:
        """Bresenham line"""
        dx = abs(x1 - x0)
        dy = -abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx + dy

        while True:
            self.frame.set_pixel(x0, y0, color)
            if x0 == x1 and y0 == y1:
                break
            e2 = 2 * err
            if e2 >= dy:
                err += dy
                x0 += sx
            if e2 <= dx:
                err += dx
                y0 += sy

    def draw_circle(self, x0: int, y0: int, r: int, color: int = WHITE) -> None:
        """Midpoint circle outline"""
        if r < 0:
            return
        x, y = r, 0
        err = 1 - r
        while x >= y:
            for px, py in (
                (x0 + x, y0 + y), (x0 + y, y0 + x), (x0 - y, y0 + x), (x0 - x, y0 + y),
                (x0 - x, y0 - y), (x0 - y, y0 - x), (x0 + y, y0 - x), (x0 + x, y0 - y),
            ):
                self.frame.set_pixel(px, py, color)
            y += 1
            if err < 0:
                err += 2 * y + 1
            else:
                x -= 1
                err += 2 * (y - x) + 1

    def fill_circle(self, x0: int, y0: int, r: int, color: int = WHITE) -> None:
        if r < 0:
            return
        yy, xx = np.ogrid[:self.height, :self.width]
        mask = (xx - x0) ** 2 + (yy - y0) ** 2 <= r * r
        self.frame.pixels[mask] = 1 if color else 0

    def draw_text(self, text: str, x: int, y: int, color: int = WHITE) -> int:
        """Draws text with the Pillow default font, returns the rendered width"""
        if self._font is None:
            self._font = ImageFont.load_default()

        dummy_draw = ImageDraw.Draw(Image.new("1", (1, 1)))
        bbox = dummy_draw.textbbox((0, 0), text, font=self._font)
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]

        if text_width <= 0 or text_height <= 0:
            return 0

        text_img = Image.new("1", (text_width, text_height), 0)
        ImageDraw.Draw(text_img).text((-bbox[0], -bbox[1]), text, fill=1, font=self._font)
        mask = np.array(text_img, dtype=bool)

        # clip the glyph mask against the frame
        x_start, y_start = max(0, x), max(0, y)
        x_end = min(self.width, x + text_width)
        y_end = min(self.height, y + text_height)
        if x_start >= x_end or y_start >= y_end:
            return text_width

        visible = mask[y_start - y:y_end - y, x_start - x:x_end - x]
        target = self.frame.pixels[y_start:y_end, x_start:x_end]
        target[visible] = 1 if color else 0
        return text_width
