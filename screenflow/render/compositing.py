"""
Buffer compositing for monochrome frames.
Used by the enhanced (composite=True) fade and slide effects.
"""

from enum import Enum

import numpy as np


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @classmethod
    def parse(cls, value: "str | Direction", default: "Direction | None" = None) -> "Direction":
        """Accepts an enum or its string value, falls back to default (LEFT) for unknown input"""
        if isinstance(value, Direction):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return default or cls.LEFT

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)


# ordered dither thresholds, 1-bit displays can't do real alpha
BAYER_4X4 = np.array([
    [0, 8, 2, 10],
    [12, 4, 14, 6],
    [3, 11, 1, 9],
    [15, 7, 13, 5],
], dtype=np.float32)


def dither_mask(shape: tuple[int, int], level: float) -> np.ndarray:
    """Boolean mask with roughly `level` share of pixels set, in Bayer order"""
    level = float(np.clip(level, 0.0, 1.0))
    height, width = shape
    reps = ((height + 3) // 4, (width + 3) // 4)
    thresholds = (np.tile(BAYER_4X4, reps)[:height, :width] + 0.5) / 16.0
    return thresholds < level


def dither_blend(from_pixels: np.ndarray, to_pixels: np.ndarray, t: float) -> np.ndarray:
    """Cross-fade between two frames: t=0 is from_pixels, t=1 is to_pixels"""
    mask = dither_mask(to_pixels.shape, t)
    return np.where(mask, to_pixels, from_pixels).astype(np.uint8)


def dither_fade(pixels: np.ndarray, opacity: float) -> np.ndarray:
    """Fades a frame towards black"""
    mask = dither_mask(pixels.shape, opacity)
    return np.where(mask, pixels, 0).astype(np.uint8)


def shift(pixels: np.ndarray, dx: int, dy: int) -> np.ndarray:
    """Moves the frame content by (dx, dy), uncovered area is black"""
    height, width = pixels.shape
    result = np.zeros_like(pixels)
    if abs(dx) >= width or abs(dy) >= height:
        return result

    src_x = slice(max(0, -dx), width - max(0, dx))
    dst_x = slice(max(0, dx), width - max(0, -dx))
    src_y = slice(max(0, -dy), height - max(0, dy))
    dst_y = slice(max(0, dy), height - max(0, -dy))
    result[dst_y, dst_x] = pixels[src_y, src_x]
    return result


def direction_offset(direction: Direction, distance: int) -> tuple[int, int]:
    """(dx, dy) of content moving `distance` pixels towards `direction`"""
    match direction:
        case Direction.LEFT:
            return -distance, 0
        case Direction.RIGHT:
            return distance, 0
        case Direction.UP:
            return 0, -distance
        case Direction.DOWN:
            return 0, distance


def slide_composite(
    from_pixels: np.ndarray,
    to_pixels: np.ndarray,
    progress: float,
    direction: Direction,
) -> np.ndarray:
    """
    Push slide: the old frame leaves towards `direction`
    while the new one enters from the opposite edge.
    """
    height, width = to_pixels.shape
    span = width if direction.is_horizontal else height
    distance = int(round(span * float(np.clip(progress, 0.0, 1.0))))

    out_dx, out_dy = direction_offset(direction, distance)
    in_dx, in_dy = direction_offset(direction, distance - span)

    outgoing = shift(from_pixels, out_dx, out_dy)
    incoming = shift(to_pixels, in_dx, in_dy)
    return np.maximum(outgoing, incoming)
