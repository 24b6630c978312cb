"""Tests for dithering and shifting of monochrome buffers."""

import numpy as np

from screenflow.render.compositing import (
    Direction,
    direction_offset,
    dither_blend,
    dither_fade,
    dither_mask,
    shift,
    slide_composite,
)


def _column(x, width=128, height=32):
    pixels = np.zeros((height, width), dtype=np.uint8)
    pixels[:, x] = 1
    return pixels


# --- Direction ---

def test_direction_parse():
    assert Direction.parse("up") is Direction.UP
    assert Direction.parse("RIGHT") is Direction.RIGHT
    assert Direction.parse(Direction.DOWN) is Direction.DOWN
    assert Direction.parse("sideways") is Direction.LEFT
    assert Direction.parse("sideways", Direction.UP) is Direction.UP


def test_direction_offset():
    assert direction_offset(Direction.LEFT, 5) == (-5, 0)
    assert direction_offset(Direction.RIGHT, 5) == (5, 0)
    assert direction_offset(Direction.UP, 5) == (0, -5)
    assert direction_offset(Direction.DOWN, 5) == (0, 5)


# --- Dithering ---

def test_dither_mask_levels():
    assert dither_mask((32, 128), 0.0).sum() == 0
    assert dither_mask((32, 128), 1.0).all()
    assert dither_mask((32, 128), 0.5).sum() == 32 * 128 // 2


def test_dither_mask_clamps_level():
    assert dither_mask((4, 4), -1.0).sum() == 0
    assert dither_mask((4, 4), 2.0).sum() == 16


def test_dither_mask_odd_shape():
    mask = dither_mask((5, 7), 1.0)
    assert mask.shape == (5, 7)


def test_dither_blend_endpoints():
    white = np.ones((32, 128), dtype=np.uint8)
    black = np.zeros((32, 128), dtype=np.uint8)
    assert dither_blend(white, black, 0.0).sum() == white.sum()
    assert dither_blend(white, black, 1.0).sum() == 0
    assert dither_blend(white, black, 0.5).sum() == white.sum() // 2


def test_dither_fade():
    white = np.ones((32, 128), dtype=np.uint8)
    assert dither_fade(white, 1.0).sum() == white.sum()
    assert dither_fade(white, 0.0).sum() == 0
    assert 0 < dither_fade(white, 0.3).sum() < white.sum()


# --- Shifting ---

def test_shift_moves_content():
    moved = shift(_column(10), 5, 0)
    assert moved[:, 15].all()
    assert moved.sum() == 32

    moved = shift(_column(10), -5, 0)
    assert moved[:, 5].all()


def test_shift_vertical():
    pixels = np.zeros((32, 128), dtype=np.uint8)
    pixels[4, :] = 1
    assert shift(pixels, 0, 3)[7].all()
    assert shift(pixels, 0, -4)[0].all()


def test_shift_out_of_frame_is_blank():
    assert shift(_column(10), 200, 0).sum() == 0
    assert shift(_column(10), 0, -32).sum() == 0


# --- Slide ---

def test_slide_composite_endpoints():
    old, new = _column(100), _column(10)
    assert np.array_equal(slide_composite(old, new, 0.0, Direction.LEFT), old)
    assert np.array_equal(slide_composite(old, new, 1.0, Direction.LEFT), new)


def test_slide_left_halfway():
    result = slide_composite(_column(100), _column(10), 0.5, Direction.LEFT)
    # old content moved 64px left, new content enters from the right edge
    assert result[:, 36].all()
    assert result[:, 74].all()
    assert result.sum() == 64


def test_slide_right_halfway():
    result = slide_composite(_column(10), _column(100), 0.5, Direction.RIGHT)
    assert result[:, 74].all()
    assert result[:, 36].all()


def test_slide_up_halfway():
    old = np.zeros((32, 128), dtype=np.uint8)
    new = np.zeros((32, 128), dtype=np.uint8)
    old[20, :] = 1
    new[2, :] = 1
    result = slide_composite(old, new, 0.5, Direction.UP)
    assert result[4].all()
    assert result[18].all()
