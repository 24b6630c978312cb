"""Tests for the Animated mixin."""

import pytest

from screenflow.animation import Animated, AnimationEngine


class Widget(Animated):
    def __init__(self, display=None):
        self.display = display


class Headless(Animated):
    pass


def test_no_animation_by_default():
    widget = Widget()
    assert not widget.has_animation()
    assert widget.get_animation() is None
    assert not widget.is_animating()


def test_control_methods_without_animation_are_noops():
    widget = Widget()
    assert widget.start_animation() is widget
    assert widget.stop_animation() is widget
    assert widget.pause_animation() is widget
    assert widget.resume_animation() is widget
    assert widget.reset_animation() is widget


def test_animate_attaches_single_frame_engine(surface, clock):
    widget = Widget(surface)
    draw = lambda d, p: None

    assert widget.animate(draw, 250, clock=clock) is widget

    animation = widget.get_animation()
    assert isinstance(animation, AnimationEngine)
    assert animation.display is surface
    assert animation.clock is clock
    assert animation.get_frame_count() == 1
    assert animation.get_total_duration() == 250
    assert not animation.is_looping


def test_animate_loop(surface):
    widget = Widget(surface).animate(lambda d, p: None, 100, loop=True)
    assert widget.get_animation().is_looping


def test_animate_without_display_raises():
    with pytest.raises(RuntimeError, match="Display instance not available"):
        Headless().animate(lambda d, p: None, 100)

    with pytest.raises(RuntimeError):
        Widget(None).animate(lambda d, p: None, 100)


def test_start_animation_plays_to_completion(surface, clock):
    progresses = []
    widget = Widget(surface).animate(lambda d, p: progresses.append(p), 50, clock=clock)

    widget.start_animation()

    assert progresses[0] == 0.0
    assert progresses[-1] == 1.0
    assert surface.present_count == len(progresses)
    assert not widget.is_animating()


def test_is_animating_follows_engine(surface, clock):
    engine = AnimationEngine(surface, clock=clock).add_frame(lambda d, p: None, 100)
    widget = Widget(surface).set_animation(engine)
    assert widget.has_animation()

    widget._animating = True
    engine.start()
    assert widget.is_animating()

    widget.pause_animation()
    assert engine.is_paused
    assert not widget.is_animating()

    widget.resume_animation()
    assert widget.is_animating()

    widget.stop_animation()
    assert not widget.is_animating()
    assert not engine.is_playing


def test_reset_animation(surface, clock):
    engine = AnimationEngine(surface, clock=clock)
    engine.add_frame(lambda d, p: None, 100).add_frame(lambda d, p: None, 100)
    widget = Widget(surface).set_animation(engine)

    engine.start()
    clock.advance(0.2)
    engine.tick()
    assert engine.get_current_frame() == 1

    widget.reset_animation()
    assert engine.get_current_frame() == 0


def test_clear_animation_stops_and_detaches(surface, clock):
    engine = AnimationEngine(surface, clock=clock).add_frame(lambda d, p: None, 100)
    widget = Widget(surface).set_animation(engine)
    engine.start()

    widget.clear_animation()

    assert not engine.is_playing
    assert not widget.has_animation()


def test_hosts_do_not_share_animations(surface):
    first, second = Widget(surface), Widget(surface)
    first.animate(lambda d, p: None, 100)
    assert second.get_animation() is None
