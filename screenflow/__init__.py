"""Screen state machine and frame animation engine for small OLED displays."""

from screenflow.animation import Animated, AnimationEngine, AnimationFrame
from screenflow.clock import Clock, FakeClock
from screenflow.render import BufferedSurface, Direction, DisplaySurface, Frame, FrameSurface
from screenflow.state_machine import BaseState, DisplayState, StateData, StateMachine, Transition, TransitionEffect

__all__ = [
    "Animated",
    "AnimationEngine",
    "AnimationFrame",
    "BaseState",
    "BufferedSurface",
    "Clock",
    "Direction",
    "DisplayState",
    "DisplaySurface",
    "FakeClock",
    "Frame",
    "FrameSurface",
    "StateData",
    "StateMachine",
    "Transition",
    "TransitionEffect",
]
