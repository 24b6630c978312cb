from screenflow.state_machine.display_state import BaseState, DisplayState, StateData
from screenflow.state_machine.state_machine import StateMachine
from screenflow.state_machine.transition import Transition, TransitionEffect

__all__ = [
    "BaseState",
    "DisplayState",
    "StateData",
    "StateMachine",
    "Transition",
    "TransitionEffect",
]
