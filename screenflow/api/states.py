from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from screenflow.models.config import TransitionConfig
from screenflow.state_machine.state_machine import StateMachine
from screenflow.state_machine.transition import Transition, TransitionEffect


class ActivateStateRequest(BaseModel):
    effect: str | None = None  # none, fade, slide, wipe or a full effect name like slide_up
    direction: str = "left"
    duration: float | None = Field(default=None, ge=0)
    composite: bool = False
    context: dict[str, Any] = Field(default_factory=dict)


def create_states_router(machine: StateMachine, defaults: TransitionConfig | None = None) -> APIRouter:
    """Creates the router that inspects and switches display states"""
    router = APIRouter()
    defaults = defaults or TransitionConfig()

    @router.get("/active")
    async def get_active_state():
        return {"active_state": machine.get_current_state_name()}

    @router.get("/available")
    async def get_available_states():
        return {"available_states": machine.get_state_names()}

    @router.get("/transition")
    async def get_transition():
        """Returns the running transition, if any"""
        transition = machine.get_active_transition()
        if transition is None:
            return {"transitioning": False}
        return {
            "transitioning": True,
            "effect": transition.effect.value,
            "duration": transition.duration,
            "progress": transition.get_progress(),
        }

    @router.post("/activate/{state_name}")
    async def activate_state(state_name: str, request: ActivateStateRequest | None = None):
        request = request or ActivateStateRequest()
        if not machine.has_state(state_name):
            raise HTTPException(status_code=404, detail=f"State '{state_name}' not found")

        effect = request.effect or defaults.default_effect
        duration = defaults.default_duration if request.duration is None else request.duration
        try:
            transition = Transition.from_name(
                effect,
                direction=request.direction,
                duration=duration,
                composite=request.composite,
            )
        except ValueError:
            valid = ["slide", "wipe"] + [e.value for e in TransitionEffect]
            raise HTTPException(
                status_code=400,
                detail=f"Unknown transition effect. Valid values: {valid}"
            )

        if transition.effect is TransitionEffect.NONE and transition.duration <= 0:
            transition = None

        machine.transition(state_name, transition, request.context)
        return {"status": "ok", "active_state": state_name}

    return router
