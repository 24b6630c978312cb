# runtime components shared by the service and its routers

import logging
from dataclasses import dataclass

from screenflow.animation.engine import AnimationEngine
from screenflow.clock import Clock, default_clock
from screenflow.config import GlobalConfig
from screenflow.render.surface import FrameSurface
from screenflow.state_machine.state_machine import StateMachine
from screenflow.state_machine.states import AlertState, DashboardState, IdleState

logger = logging.getLogger(__name__)


@dataclass
class Runtime:
    config: GlobalConfig
    clock: Clock
    surface: FrameSurface
    state_machine: StateMachine

    def animation(self) -> AnimationEngine:
        """New animation engine on the shared surface, configured from config.animation"""
        return AnimationEngine(
            self.surface,
            clock=self.clock,
            idle_wait_ms=self.config.animation.idle_wait_ms,
            yield_ms=self.config.animation.yield_ms,
        )


def build_runtime(cfg: GlobalConfig, clock: Clock | None = None, on_present=None) -> Runtime:
    """Creates the surface and the state machine with the bundled states registered"""
    clock = clock or default_clock
    surface = FrameSurface(cfg.display.width, cfg.display.height, on_present=on_present)
    machine = StateMachine(surface, clock=clock)

    machine.add_state("idle", IdleState(surface))
    machine.add_state("alert", AlertState(surface))
    machine.add_state("dashboard", DashboardState(surface))

    startup = cfg.system.startup_state
    if startup and not machine.transition(startup):
        logger.warning(f"Startup state '{startup}' is not registered, staying in '{machine.get_current_state_name()}'")

    return Runtime(config=cfg, clock=clock, surface=surface, state_machine=machine)
