from screenflow.state_machine.states.alert import AlertState
from screenflow.state_machine.states.dashboard import DashboardState
from screenflow.state_machine.states.idle import IdleState

__all__ = ["AlertState", "DashboardState", "IdleState"]
