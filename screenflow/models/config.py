# models for config.yaml

from pydantic import BaseModel, Field

class SystemConfig(BaseModel):
    startup_state: str | None = None
    target_fps: int = Field(default=30, gt=0)

class DisplayConfig(BaseModel):
    width: int = Field(default=128, gt=0)
    height: int = Field(default=32, gt=0)

class AnimationConfig(BaseModel):
    idle_wait_ms: float = Field(default=10.0, ge=0)  # sleep while paused
    yield_ms: float = Field(default=1.0, ge=0)  # sleep between playback iterations

class TransitionConfig(BaseModel):
    default_effect: str = "none"
    default_duration: float = Field(default=0.3, ge=0)

class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
