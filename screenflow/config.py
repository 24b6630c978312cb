from pydantic import BaseModel, Field
import yaml
from screenflow.models.config import SystemConfig, DisplayConfig, AnimationConfig, TransitionConfig, WebConfig

class GlobalConfig(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    animation: AnimationConfig = Field(default_factory=AnimationConfig)
    transition: TransitionConfig = Field(default_factory=TransitionConfig)
    web: WebConfig = Field(default_factory=WebConfig)

class Config:
    def __init__(self, path: str = "config.yaml"):
        self.path = path
        self.model = None

    def load(self):
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        self.model = GlobalConfig(**data)
        return self.model

    def get(self) -> GlobalConfig:
        if self.model is None:
            return self.load()
        return self.model
