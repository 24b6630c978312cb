from screenflow.animation.animated import Animated
from screenflow.animation.engine import AnimationEngine, AnimationFrame

__all__ = ["Animated", "AnimationEngine", "AnimationFrame"]
