from screenflow.render.compositing import Direction
from screenflow.render.frame import Frame
from screenflow.render.surface import BufferedSurface, DisplaySurface, FrameSurface

__all__ = ["BufferedSurface", "Direction", "DisplaySurface", "Frame", "FrameSurface"]
