from screenflow.animation.engine import AnimationEngine, FrameCallback


class Animated:
    """
    Mixin that lets any component own and drive an AnimationEngine.
    animate() needs the host to have a `display` attribute.
    """

    _animation: AnimationEngine | None = None
    _animating: bool = False

    def set_animation(self, animation: AnimationEngine):
        self._animation = animation
        return self

    def get_animation(self) -> AnimationEngine | None:
        return self._animation

    def has_animation(self) -> bool:
        return self._animation is not None

    def start_animation(self):
        """Plays the attached animation, blocking like AnimationEngine.play()"""
        if self._animation is not None:
            self._animating = True
            self._animation.play()
        return self

    def stop_animation(self):
        if self._animation is not None:
            self._animating = False
            self._animation.stop()
        return self

    def pause_animation(self):
        if self._animation is not None:
            self._animation.pause()
        return self

    def resume_animation(self):
        if self._animation is not None:
            self._animation.resume()
        return self

    def reset_animation(self):
        if self._animation is not None:
            self._animation.reset()
        return self

    def is_animating(self) -> bool:
        return self._animating and self._animation is not None and self._animation.is_playing

    def clear_animation(self):
        self.stop_animation()
        self._animation = None
        return self

    def animate(self, callback: FrameCallback, duration_ms: float, loop: bool = False, **engine_kwargs):
        """Attaches a single-frame animation built around callback"""
        display = getattr(self, "display", None)
        if display is None:
            raise RuntimeError("Display instance not available for animation")

        animation = AnimationEngine(display, **engine_kwargs).add_frame(callback, duration_ms)
        if loop:
            animation.loop(True)

        return self.set_animation(animation)
