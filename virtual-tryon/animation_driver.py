"""
Animation driver: owns the on-screen garment rectangle and tweens it toward
targets on its own clock, independent of how often poses arrive.

Pose processing never touches the animated values directly. It posts commands
on a queue; the driver thread drains them on each tick and publishes an
immutable RenderTarget snapshot that the renderer reads.
"""

import queue
import threading
import time
from dataclasses import dataclass

import config
from smoothing import Rect


@dataclass(frozen=True)
class RenderTarget:
    x: float
    y: float
    width: float
    height: float
    scale: float   # 0 = hidden, 1 = fully shown


# -------------------------
# Commands
# -------------------------

@dataclass(frozen=True)
class MoveTo:
    rect: Rect
    position_ms: float = config.POSITION_DURATION_MS
    size_ms: float = config.SIZE_DURATION_MS


@dataclass(frozen=True)
class SetVisibility:
    target: float
    min_change: float = 0.0


# -------------------------
# Tweens
# -------------------------

def ease_in_out_quad(t):
    if t < 0.5:
        return 2 * t * t
    return 1 - ((-2 * t + 2) ** 2) / 2


class TimingAnimation:
    """Eased transition over a fixed duration."""

    def __init__(self, start, target, duration_s, started_at):
        self.start = start
        self.target = target
        self.duration_s = duration_s
        self.started_at = started_at
        self.velocity = 0.0

    def step(self, now):
        if self.duration_s <= 0:
            return self.target, True
        t = (now - self.started_at) / self.duration_s
        if t >= 1.0:
            return self.target, True
        t = max(0.0, t)
        return self.start + (self.target - self.start) * ease_in_out_quad(t), False


class SpringAnimation:
    """Damped spring integrated in small fixed substeps."""

    SUBSTEP_S = 0.001
    REST_DISPLACEMENT = 0.01
    REST_SPEED = 2.0

    def __init__(self, start, target, started_at, velocity=0.0,
                 damping=config.SPRING_DAMPING, stiffness=config.SPRING_STIFFNESS,
                 mass=config.SPRING_MASS):
        self.value = start
        self.target = target
        self.last_time = started_at
        self.velocity = velocity
        self.damping = damping
        self.stiffness = stiffness
        self.mass = mass

    def step(self, now):
        remaining = max(0.0, now - self.last_time)
        self.last_time = now
        while remaining > 0:
            h = min(self.SUBSTEP_S, remaining)
            force = -self.stiffness * (self.value - self.target) - self.damping * self.velocity
            self.velocity += force / self.mass * h
            self.value += self.velocity * h
            remaining -= h
        if (abs(self.velocity) < self.REST_SPEED
                and abs(self.value - self.target) < self.REST_DISPLACEMENT):
            self.velocity = 0.0
            return self.target, True
        return self.value, False


class AnimatedValue:
    def __init__(self, value):
        self.value = float(value)
        self.animation = None

    @property
    def velocity(self):
        return self.animation.velocity if self.animation is not None else 0.0

    def timing_to(self, target, duration_ms, now):
        self.animation = TimingAnimation(self.value, float(target), duration_ms / 1000.0, now)

    def spring_to(self, target, now):
        # Keep momentum when retargeting a running spring
        self.animation = SpringAnimation(self.value, float(target), now, self.velocity)

    def advance(self, now):
        if self.animation is None:
            return
        self.value, done = self.animation.step(now)
        if done:
            self.animation = None

    @property
    def animating(self):
        return self.animation is not None


# -------------------------
# Driver
# -------------------------

class AnimationDriver:
    """Tween the garment rectangle and visibility toward posted targets."""

    def __init__(self, initial: Rect, display_height=config.DISPLAY_HEIGHT,
                 fps=config.ANIMATION_FPS, clock=time.monotonic):
        self.clock = clock
        self.interval_s = 1.0 / fps
        self.max_size = config.MAX_RENDER_SIZE_FACTOR * display_height

        self.x = AnimatedValue(initial.x)
        self.y = AnimatedValue(initial.y)
        self.width = AnimatedValue(initial.width)
        self.height = AnimatedValue(initial.height)
        self.scale = AnimatedValue(0.0)

        self._commands = queue.Queue()
        self._stop = threading.Event()
        self._thread = None
        self.render_target = self._snapshot()

    # --- producer side (pose callback) ---

    def move_to(self, rect: Rect, position_ms=config.POSITION_DURATION_MS, size_ms=config.SIZE_DURATION_MS):
        self._commands.put(MoveTo(rect, position_ms, size_ms))

    def set_visibility(self, target, min_change=config.VISIBILITY_CHANGE_THRESHOLD):
        """Spring visibility toward `target` if it differs from the current value by more than `min_change`."""
        self._commands.put(SetVisibility(target, min_change))

    def hide(self):
        self._commands.put(SetVisibility(0.0, 0.0))

    # --- driver side ---

    def _apply(self, command, now):
        if isinstance(command, MoveTo):
            rect = command.rect
            self.x.timing_to(rect.x, command.position_ms, now)
            self.y.timing_to(rect.y, command.position_ms, now)
            self.width.timing_to(rect.width, command.size_ms, now)
            self.height.timing_to(rect.height, command.size_ms, now)
        elif isinstance(command, SetVisibility):
            if abs(self.scale.value - command.target) > command.min_change:
                self.scale.spring_to(command.target, now)

    def _snapshot(self):
        return RenderTarget(
            x=self.x.value,
            y=self.y.value,
            width=min(self.max_size, max(config.MIN_RENDER_SIZE, self.width.value)),
            height=min(self.max_size, max(config.MIN_RENDER_SIZE, self.height.value)),
            scale=min(1.0, max(0.0, self.scale.value)),
        )

    def tick(self, now=None) -> RenderTarget:
        """Drain pending commands, advance every tween, publish a snapshot."""
        if now is None:
            now = self.clock()
        while True:
            try:
                command = self._commands.get_nowait()
            except queue.Empty:
                break
            self._apply(command, now)

        for value in (self.x, self.y, self.width, self.height, self.scale):
            value.advance(now)

        self.render_target = self._snapshot()
        return self.render_target

    @property
    def animating(self):
        return any(v.animating for v in (self.x, self.y, self.width, self.height, self.scale))

    def _run(self):
        while not self._stop.wait(self.interval_s):
            self.tick()

    def start(self):
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="animation-driver", daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()

