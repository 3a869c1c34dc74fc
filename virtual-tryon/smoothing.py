"""
Temporal smoothing for the garment rectangle.
Frame-rate independent exponential filter, one channel per scalar.
"""

import math
from dataclasses import dataclass

import config


def smoothing_alpha(factor, delta_ms=config.FRAME_INTERVAL_MS):
    """Blend weight for one step of `delta_ms` milliseconds."""
    return 1.0 - math.exp(-factor * delta_ms / config.FRAME_INTERVAL_MS)


def smooth_value(new_value, old_value, factor, delta_ms=config.FRAME_INTERVAL_MS):
    alpha = smoothing_alpha(factor, delta_ms)
    return old_value + alpha * (new_value - old_value)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


def initial_rect(display_width, display_height,
                 asset_width=config.JACKET_ASSET_WIDTH, asset_height=config.JACKET_ASSET_HEIGHT):
    """Display-centered rectangle at half the base asset size."""
    width, height = asset_width * 0.5, asset_height * 0.5
    return Rect((display_width - width) / 2, (display_height - height) / 2, width, height)


class RectSmoother:
    """Smooth position and size of the garment rectangle across processed frames."""

    def __init__(self, initial: Rect,
                 position_factor=config.SMOOTHING_POSITION,
                 size_factor=config.SMOOTHING_SIZE):
        self.position_factor = position_factor
        self.size_factor = size_factor
        self.state = initial

    def update(self, target: Rect, delta_ms=config.FRAME_INTERVAL_MS) -> Rect:
        prev = self.state
        self.state = Rect(
            x=smooth_value(target.x, prev.x, self.position_factor, delta_ms),
            y=smooth_value(target.y, prev.y, self.position_factor, delta_ms),
            width=smooth_value(target.width, prev.width, self.size_factor, delta_ms),
            height=smooth_value(target.height, prev.height, self.size_factor, delta_ms),
        )
        return self.state
