"""
Update gate: decide which pose frames get the full geometry pass.
Frames that are not admitted are dropped, never queued.
"""

import time

import config


def now_ms():
    return time.time() * 1000.0


class UpdateGate:
    """Admit every Nth frame, or any frame once enough time has passed."""

    def __init__(self, every_n=config.UPDATE_THRESHOLD,
                 max_interval_ms=config.UPDATE_INTERVAL_MS, clock=now_ms):
        self.every_n = every_n
        self.max_interval_ms = max_interval_ms
        self.clock = clock
        self.frame_count = 0
        self.last_update_ms = clock()

    def should_update(self) -> bool:
        self.frame_count += 1
        now = self.clock()
        if self.frame_count % self.every_n == 0 or now - self.last_update_ms > self.max_interval_ms:
            self.last_update_ms = now
            return True
        return False
