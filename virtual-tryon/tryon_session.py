"""
Try-on session: everything that has to persist between pose frames for one
camera session (update gate, smoothing state, garment cursor, animation driver).

`on_pose_detected` is the detector callback. It only does the cheap geometry
pass and posts targets to the animation driver; the driver animates on its own
thread.
"""

import config
from animation_driver import AnimationDriver
from garment_geometry import resolve_garment_geometry
from keypoint_normalizer import normalize_person
from smoothing import Rect, RectSmoother, initial_rect
from update_gate import UpdateGate


class TryOnSession:
    def __init__(self, catalog, display_width=config.DISPLAY_WIDTH, display_height=config.DISPLAY_HEIGHT,
                 gate=None, driver=None):
        self.catalog = catalog
        self.display_width = display_width
        self.display_height = display_height

        initial = initial_rect(display_width, display_height)
        self.gate = gate if gate is not None else UpdateGate()
        self.smoother = RectSmoother(initial)
        self.driver = driver if driver is not None else AnimationDriver(initial, display_height)

        self.visible = False
        self.frames_processed = 0
        self.debug_info = {"head_ratio": 0.0, "head_y": 0.0, "multiplier": 0.0}

    # -------------------------
    # Lifecycle
    # -------------------------

    def start(self):
        self.driver.start()
        return self

    def close(self):
        self.driver.stop()

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # -------------------------
    # Pose callback
    # -------------------------

    def _hide(self):
        self.visible = False
        self.driver.hide()

    def on_pose_detected(self, people):
        """Handle one detector tick. Returns the smoothed rectangle when the frame was processed."""
        if not people or not people[0].keypoints:
            self._hide()
            return None

        if not self.gate.should_update():
            return None

        person = normalize_person(people[0], self.display_width, self.display_height)
        _, _, profile = self.catalog.selection()

        geometry = resolve_garment_geometry(person, profile, self.display_width, self.display_height)
        if geometry is None:
            self._hide()
            return None

        self.frames_processed += 1
        self.debug_info = {
            "head_ratio": geometry.head_ratio,
            "head_y": geometry.head_y,
            "multiplier": geometry.multiplier,
        }
        if config.VERBOSE:
            print(f"[POSE] head_y={geometry.head_y:.1f} ratio={geometry.head_ratio:.3f} "
                  f"mult={geometry.multiplier:.2f} w={geometry.width:.0f} h={geometry.height:.0f}", flush=True)

        smoothed = self.smoother.update(Rect(geometry.x, geometry.y, geometry.width, geometry.height))
        self.driver.move_to(smoothed)
        self.driver.set_visibility(geometry.scale)
        self.visible = True
        return smoothed

    # -------------------------
    # User actions
    # -------------------------

    def next_garment(self):
        """Switch image and profile only; the on-screen rectangle carries over."""
        return self.catalog.next()

    def prev_garment(self):
        return self.catalog.prev()

    def status(self):
        index, asset, _ = self.catalog.selection()
        target = self.driver.render_target
        return {
            "index": index,
            "count": self.catalog.count,
            "filename": asset.name,
            "profile": asset.profile_key,
            "visible": self.visible,
            "render_target": {
                "x": target.x, "y": target.y,
                "width": target.width, "height": target.height,
                "scale": target.scale,
            },
            "debug": dict(self.debug_info),
        }
