"""
Virtual Try-On Engine
Camera frame in, composited display frame out: pose detection feeds the
try-on session, and the garment is drawn wherever the animation driver
currently has it.
"""

import cv2
import numpy as np

import config
from garment_catalog import GarmentCatalog
from keypoint_normalizer import normalize_person
from pose_detector import PoseDetector
from tryon_session import TryOnSession


# -------------------------
# Image Processing Functions
# -------------------------

def contain_size(img_w, img_h, box_w, box_h):
    """Largest size with the image aspect ratio that fits inside the box."""
    scale = min(box_w / img_w, box_h / img_h)
    return max(1, int(round(img_w * scale))), max(1, int(round(img_h * scale)))


def blend_overlay(frame_bgr, garment_rgba, x, y, opacity=1.0):
    """Blend garment onto frame with soft edges."""
    H, W = frame_bgr.shape[:2]
    oh, ow = garment_rgba.shape[:2]

    x1, y1 = max(0, x), max(0, y)
    x2, y2 = min(W, x + ow), min(H, y + oh)
    if x1 >= x2 or y1 >= y2:
        return frame_bgr

    ox1, oy1 = x1 - x, y1 - y
    ox2, oy2 = ox1 + (x2 - x1), oy1 + (y2 - y1)

    roi = frame_bgr[y1:y2, x1:x2]
    over = garment_rgba[oy1:oy2, ox1:ox2]
    over_rgb = over[:, :, :3]

    # Create soft-edged alpha
    alpha = over[:, :, 3].astype(np.float32) / 255.0
    kernel = cv2.getStructuringElement(cv2.MORPH_ELLIPSE, (3, 3))
    alpha_eroded = cv2.erode((alpha * 255).astype(np.uint8), kernel, iterations=1).astype(np.float32) / 255.0
    edge_mask = cv2.GaussianBlur(alpha - alpha_eroded, (5, 5), 0)
    final_alpha = np.clip(alpha_eroded + edge_mask * 0.7, 0, 1) * opacity

    alpha3 = np.dstack([final_alpha] * 3)
    blended = alpha3 * over_rgb.astype(np.float32) + (1 - alpha3) * roi.astype(np.float32)
    frame_bgr[y1:y2, x1:x2] = blended.astype(np.uint8)
    return frame_bgr


def render_garment(frame_bgr, garment_rgba, target):
    """Draw the garment into the target rectangle, scaled about its center and faded by target.scale."""
    if target.scale <= 0.01:
        return frame_bgr

    box_w = target.width * target.scale
    box_h = target.height * target.scale
    if box_w < 1 or box_h < 1:
        return frame_bgr

    img_h, img_w = garment_rgba.shape[:2]
    w, h = contain_size(img_w, img_h, box_w, box_h)
    resized = cv2.resize(garment_rgba, (w, h), interpolation=cv2.INTER_AREA)

    cx = target.x + target.width / 2
    cy = target.y + target.height / 2
    x = int(round(cx - w / 2))
    y = int(round(cy - h / 2))
    return blend_overlay(frame_bgr, resized, x, y, opacity=target.scale)


def draw_keypoints(frame_bgr, person, color=config.KEYPOINT_COLOR, radius=config.KEYPOINT_RADIUS):
    """Dot every detected keypoint. Person must already be in frame coordinates."""
    for kp in person.keypoints.values():
        cv2.circle(frame_bgr, (int(round(kp.x)), int(round(kp.y))), radius, color, -1, cv2.LINE_AA)
    return frame_bgr


def draw_hud(frame_bgr, info):
    h, w = frame_bgr.shape[:2]
    label = f"NEXT {info['index'] + 1}/{info['count']}"
    cv2.putText(frame_bgr, label, (w - 150, h - 40), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2, cv2.LINE_AA)
    cv2.putText(frame_bgr, info["filename"], (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 2, cv2.LINE_AA)
    return frame_bgr


# -------------------------
# Main Engine
# -------------------------

class TryOnEngine:
    """Virtual try-on engine with pose detection and garment overlay."""

    def __init__(self, catalog=None, detector=None, images=None,
                 display_width=config.DISPLAY_WIDTH, display_height=config.DISPLAY_HEIGHT,
                 show_keypoints=config.SHOW_KEYPOINTS):
        self.catalog = catalog if catalog is not None else GarmentCatalog.from_config()
        self.images = images if images is not None else self.catalog.load_images()
        if len(self.images) != self.catalog.count:
            raise ValueError("[ERROR] Garment image count does not match catalog")

        self.detector = detector if detector is not None else PoseDetector()

        self.display_size = (display_width, display_height)
        self.show_keypoints = show_keypoints
        self.session = TryOnSession(self.catalog, display_width, display_height)

    def start(self):
        self.session.start()
        return self

    def close(self):
        self.session.close()
        close = getattr(self.detector, "close", None)
        if close is not None:
            close()

    def next_garment(self):
        return self.session.next_garment()

    def prev_garment(self):
        return self.session.prev_garment()

    def get_clothing_list(self):
        return self.catalog.names()

    def process_frame(self, frame_bgr, hud=True):
        """Detect pose on the camera frame and return (display frame, status)."""
        if not self.session.driver.running:
            raise RuntimeError("[ERROR] Engine not started, call start() before process_frame()")

        people = self.detector.process(frame_bgr)
        self.session.on_pose_detected(people)

        frame = cv2.resize(frame_bgr, self.display_size, interpolation=cv2.INTER_LINEAR)
        if self.show_keypoints and people:
            frame = draw_keypoints(frame, normalize_person(people[0], *self.display_size))
        index, _, _ = self.catalog.selection()
        frame = render_garment(frame, self.images[index], self.session.driver.render_target)

        info = self.session.status()
        if hud:
            frame = draw_hud(frame, info)
        return frame, info
