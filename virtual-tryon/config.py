"""
Try-on configuration.
All tuning values for the garment overlay live here as module constants.
"""

import os

# -------------------------
# Display
# -------------------------
# Logical display units (portrait phone-sized canvas). Camera frames are
# stretched to this size before the overlay is drawn.
DISPLAY_WIDTH = 390
DISPLAY_HEIGHT = 844

# -------------------------
# Camera
# -------------------------
FRAME_WIDTH = 640
FRAME_HEIGHT = 480
FLIP_HORIZONTAL = True       # Mirror for selfie view

# -------------------------
# Detection
# -------------------------
MIN_CONFIDENCE = 0.6         # Shoulders/hips below this are ignored

# Keypoint dots drawn under the garment
SHOW_KEYPOINTS = True
KEYPOINT_COLOR = (0, 0, 255)    # BGR red
KEYPOINT_RADIUS = 5

# -------------------------
# Garment sizing
# -------------------------
MIN_GARMENT_WIDTH = 100
MAX_GARMENT_WIDTH = 400
CENTER_Y_MIN_RATIO = 0.2     # Clamp window for the garment center (x display height)
CENTER_Y_MAX_RATIO = 0.9
DEFAULT_HEAD_MULTIPLIER = 1.4

# Render target bounds
MIN_RENDER_SIZE = 1.0
MAX_RENDER_SIZE_FACTOR = 4.0  # x display height

# -------------------------
# Smoothing (closer to 1 = smoother)
# -------------------------
SMOOTHING_POSITION = 0.9
SMOOTHING_SIZE = 0.7
FRAME_INTERVAL_MS = 16.0     # One frame at ~60Hz

# -------------------------
# Update gate
# -------------------------
UPDATE_THRESHOLD = 20        # Pose update frequency (every 20th frame)
UPDATE_INTERVAL_MS = 50.0    # ...or when this much time has passed

# -------------------------
# Animation
# -------------------------
POSITION_DURATION_MS = 30
SIZE_DURATION_MS = 50
SPRING_DAMPING = 25.0
SPRING_STIFFNESS = 120.0
SPRING_MASS = 1.0
VISIBILITY_CHANGE_THRESHOLD = 0.1
MIN_VISIBLE_SCALE = 0.8
ANIMATION_FPS = 60

# -------------------------
# Garment assets
# -------------------------
JACKET_ASSET_WIDTH = 300
JACKET_ASSET_HEIGHT = 375

JACKET_ASPECT_RATIO = JACKET_ASSET_HEIGHT / JACKET_ASSET_WIDTH

GARMENT_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "garments")

# Ordered (image file, profile key) pairs. Keys must exist in garment_profiles.
GARMENT_CATALOG = [
    ("A1.png", "JACKET"),
    ("A2.png", "JACKET"),
    ("A3.png", "JACKET"),
    ("A4.png", "DRESS"),
]

MAX_IMAGE_BYTES = 10 * 1024 * 1024

# -------------------------
# Diagnostics
# -------------------------
VERBOSE = os.environ.get("TRYON_VERBOSE", "") not in ("", "0")
