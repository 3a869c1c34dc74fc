"""
Garment geometry: turn display-space keypoints plus a garment profile into
the rectangle the garment should occupy on screen.

Returns None when the shoulders are not reliable enough to place anything;
the caller is expected to fade the overlay out in that case.
"""

import math
from dataclasses import dataclass
from typing import Optional

import config
from garment_profiles import FullLengthProfile, GarmentProfile
from pose_types import (
    LEFT_EYE, LEFT_HIP, LEFT_SHOULDER, NOSE, RIGHT_EYE, RIGHT_HIP, RIGHT_SHOULDER,
    Person, confidence_of,
)

# (upper bound, inclusive, multiplier). Larger head ratio -> camera closer -> bigger drop.
HEAD_RATIO_BUCKETS = (
    (0.25, False, 0.9),   # head very small in frame (far from camera)
    (0.35, False, 1.1),
    (0.45, False, 1.25),
    (0.52, False, 1.4),   # medium
    (0.55, False, 1.55),
    (0.58, True, 1.7),    # large, optimal position
    (0.62, True, 1.8),
    (0.68, True, 1.9),    # very large (close to camera)
    (0.75, True, 2.0),
)
MAX_HEAD_MULTIPLIER = 2.1


@dataclass(frozen=True)
class GarmentGeometry:
    x: float
    y: float
    width: float
    height: float
    scale: float
    # Diagnostics
    head_y: float = 0.0
    head_ratio: float = 0.0
    multiplier: float = 0.0


def clamp(value, low, high):
    return min(high, max(low, value))


def head_multiplier(head_ratio: float) -> float:
    """Map head ratio (0..1) to the offset multiplier used below the head."""
    if head_ratio is None or math.isnan(head_ratio) or head_ratio <= 0:
        return config.DEFAULT_HEAD_MULTIPLIER
    for bound, inclusive, multiplier in HEAD_RATIO_BUCKETS:
        if head_ratio < bound or (inclusive and head_ratio == bound):
            return multiplier
    return MAX_HEAD_MULTIPLIER


def estimate_head_y(person: Person) -> float:
    """Nose, else midpoint of the eyes, else the left shoulder."""
    nose = person.get(NOSE)
    if nose is not None:
        return nose.y
    left_eye, right_eye = person.get(LEFT_EYE), person.get(RIGHT_EYE)
    if left_eye is not None and right_eye is not None:
        return (left_eye.y + right_eye.y) / 2
    return person.get(LEFT_SHOULDER).y


def shoulders_visible(person: Person, min_confidence: float = config.MIN_CONFIDENCE) -> bool:
    conf = min(confidence_of(person.get(LEFT_SHOULDER)), confidence_of(person.get(RIGHT_SHOULDER)))
    return conf >= min_confidence


def torso_length(person: Person, min_confidence: float = config.MIN_CONFIDENCE) -> Optional[float]:
    """Shoulder-center to hip-center vertical span, or None if the hips are unreliable."""
    left_hip, right_hip = person.get(LEFT_HIP), person.get(RIGHT_HIP)
    if confidence_of(left_hip) <= min_confidence or confidence_of(right_hip) <= min_confidence:
        return None
    shoulder_center_y = (person.get(LEFT_SHOULDER).y + person.get(RIGHT_SHOULDER).y) / 2
    hip_center_y = (left_hip.y + right_hip.y) / 2
    return abs(hip_center_y - shoulder_center_y)


def garment_height(width: float, profile: GarmentProfile, torso: Optional[float]) -> float:
    if isinstance(profile, FullLengthProfile):
        # Dress extends from the shoulders past the hips
        if torso is not None:
            return torso * profile.torso_multiplier
        return width * profile.aspect_ratio

    height = width * profile.aspect_ratio * profile.height_multiplier
    if profile.use_torso_length and torso is not None:
        height = max(height, torso * profile.torso_multiplier)
    return height


def resolve_garment_geometry(person: Person, profile: GarmentProfile,
                             display_width: float, display_height: float,
                             min_confidence: float = config.MIN_CONFIDENCE) -> Optional[GarmentGeometry]:
    """Compute the garment rectangle for a person already in display coordinates."""
    if not shoulders_visible(person, min_confidence):
        return None

    left_shoulder = person.get(LEFT_SHOULDER)
    right_shoulder = person.get(RIGHT_SHOULDER)

    # --- Size ---
    shoulder_span = abs(right_shoulder.x - left_shoulder.x)
    width = clamp(shoulder_span * profile.width_ratio, config.MIN_GARMENT_WIDTH, config.MAX_GARMENT_WIDTH)
    height = garment_height(width, profile, torso_length(person, min_confidence))

    # --- Position below head (adaptive to camera distance) ---
    head_y = estimate_head_y(person)
    head_ratio = clamp(head_y / display_height, 0.0, 1.0)
    multiplier = head_multiplier(head_ratio)

    shoulder_center_y = (left_shoulder.y + right_shoulder.y) / 2
    offset_below_head = abs(shoulder_center_y - head_y) * multiplier
    center_y = shoulder_center_y - offset_below_head + profile.center_y_offset
    center_y = clamp(center_y,
                     display_height * config.CENTER_Y_MIN_RATIO,
                     display_height * config.CENTER_Y_MAX_RATIO)

    # Horizontal: fixed to screen midline plus the profile offset
    center_x = display_width / 2 + profile.center_x_offset

    scale = clamp(min(left_shoulder.confidence, right_shoulder.confidence), config.MIN_VISIBLE_SCALE, 1.0)

    return GarmentGeometry(
        x=center_x - width / 2,
        y=center_y - height / 2,
        width=width,
        height=height,
        scale=scale,
        head_y=head_y,
        head_ratio=head_ratio,
        multiplier=multiplier,
    )
