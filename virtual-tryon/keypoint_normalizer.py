"""
Rescale detector keypoints from sensor resolution to display resolution.
"""

from pose_types import Keypoint, Person


def _valid_size(value):
    return value is not None and value > 0


def scale_factors(person: Person, display_width: float, display_height: float):
    """Per-axis (x_scale, y_scale). Missing source size means no rescale on that axis."""
    source_w = person.source_width if _valid_size(person.source_width) else display_width
    source_h = person.source_height if _valid_size(person.source_height) else display_height
    return display_width / source_w, display_height / source_h


def normalize_person(person: Person, display_width: float, display_height: float) -> Person:
    """Return a copy of `person` with every keypoint in display coordinates."""
    x_scale, y_scale = scale_factors(person, display_width, display_height)
    keypoints = {
        name: Keypoint(kp.x * x_scale, kp.y * y_scale, kp.confidence)
        for name, kp in person.keypoints.items()
    }
    return Person(keypoints, display_width, display_height)
