"""
Pose data types shared by the detector, the normalizer and the geometry resolver.
Coordinates are pixels in whatever resolution the producer reports.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

# Keypoints the try-on pipeline reads
NOSE = "nose"
LEFT_EYE = "leftEye"
RIGHT_EYE = "rightEye"
LEFT_SHOULDER = "leftShoulder"
RIGHT_SHOULDER = "rightShoulder"
LEFT_HIP = "leftHip"
RIGHT_HIP = "rightHip"

KEYPOINT_NAMES = (
    NOSE, LEFT_EYE, RIGHT_EYE,
    LEFT_SHOULDER, RIGHT_SHOULDER,
    LEFT_HIP, RIGHT_HIP,
)


@dataclass(frozen=True)
class Keypoint:
    x: float
    y: float
    confidence: float = 0.0


@dataclass(frozen=True)
class Person:
    """One detected body: named keypoints plus the resolution they were measured in."""
    keypoints: Dict[str, Keypoint] = field(default_factory=dict)
    source_width: Optional[float] = None
    source_height: Optional[float] = None

    def get(self, name: str) -> Optional[Keypoint]:
        return self.keypoints.get(name)


def confidence_of(kp: Optional[Keypoint]) -> float:
    """Confidence of a keypoint, 0 when it was not detected."""
    return kp.confidence if kp is not None else 0.0
