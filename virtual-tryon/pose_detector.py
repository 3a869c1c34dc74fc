"""
MediaPipe Pose adapter.
Runs pose estimation on a camera frame and returns people in the try-on
keypoint format, in source-frame pixels. Landmark visibility is used as the
keypoint confidence.
"""

import cv2

from pose_types import (
    LEFT_EYE, LEFT_HIP, LEFT_SHOULDER, NOSE, RIGHT_EYE, RIGHT_HIP, RIGHT_SHOULDER,
    Keypoint, Person,
)


class PoseLandmark:
    """MediaPipe Pose landmark indices used by the overlay"""
    NOSE = 0
    LEFT_EYE = 2
    RIGHT_EYE = 5
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_HIP = 23
    RIGHT_HIP = 24


LANDMARK_NAMES = {
    NOSE: PoseLandmark.NOSE,
    LEFT_EYE: PoseLandmark.LEFT_EYE,
    RIGHT_EYE: PoseLandmark.RIGHT_EYE,
    LEFT_SHOULDER: PoseLandmark.LEFT_SHOULDER,
    RIGHT_SHOULDER: PoseLandmark.RIGHT_SHOULDER,
    LEFT_HIP: PoseLandmark.LEFT_HIP,
    RIGHT_HIP: PoseLandmark.RIGHT_HIP,
}


def person_from_landmarks(landmarks, width, height):
    """Convert normalized MediaPipe landmarks to a Person in pixel coordinates."""
    keypoints = {}
    for name, idx in LANDMARK_NAMES.items():
        lm = landmarks[idx]
        keypoints[name] = Keypoint(lm.x * width, lm.y * height, float(lm.visibility))
    return Person(keypoints, width, height)


class PoseDetector:
    """Single-person pose estimator backed by MediaPipe Pose"""

    def __init__(self, static_image_mode=False, model_complexity=1,
                 min_detection_confidence=0.5, min_tracking_confidence=0.5):
        try:
            import mediapipe as mp
        except ImportError as e:
            raise RuntimeError("[ERROR] MediaPipe is not installed, install the camera extra") from e

        try:
            self.pose = mp.solutions.pose.Pose(
                static_image_mode=static_image_mode,
                model_complexity=model_complexity,
                smooth_landmarks=True,
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=min_tracking_confidence,
            )
        except Exception as e:
            raise RuntimeError(f"[ERROR] Failed to initialize MediaPipe Pose: {e}") from e
        print("[OK] Using MediaPipe Pose detector")

    def process(self, frame_bgr):
        """Return a list with zero or one Person for this frame."""
        h, w = frame_bgr.shape[:2]
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        try:
            results = self.pose.process(rgb)
        except Exception as e:
            print(f"[ERROR] Pose processing failed: {e}")
            return []
        if results.pose_landmarks is None:
            return []
        return [person_from_landmarks(results.pose_landmarks.landmark, w, h)]

    def close(self):
        self.pose.close()
