"""Shared fixtures for the try-on tests."""

import pytest

from garment_catalog import GarmentAsset, GarmentCatalog
from pose_types import Keypoint, Person


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, amount):
        self.now += amount
        return self.now


DEFAULT_KEYPOINTS = {
    "nose": (195.0, 200.0, 0.9),
    "leftEye": (185.0, 190.0, 0.9),
    "rightEye": (205.0, 190.0, 0.9),
    "leftShoulder": (95.0, 300.0, 0.9),
    "rightShoulder": (295.0, 300.0, 0.9),
    "leftHip": (120.0, 400.0, 0.9),
    "rightHip": (270.0, 400.0, 0.9),
}


def build_person(source_width=None, source_height=None, drop=(), **overrides):
    points = dict(DEFAULT_KEYPOINTS)
    points.update(overrides)
    keypoints = {
        name: Keypoint(*values)
        for name, values in points.items()
        if name not in drop
    }
    return Person(keypoints, source_width, source_height)


@pytest.fixture
def make_person():
    return build_person


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def catalog():
    return GarmentCatalog([
        GarmentAsset("garments/A1.png", "JACKET"),
        GarmentAsset("garments/A2.png", "JACKET"),
        GarmentAsset("garments/A3.png", "JACKET"),
        GarmentAsset("garments/A4.png", "DRESS"),
    ])
