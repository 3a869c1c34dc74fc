"""Tests for garment geometry: visibility gate, sizing and placement."""

import math

import pytest

import config
from garment_geometry import (
    estimate_head_y, head_multiplier, resolve_garment_geometry, torso_length,
)
from garment_profiles import GARMENT_PROFILES, FullLengthProfile, SilhouetteProfile

W, H = config.DISPLAY_WIDTH, config.DISPLAY_HEIGHT
JACKET = GARMENT_PROFILES["JACKET"]
DRESS = GARMENT_PROFILES["DRESS"]


class TestHeadMultiplier:
    def test_monotonic_and_bounded(self):
        ratios = [i / 1000 for i in range(1, 1001)]
        values = [head_multiplier(r) for r in ratios]
        assert all(0.9 <= v <= 2.1 for v in values)
        assert all(a <= b for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("ratio", [0.0, -0.5, float("nan"), None])
    def test_neutral_default(self, ratio):
        assert head_multiplier(ratio) == 1.4

    @pytest.mark.parametrize("ratio,expected", [
        (0.1, 0.9),
        (0.25, 1.1),
        (0.4, 1.25),
        (0.5, 1.4),
        (0.53, 1.55),
        (0.55, 1.7),
        (0.58, 1.7),
        (0.6, 1.8),
        (0.68, 1.9),
        (0.75, 2.0),
        (0.76, 2.1),
        (1.0, 2.1),
    ])
    def test_buckets(self, ratio, expected):
        assert head_multiplier(ratio) == expected


class TestVisibilityGate:
    def test_one_shoulder_below_threshold(self, make_person):
        person = make_person(leftShoulder=(95.0, 300.0, 0.5), rightShoulder=(295.0, 300.0, 0.9))
        assert resolve_garment_geometry(person, JACKET, W, H) is None

    def test_missing_shoulder(self, make_person):
        person = make_person(drop=("rightShoulder",))
        assert resolve_garment_geometry(person, JACKET, W, H) is None

    def test_threshold_is_inclusive(self, make_person):
        person = make_person(leftShoulder=(95.0, 300.0, 0.6), rightShoulder=(295.0, 300.0, 0.6))
        assert resolve_garment_geometry(person, JACKET, W, H) is not None


class TestWidth:
    def test_zero_span_clamps_to_min(self, make_person):
        person = make_person(leftShoulder=(200.0, 300.0, 0.9), rightShoulder=(200.0, 300.0, 0.9))
        assert resolve_garment_geometry(person, JACKET, W, H).width == 100

    def test_huge_span_clamps_to_max(self, make_person):
        person = make_person(leftShoulder=(0.0, 300.0, 0.9), rightShoulder=(10000.0, 300.0, 0.9))
        assert resolve_garment_geometry(person, JACKET, W, H).width == 400

    def test_span_times_ratio(self, make_person):
        # span 200 x 1.1
        geometry = resolve_garment_geometry(make_person(), JACKET, W, H)
        assert geometry.width == pytest.approx(220.0)


class TestHeight:
    def test_full_length_uses_torso(self, make_person):
        # shoulder center y=300, hip center y=400
        geometry = resolve_garment_geometry(make_person(), DRESS, W, H)
        assert geometry.height == pytest.approx(1140.0)

    def test_full_length_falls_back_to_aspect_ratio(self, make_person):
        person = make_person(leftHip=(120.0, 400.0, 0.3))
        geometry = resolve_garment_geometry(person, DRESS, W, H)
        assert geometry.height == pytest.approx(geometry.width * 11.9)

    def test_hip_confidence_must_exceed_threshold(self, make_person):
        person = make_person(leftHip=(120.0, 400.0, 0.6), rightHip=(270.0, 400.0, 0.6))
        assert torso_length(person) is None

    def test_silhouette_aspect_height(self, make_person):
        geometry = resolve_garment_geometry(make_person(), JACKET, W, H)
        # torso 100 x 1.5 = 150 is smaller than 220 x 1.25 x 2
        assert geometry.height == pytest.approx(220.0 * config.JACKET_ASPECT_RATIO * 2)

    def test_silhouette_torso_only_grows(self, make_person):
        person = make_person(leftHip=(120.0, 800.0, 0.9), rightHip=(270.0, 800.0, 0.9))
        geometry = resolve_garment_geometry(person, JACKET, W, H)
        assert geometry.height == pytest.approx(500.0 * 1.5)

    def test_silhouette_without_torso_flag(self, make_person):
        profile = SilhouetteProfile(1.0, 1.0, 0, 0, aspect_ratio=1.5, use_torso_length=False, torso_multiplier=10)
        person = make_person(leftHip=(120.0, 800.0, 0.9), rightHip=(270.0, 800.0, 0.9))
        geometry = resolve_garment_geometry(person, profile, W, H)
        assert geometry.height == pytest.approx(200.0 * 1.5)


class TestPlacement:
    def test_head_estimate_priority(self, make_person):
        assert estimate_head_y(make_person()) == 200.0
        assert estimate_head_y(make_person(drop=("nose",))) == 190.0
        assert estimate_head_y(make_person(drop=("nose", "rightEye"))) == 300.0

    def test_center_x_is_screen_midline_plus_offset(self, make_person):
        person = make_person(leftShoulder=(10.0, 300.0, 0.9), rightShoulder=(210.0, 300.0, 0.9))
        geometry = resolve_garment_geometry(person, JACKET, W, H)
        assert geometry.x + geometry.width / 2 == pytest.approx(W / 2 + 1)

    def test_center_y_below_head(self, make_person):
        geometry = resolve_garment_geometry(make_person(), JACKET, W, H)
        # ratio 200/844 -> 0.9, offset 100 x 0.9, plus profile offset 220
        assert geometry.multiplier == 0.9
        assert geometry.head_ratio == pytest.approx(200.0 / H)
        assert geometry.y + geometry.height / 2 == pytest.approx(300.0 - 90.0 + 220.0)

    def test_center_y_clamped_high(self, make_person):
        person = make_person(nose=(195.0, 790.0, 0.9),
                             leftShoulder=(95.0, 800.0, 0.9), rightShoulder=(295.0, 800.0, 0.9))
        geometry = resolve_garment_geometry(person, JACKET, W, H)
        assert geometry.y + geometry.height / 2 == pytest.approx(H * 0.9)

    def test_center_y_clamped_low(self, make_person):
        profile = FullLengthProfile(1.0, 1.0, center_y_offset=0, center_x_offset=0, aspect_ratio=2.0)
        person = make_person(nose=(195.0, 10.0, 0.9),
                             leftShoulder=(95.0, 100.0, 0.9), rightShoulder=(295.0, 100.0, 0.9))
        geometry = resolve_garment_geometry(person, profile, W, H)
        assert geometry.y + geometry.height / 2 == pytest.approx(H * 0.2)

    @pytest.mark.parametrize("conf,expected", [(0.6, 0.8), (0.7, 0.8), (0.95, 0.95), (1.0, 1.0)])
    def test_visibility_scale(self, make_person, conf, expected):
        person = make_person(leftShoulder=(95.0, 300.0, conf), rightShoulder=(295.0, 300.0, 1.0))
        geometry = resolve_garment_geometry(person, JACKET, W, H)
        assert geometry.scale == pytest.approx(expected)

    def test_all_values_finite(self, make_person):
        geometry = resolve_garment_geometry(make_person(drop=("nose", "leftEye", "rightEye")), DRESS, W, H)
        assert all(math.isfinite(v) for v in (geometry.x, geometry.y, geometry.width, geometry.height))
