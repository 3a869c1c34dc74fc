"""
Garment profiles: how each kind of garment is sized and placed against the body.

Move it up    -> center_y_offset: -value
Move it down  -> center_y_offset: +value
Move it left  -> center_x_offset: -value
Move it right -> center_x_offset: +value
"""

from dataclasses import dataclass
from typing import Dict, Union

import config


@dataclass(frozen=True)
class SilhouetteProfile:
    """Height comes from width x aspect ratio x height multiplier (jackets, tops)."""
    width_ratio: float
    height_multiplier: float
    center_y_offset: float
    center_x_offset: float
    aspect_ratio: float
    use_torso_length: bool = False
    torso_multiplier: float = 1.0


@dataclass(frozen=True)
class FullLengthProfile:
    """Height comes from torso span x torso multiplier (dresses)."""
    width_ratio: float
    height_multiplier: float
    center_y_offset: float
    center_x_offset: float
    aspect_ratio: float
    use_torso_length: bool = True
    torso_multiplier: float = 1.0


GarmentProfile = Union[SilhouetteProfile, FullLengthProfile]


GARMENT_PROFILES: Dict[str, GarmentProfile] = {
    "JACKET": SilhouetteProfile(
        width_ratio=1.1,
        height_multiplier=2,
        center_y_offset=220,
        center_x_offset=1,
        aspect_ratio=config.JACKET_ASPECT_RATIO,
        use_torso_length=True,
        torso_multiplier=1.5,
    ),
    "DRESS": FullLengthProfile(
        width_ratio=1.2,
        height_multiplier=12,
        center_y_offset=220,
        center_x_offset=1,
        # Empirical tuning value for the dress artwork
        aspect_ratio=11.9,
        use_torso_length=True,
        torso_multiplier=11.4,
    ),
}


def get_profile(key: str) -> GarmentProfile:
    """Look up a profile by key. Unknown keys are a configuration error."""
    try:
        return GARMENT_PROFILES[key]
    except KeyError:
        known = ", ".join(sorted(GARMENT_PROFILES))
        raise ValueError(f"[ERROR] Unknown garment profile '{key}' (known: {known})") from None
