"""
Garment catalog: the ordered list of garment images the user cycles through.
Every entry is validated against the profile table when the catalog is built.
"""

import os
from dataclasses import dataclass

import cv2
import numpy as np

import config
from garment_profiles import GarmentProfile, get_profile


@dataclass(frozen=True)
class GarmentAsset:
    path: str
    profile_key: str

    @property
    def name(self):
        return os.path.basename(self.path)


def load_garment_image(path, max_bytes=config.MAX_IMAGE_BYTES):
    """Load and validate a garment image, ensure RGBA format."""
    if not os.path.isfile(path):
        raise FileNotFoundError(f"[ERROR] Garment image not found: {path}")
    if os.path.getsize(path) > max_bytes:
        raise ValueError(f"[ERROR] File too large (max {max_bytes // (1024 * 1024)}MB): {path}")

    img = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ValueError(f"[ERROR] Failed to load image: {path}")

    h, w = img.shape[:2]
    if not (50 <= w <= 4000 and 50 <= h <= 4000):
        raise ValueError(f"[ERROR] Invalid dimensions ({w}x{h}): {path}")

    # Convert to RGBA if needed
    if img.ndim == 3 and img.shape[2] == 3:
        print(f"[WARNING] {os.path.basename(path)} has no alpha channel, using opaque alpha")
        alpha = np.full((h, w, 1), 255, dtype=np.uint8)
        img = np.concatenate([img, alpha], axis=2)
    elif img.ndim != 3 or img.shape[2] != 4:
        raise ValueError(f"[ERROR] Unsupported image format: {path}")

    return img


class GarmentCatalog:
    """Ordered garments with a cyclic cursor."""

    def __init__(self, assets):
        self.assets = list(assets)
        if not self.assets:
            raise ValueError("[ERROR] Garment catalog is empty")
        # Fail fast on unknown profile keys
        self._profiles = [get_profile(asset.profile_key) for asset in self.assets]
        self.index = 0

    @classmethod
    def from_config(cls, entries=None, garment_dir=config.GARMENT_DIR):
        entries = config.GARMENT_CATALOG if entries is None else entries
        return cls(GarmentAsset(os.path.join(garment_dir, filename), key) for filename, key in entries)

    @property
    def count(self):
        return len(self.assets)

    @property
    def current(self) -> GarmentAsset:
        return self.assets[self.index]

    @property
    def current_profile(self) -> GarmentProfile:
        return self._profiles[self.index]

    def selection(self):
        """(index, asset, profile) read from a single cursor value."""
        index = self.index
        return index, self.assets[index], self._profiles[index]

    def next(self):
        self.index = (self.index + 1) % len(self.assets)
        return self.index

    def prev(self):
        self.index = (self.index - 1) % len(self.assets)
        return self.index

    def names(self):
        return [asset.name for asset in self.assets]

    def load_images(self):
        """Load every garment image up front. Any bad image is a startup error."""
        print("[INFO] Loading garment images...")
        images = []
        for asset in self.assets:
            images.append(load_garment_image(asset.path))
            print(f"  Loaded: {asset.name} ({asset.profile_key})")
        print(f"[OK] Loaded {len(images)} garment(s)")
        return images
