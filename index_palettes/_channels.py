"""
Shared helpers for the palette modules.
"""
import numpy as np

# normalized position x = i/255 of every table index
POSITIONS = np.arange(256, dtype=np.float32) / np.float32(255.0)


def to_bytes(rgb: np.ndarray) -> np.ndarray:
    """Scale 0..1 channels to uint8 with round-half-up, saturating at 0 and 255.

    The scaling runs in float32 so that ties such as 131.5 round up exactly.
    """
    rgb = np.asarray(rgb, dtype=np.float32)
    scaled = np.floor(rgb * np.float32(255.0) + np.float32(0.5))
    return np.clip(scaled, 0, 255).astype(np.uint8)


def linear_levels(v0: float, v255: float) -> np.ndarray:
    """Levels v0 + i*(v255-v0)/255 for i = 0..255, endpoints not clamped."""
    i = np.arange(256, dtype=np.float64)
    return (v0 + i * (v255 - v0) / 255.0).astype(np.float32)
