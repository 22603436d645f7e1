"""
Red-white-blue diverging palette
"""
import numpy as np
from functools import lru_cache

from ._channels import POSITIONS, to_bytes

name = "red_white_blue"
description = "Red to white at the midpoint, then white to blue"


@lru_cache(maxsize=1)
def forward_lut() -> np.ndarray:
    x = POSITIONS
    lower = x < 0.5
    a = np.where(lower, x / 0.5, (x - 0.5) / 0.5)
    r = np.where(lower, 1.0, 1.0 - a)
    g = np.where(lower, a, 1.0 - a)
    b = np.where(lower, a, 1.0)
    return to_bytes(np.stack([r, g, b], axis=1))
