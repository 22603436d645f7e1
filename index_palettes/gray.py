"""
Linear gray ramp, black to white by default
"""
import numpy as np

from ._channels import linear_levels, to_bytes

name = "gray"
description = "Linear gray levels g0..g255 (0.0 black, 1.0 white)"


def forward_lut(g0: float = 0.0, g255: float = 1.0) -> np.ndarray:
    # levels outside [0,1] are allowed and saturate in to_bytes
    g = linear_levels(g0, g255)
    return to_bytes(np.stack([g, g, g], axis=1))
