"""
Jet palette: dark blue -> cyan -> green -> yellow -> dark red (Matlab-like)
"""
import numpy as np
from functools import lru_cache

from ._channels import POSITIONS, to_bytes

name = "jet"
description = "Piecewise-linear blue-cyan-green-yellow-red ramp"

_BREAKS = np.array([0.125, 0.375, 0.625, 0.875], np.float32)


@lru_cache(maxsize=1)
def forward_lut() -> np.ndarray:
    x = POSITIONS
    seg = np.searchsorted(_BREAKS, x, side="right")   # 0..4, x == break goes right
    rgb = np.empty((256, 3), np.float32)
    zero, one = np.zeros_like(x), np.ones_like(x)

    # segment -> (r, g, b) as functions of the local ramp a in [0,1]
    a = x / 0.125
    rgb[:] = np.stack([zero, zero, 0.5 + 0.5 * a], axis=1)

    m = seg == 1
    a = (x[m] - 0.125) / 0.25
    rgb[m] = np.stack([zero[m], a, one[m]], axis=1)

    m = seg == 2
    a = (x[m] - 0.375) / 0.25
    rgb[m] = np.stack([a, one[m], 1.0 - a], axis=1)

    m = seg == 3
    a = (x[m] - 0.625) / 0.25
    rgb[m] = np.stack([one[m], 1.0 - a, zero[m]], axis=1)

    m = seg == 4
    a = (x[m] - 0.875) / 0.125
    rgb[m] = np.stack([1.0 - 0.5 * a, zero[m], zero[m]], axis=1)

    return to_bytes(rgb)
