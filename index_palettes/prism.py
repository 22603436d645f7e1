"""
Prism palette: eight complete hue cycles
"""
import numpy as np
from functools import lru_cache

from . import hue

name = "prism"
description = "Eight complete cycles of hue"


@lru_cache(maxsize=1)
def forward_lut() -> np.ndarray:
    return hue.forward_lut(0.0, 8.0)
