"""
Viridis perceptually-uniform palette (256-entry index table)

* At index 0 → near-black navy; at index 255 → yellow–green
* Sampled from Matplotlib's colormap registry. Raises an informative error
  if Matplotlib is missing.
"""
import numpy as np
from functools import lru_cache

from ._channels import to_bytes

try:
    import matplotlib
except ImportError as e:
    # If Matplotlib isn't installed, inform the user how to install it
    raise ImportError(
        "The viridis palette requires matplotlib. "
        "Please install it with: pip install matplotlib"
    ) from e

name = "viridis"
description = "Matplotlib viridis sampled at 256 evenly spaced points"


@lru_cache(maxsize=1)
def forward_lut() -> np.ndarray:
    """
    Build a uint8 lookup table of shape [256, 3]:

    1. Sample the Viridis colormap at 256 evenly spaced positions in [0,1].
    2. Drop the alpha channel that Matplotlib returns.
    3. Scale to [0,255] with the same round-half-up rule as the other palettes.
    """
    rgba = matplotlib.colormaps["viridis"](np.linspace(0.0, 1.0, 256))
    return to_bytes(rgba[:, :3])
