"""
Linear hue palette at full saturation and brightness, red to blue by default
"""
import numpy as np
from skimage import color

from ._channels import linear_levels, to_bytes

name = "hue"
description = "Linear hues h0..h255 (0.00 red, 0.33 green, 0.67 blue, 1.00 red)"


def forward_lut(h0: float = 0.0, h255: float = 0.67) -> np.ndarray:
    h = linear_levels(h0, h255)
    # hue is periodic; wrap into [0,1) in float32, hsv2rgb keeps float32 input
    h = h - np.floor(h)
    one = np.ones_like(h)
    hsv = np.stack([h, one, one], axis=1)
    rgb = color.hsv2rgb(hsv.reshape(-1, 1, 3)).reshape(-1, 3)
    return to_bytes(rgb)
