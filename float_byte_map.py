"""
Float-to-byte quantizer: clip a scalar value to [clip_min, clip_max] and map
it onto one of 256 color indices.

The mapping is

    index = int((f - clip_min) * 256 / (clip_max - clip_min)), capped at 255

so each index covers an equal share of the clip range and clip_max itself
lands on 255. Values outside the range saturate at the nearest bound, NaN maps
to index 0. Clips must be finite. A degenerate range (clip_max <= clip_min)
turns the map into a step: values at or below clip_min map to 0, everything
else to 255.
"""

from __future__ import annotations
import math
import warnings
from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike


@runtime_checkable
class ValueQuantizer(Protocol):
    """What a color map needs from a quantizer."""

    def map(self, value: float) -> int: ...

    def set_clips(self, clip_min: float, clip_max: float) -> None: ...

    def get_clip_min(self) -> float: ...

    def get_clip_max(self) -> float: ...


class FloatByteMap:
    """Clip-range quantizer of floats to indices in [0,255]."""

    def __init__(self, clip_min: float = 0.0, clip_max: float = 1.0):
        self.set_clips(clip_min, clip_max)

    @classmethod
    def from_percentiles(
        cls, values: ArrayLike, pmin: float = 0.0, pmax: float = 100.0
    ) -> FloatByteMap:
        """Clips at the pmin and pmax percentiles of values, NaNs ignored."""
        if not 0.0 <= pmin <= pmax <= 100.0:
            raise ValueError(f"percentiles must satisfy 0 <= pmin <= pmax <= 100, got {pmin}, {pmax}")
        data = np.asarray(values, dtype=np.float64).ravel()
        finite = data[np.isfinite(data)]
        if finite.size == 0:
            warnings.warn("No finite values for percentile clips; using default range [0, 1].")
            return cls()
        lo, hi = np.percentile(finite, [pmin, pmax])
        return cls(float(lo), float(hi))

    # ------------------------------------------------------------------
    # Clip range
    # ------------------------------------------------------------------
    def set_clips(self, clip_min: float, clip_max: float) -> None:
        clip_min, clip_max = float(clip_min), float(clip_max)
        if not (math.isfinite(clip_min) and math.isfinite(clip_max)):
            raise ValueError(f"clips must be finite, got [{clip_min}, {clip_max}]")
        if not clip_max > clip_min:
            warnings.warn(
                f"Degenerate clip range [{clip_min}, {clip_max}]; "
                "values map to index 0 or 255 only."
            )
        self._clip_min = clip_min
        self._clip_max = clip_max

    def get_clip_min(self) -> float:
        return self._clip_min

    def get_clip_max(self) -> float:
        return self._clip_max

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------
    def map(self, value: float) -> int:
        """Return the index in [0,255] for value."""
        f = float(value)
        lo, hi = self._clip_min, self._clip_max
        if math.isnan(f) or f <= lo:
            return 0
        if f >= hi or not hi > lo:
            return 255
        # halved so that hi - lo cannot overflow for ranges near the float limits
        scaled = (f * 0.5 - lo * 0.5) / (hi * 0.5 - lo * 0.5) * 256.0
        return min(int(scaled), 255)

    def __repr__(self) -> str:
        return f"FloatByteMap(clip_min={self._clip_min!r}, clip_max={self._clip_max!r})"
