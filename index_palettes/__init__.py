"""
index_palettes package
----------------------
Drop a *.py file in here and it is discovered automatically.
Every module *must* provide one of:

* forward_lut(*params) -> np.ndarray (shape: [256, 3], dtype:uint8)
* LUT (a ready-made np.ndarray)

Optionally:
    name        : display name (str)
    description : one-line description (str)

Modules whose name starts with an underscore are helpers, not palettes.
"""

from functools import lru_cache
import importlib
import pkgutil
from typing import Sequence
import numpy as np

from ._channels import to_bytes

TABLE_SIZE = 256


def _discover():
    """Scan index_palettes/*.py and return a {name: module} dict."""
    modules = {}
    for _, modname, ispkg in pkgutil.iter_modules(__path__):
        if ispkg or modname.startswith("_"):
            continue
        modules[modname] = importlib.import_module(f"{__name__}.{modname}")
    return modules

_MODULES = _discover()

# ------------------------------------------------------------
# Public API
# ------------------------------------------------------------
def list_palettes():
    """Names of the available palettes."""
    return sorted(_MODULES.keys())


def describe_palette(name: str) -> str:
    """Module description, or its docstring's first line."""
    mod = _module(name)
    desc = getattr(mod, "description", None)
    if desc:
        return desc
    doc = (mod.__doc__ or "").strip()
    return doc.splitlines()[0] if doc else name


@lru_cache(maxsize=None)
def get_palette(name: str = "gray", *params: float) -> np.ndarray:
    """
    Return the uint8[256,3] table of the named palette.
    - try module.forward_lut(*params) first
    - then look for a module.LUT ndarray (takes no params)
    The returned array is shared between callers and therefore read-only.
    """
    mod = _module(name)

    if hasattr(mod, "forward_lut") and callable(mod.forward_lut):
        lut = np.asarray(mod.forward_lut(*params), dtype=np.uint8)
    elif hasattr(mod, "LUT"):
        if params:
            raise TypeError(f"{name} takes no parameters, got {params}")
        lut = mod.LUT
        # light type check
        if not (isinstance(lut, np.ndarray) and lut.shape == (TABLE_SIZE, 3)):
            raise TypeError(f"{name}.LUT must be uint8[256,3] ndarray")
        lut = lut.astype(np.uint8)
    else:
        raise AttributeError(f"{name} must expose forward_lut() or LUT ndarray.")

    if lut.shape != (TABLE_SIZE, 3):
        raise TypeError(f"{name} produced shape {lut.shape}, expected (256, 3)")
    lut.setflags(write=False)
    return lut


def make_lookup_table(colors: Sequence[Sequence[float]]) -> np.ndarray:
    """Build a uint8[256,3] table from 256 colors with channels in 0..1."""
    rgb = np.asarray(colors, dtype=np.float64)
    if rgb.shape != (TABLE_SIZE, 3):
        raise ValueError(f"expected 256 RGB colors, got shape {rgb.shape}")
    return to_bytes(rgb)


def _module(name: str):
    if name not in _MODULES:
        raise ValueError(f"Unknown palette '{name}'. Available: {list_palettes()}")
    return _MODULES[name]
