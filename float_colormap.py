#!/usr/bin/env python3
"""
Float Index Color Map: transform scalar float values to display colors.

Two steps:
  1. A quantizer clips the value to [vmin, vmax] and maps it to an index 0..255.
  2. The index is looked up in a 256-entry color table (an "index color model").

Tables come from the `index_palettes` package (gray, jet, hue, prism,
red_white_blue, viridis, ...) or from any 256 RGB(A) colors supplied by the
caller. Listeners registered on a color map are called whenever its value
range or its table changes.

Usage:
  # List the available palettes:
  python float_colormap.py list

  # Print index and color for some values:
  python float_colormap.py lookup 0 25 50 100 --vmin 0 --vmax 100 [--palette NAME] [--params P ...]
"""

from __future__ import annotations
import struct
import threading
import argparse
from typing import Callable, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import ArrayLike
from PIL import Image, ImagePalette

from float_byte_map import FloatByteMap, ValueQuantizer
from index_palettes import TABLE_SIZE, describe_palette, get_palette, list_palettes

# ---------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------

class InvalidPaletteError(ValueError):
    """Indices 0 and 255 are not both valid lookup targets of a palette."""


class IndexOutOfRangeError(IndexError):
    """A color table was queried outside [0,255]; a programming error."""

# ---------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------

class RGB(NamedTuple):
    red: int
    green: int
    blue: int

    def to_argb(self, alpha: int = 0xFF) -> int:
        """Pack as 0xAARRGGBB."""
        return (alpha & 0xFF) << 24 | self.red << 16 | self.green << 8 | self.blue

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

# ---------------------------------------------------------------------
# Color lookup table
# ---------------------------------------------------------------------

def _check_entries(colors: ArrayLike) -> np.ndarray:
    """Validate 256 RGB or RGBA rows and return them as read-only uint8[256,4]."""
    arr = np.asarray(colors)
    if arr.ndim != 2 or arr.shape[1] not in (3, 4):
        raise InvalidPaletteError(f"palette must have shape (256, 3) or (256, 4), got {arr.shape}")
    n = arr.shape[0]
    if n == 0:
        raise InvalidPaletteError("0 is not a valid index of an empty palette")
    if n < TABLE_SIZE:
        raise InvalidPaletteError(f"255 is not a valid index of a palette with {n} entries")
    if n > TABLE_SIZE:
        raise InvalidPaletteError(f"palette must have exactly 256 entries, got {n}")
    if not (np.issubdtype(arr.dtype, np.integer) or np.issubdtype(arr.dtype, np.floating)):
        raise InvalidPaletteError(f"palette channels must be numeric, got dtype {arr.dtype}")
    if np.issubdtype(arr.dtype, np.floating) and not np.array_equal(arr, np.floor(arr)):
        raise InvalidPaletteError("palette channels must be integers in [0,255]")
    if arr.min() < 0 or arr.max() > 255:
        raise InvalidPaletteError("palette channels must be integers in [0,255]")

    entries = np.full((TABLE_SIZE, 4), 0xFF, np.uint8)
    entries[:, : arr.shape[1]] = arr.astype(np.uint8)
    entries.setflags(write=False)
    return entries


def _plane(p) -> np.ndarray:
    if isinstance(p, (bytes, bytearray, memoryview)):
        return np.frombuffer(p, np.uint8)
    return np.asarray(p)


class ColorLookupTable:
    """Exactly 256 colors, indexed 0..255, with an alpha plane (opaque by default).

    Contents are never mutated in place; `replace_all` swaps them wholesale.
    """

    def __init__(self, colors: Union[ColorLookupTable, ArrayLike]):
        if isinstance(colors, ColorLookupTable):
            self._entries = colors._entries
        else:
            self._entries = _check_entries(colors)

    @classmethod
    def from_planes(
        cls,
        reds: Sequence[int],
        greens: Sequence[int],
        blues: Sequence[int],
        alphas: Optional[Sequence[int]] = None,
    ) -> ColorLookupTable:
        """Build from parallel channel planes (bytes or int sequences)."""
        planes = [reds, greens, blues] + ([alphas] if alphas is not None else [])
        lengths = {len(p) for p in planes}
        if len(lengths) != 1:
            raise InvalidPaletteError(f"channel planes differ in length: {sorted(lengths)}")
        return cls(np.stack([_plane(p) for p in planes], axis=1))

    @classmethod
    def from_palette(cls, name: str, *params: float) -> ColorLookupTable:
        """Synthesize a named palette from index_palettes."""
        try:
            lut = get_palette(name, *params)
        except (ValueError, TypeError) as e:
            raise InvalidPaletteError(str(e)) from e
        return cls(lut)

    # -----------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------
    def get(self, index: int) -> RGB:
        r, g, b, _ = self._entries[self._check_index(index)]
        return RGB(int(r), int(g), int(b))

    def get_argb(self, index: int) -> int:
        r, g, b, a = (int(c) for c in self._entries[self._check_index(index)])
        return a << 24 | r << 16 | g << 8 | b

    def reds(self) -> bytes:
        return self._entries[:, 0].tobytes()

    def greens(self) -> bytes:
        return self._entries[:, 1].tobytes()

    def blues(self) -> bytes:
        return self._entries[:, 2].tobytes()

    def alphas(self) -> bytes:
        return self._entries[:, 3].tobytes()

    def to_array(self, alpha: bool = False) -> np.ndarray:
        """Writable uint8 copy, shape (256,3) or (256,4)."""
        return self._entries[:, : 4 if alpha else 3].copy()

    def to_bytes(self) -> bytes:
        """Interleaved RGB bytes, 768 long."""
        return self._entries[:, :3].tobytes()

    # -----------------------------------------------------------------
    # Replacement
    # -----------------------------------------------------------------
    def replace_all(self, colors: Union[ColorLookupTable, ArrayLike]) -> None:
        """Swap in all 256 entries of colors at once."""
        self._entries = ColorLookupTable(colors)._entries

    # -----------------------------------------------------------------
    # Pillow adapter
    # -----------------------------------------------------------------
    def to_image_palette(self) -> ImagePalette.ImagePalette:
        """Return an RGB ImagePalette for "P" mode images."""
        return ImagePalette.ImagePalette("RGB", self.to_bytes())

    @classmethod
    def from_image(cls, img: Image.Image) -> ColorLookupTable:
        """Read the 256-entry palette of a "P" mode image."""
        if img.mode != "P":
            raise InvalidPaletteError(f"image mode must be 'P', got '{img.mode}'")
        pal = img.getpalette() or []
        if len(pal) < 3 * TABLE_SIZE:
            raise InvalidPaletteError(f"255 is not a valid index of a palette with {len(pal) // 3} entries")
        return cls(np.asarray(pal[: 3 * TABLE_SIZE], np.int64).reshape(TABLE_SIZE, 3))

    # -----------------------------------------------------------------
    @staticmethod
    def _check_index(index: int) -> int:
        if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)):
            raise IndexOutOfRangeError(f"color index must be an integer, got {index!r}")
        if not 0 <= index < TABLE_SIZE:
            raise IndexOutOfRangeError(f"color index {index} outside [0,255]")
        return int(index)

    def __len__(self) -> int:
        return TABLE_SIZE

    def __eq__(self, other) -> bool:
        if not isinstance(other, ColorLookupTable):
            return NotImplemented
        return np.array_equal(self._entries, other._entries)

    __hash__ = None

    def __repr__(self) -> str:
        return f"ColorLookupTable(first={self.get(0).hex}, last={self.get(255).hex})"


Palette = Union[ColorLookupTable, ArrayLike, str, Tuple]


def as_lookup_table(palette: Palette) -> ColorLookupTable:
    """Coerce a table, 256 colors, a palette name or a (name, *params) tuple."""
    if isinstance(palette, str):
        return ColorLookupTable.from_palette(palette)
    if isinstance(palette, tuple) and palette and isinstance(palette[0], str):
        return ColorLookupTable.from_palette(*palette)
    return ColorLookupTable(palette)

# ---------------------------------------------------------------------
# Change notification
# ---------------------------------------------------------------------

ColorMapListener = Callable[["FloatIndexColorMap"], None]


class ColorMapListeners:
    """Ordered listeners, each called once per fire().

    fire() iterates over a snapshot, so listeners added or removed from a
    callback take effect from the next fire().
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._listeners: list[ColorMapListener] = []

    def add(self, listener: ColorMapListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove(self, listener: ColorMapListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def fire(self, source: FloatIndexColorMap) -> None:
        with self._lock:
            snapshot = tuple(self._listeners)
        for listener in snapshot:
            listener(source)

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener) -> bool:
        return listener in self._listeners

# ---------------------------------------------------------------------
# Float -> index -> color
# ---------------------------------------------------------------------

def _same_bits(a: Tuple[float, float], b: Tuple[float, float]) -> bool:
    return struct.pack("<dd", *a) == struct.pack("<dd", *b)


class FloatIndexColorMap:
    """Maps floats to colors through a quantizer and a 256-entry color table.

    The value range and the table are guarded by one lock; listeners are
    notified while it is held, after the change is applied, so they always
    see the new state.
    """

    def __init__(self, quantizer: ValueQuantizer, palette: Palette = "gray"):
        self._table = as_lookup_table(palette)
        self._fbm = quantizer
        self._vmin = float(quantizer.get_clip_min())
        self._vmax = float(quantizer.get_clip_max())
        self._lock = threading.RLock()
        self._listeners = ColorMapListeners()

    # -----------------------------------------------------------------
    # Value -> index / color
    # -----------------------------------------------------------------
    def get_index(self, value: float) -> int:
        """Index in [0,255] for value."""
        return self._fbm.map(value)

    def get_color(self, value: float) -> RGB:
        with self._lock:
            return self._table.get(self.get_index(value))

    def get_argb(self, value: float) -> int:
        """Color for value as 0xAARRGGBB."""
        with self._lock:
            return self._table.get_argb(self.get_index(value))

    # -----------------------------------------------------------------
    # Value range
    # -----------------------------------------------------------------
    def get_min_value(self) -> float:
        with self._lock:
            return self._fbm.get_clip_min()

    def get_max_value(self) -> float:
        with self._lock:
            return self._fbm.get_clip_max()

    def get_value_range(self) -> Tuple[float, float]:
        with self._lock:
            return self._fbm.get_clip_min(), self._fbm.get_clip_max()

    def set_value_range(self, vmin: float, vmax: float) -> None:
        """Set the range of values mapped onto the table; values outside are clipped.

        Listeners are notified only if (vmin, vmax) differs from the current range.
        """
        vmin, vmax = float(vmin), float(vmax)
        with self._lock:
            self._fbm.set_clips(vmin, vmax)
            if not _same_bits((vmin, vmax), (self._vmin, self._vmax)):
                self._vmin, self._vmax = vmin, vmax
                self._listeners.fire(self)

    # -----------------------------------------------------------------
    # Color table
    # -----------------------------------------------------------------
    def get_color_model(self) -> ColorLookupTable:
        """Copy of the current color table."""
        with self._lock:
            return ColorLookupTable(self._table)

    def set_color_model(self, palette: Palette) -> None:
        """Replace the color table and notify listeners, even if nothing changed."""
        table = as_lookup_table(palette)
        with self._lock:
            self._table.replace_all(table)
            self._listeners.fire(self)

    # -----------------------------------------------------------------
    # Listeners
    # -----------------------------------------------------------------
    def add_listener(self, listener: ColorMapListener) -> None:
        """Register listener, then call it once with this color map."""
        with self._lock:
            self._listeners.add(listener)
            listener(self)

    def remove_listener(self, listener: ColorMapListener) -> None:
        self._listeners.remove(listener)

    def __repr__(self) -> str:
        vmin, vmax = self.get_value_range()
        return f"FloatIndexColorMap(vmin={vmin!r}, vmax={vmax!r}, table={self._table!r})"

# ---------------------------------------------------------------------
# CLI: Argument parsing and main
# ---------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Float index color map: map float values to palette colors."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List the available palettes")

    look = sub.add_parser("lookup", help="Print index and color of each value")
    look.add_argument("values", nargs="+", type=float, help="Values to map")
    look.add_argument(
        "--palette",
        default="gray",
        choices=list_palettes(),
        help="Name of color palette",
    )
    look.add_argument(
        "--params",
        nargs="*",
        type=float,
        default=[],
        help="Palette parameters, e.g. gray levels g0 g255 or hues h0 h255",
    )
    look.add_argument("--vmin", type=float, default=0.0, help="Value mapped to index 0")
    look.add_argument("--vmax", type=float, default=1.0, help="Value mapped to index 255")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "list":
        for name in list_palettes():
            print(f"{name:<16} {describe_palette(name)}")
    elif args.command == "lookup":
        try:
            cmap = FloatIndexColorMap(
                FloatByteMap(args.vmin, args.vmax), (args.palette, *args.params)
            )
        except ValueError as e:
            # bad --params for the palette, or non-finite --vmin/--vmax
            parser.error(str(e))
        for v in args.values:
            print(f"{v:g}\t{cmap.get_index(v):3d}\t{cmap.get_color(v).hex}\t0x{cmap.get_argb(v):08X}")


if __name__ == "__main__":
    main()
