# colorspace.py – 8-bit sRGB <-> OkLab <-> OkLCh
#   - IEC 61966-2-1 companding (linear toe, 2.4 power segment)
#   - OkLab constants from Björn Ottosson's reference implementation
#   - every path back to 8 bits rounds half up and clamps linear RGB first

from __future__ import annotations

import enum
import logging
import math
import string
from dataclasses import dataclass

import numpy as np
from coloraide import Color as CAColor

log = logging.getLogger(__name__)

Lab = tuple[float, float, float]
LCh = tuple[float, float, float]

FIT_SRGB = {"method": "raytrace"}  # gamut-fit for parsed CSS colors


# --- 1) 8-bit color value ----------------------------------------------------


def to_u8(v: float) -> int:
    """Round half up and clamp to 0..255."""
    if v != v:  # NaN
        return 0
    if not math.isfinite(v):
        return 255 if v > 0 else 0
    return int(min(255.0, max(0.0, math.floor(v + 0.5))))


@dataclass(frozen=True)
class ColorRGBA:
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for ch in ("r", "g", "b", "a"):
            object.__setattr__(self, ch, to_u8(getattr(self, ch)))

    @property
    def rgb(self) -> tuple[int, int, int]:
        return self.r, self.g, self.b

    def with_alpha(self, a: int) -> ColorRGBA:
        return ColorRGBA(self.r, self.g, self.b, a)

    def to_hex(self, alpha: bool = False) -> str:
        s = f"#{self.r:02x}{self.g:02x}{self.b:02x}"
        return s + f"{self.a:02x}" if alpha else s

    @classmethod
    def from_hex(cls, s: str) -> ColorRGBA:
        """Accept '#rgb', '#rrggbb' or '#rrggbbaa' (leading '#' optional)."""
        raw = (s or "").strip().lstrip("#")
        if len(raw) == 3 and all(c in string.hexdigits for c in raw):
            raw = "".join(ch * 2 for ch in raw)
        if len(raw) not in (6, 8) or not all(c in string.hexdigits for c in raw):
            raise ValueError(f"invalid hex color: {s!r}")
        chans = [int(raw[i : i + 2], 16) for i in range(0, len(raw), 2)]
        return cls(*chans)

    @classmethod
    def from_string(cls, s: str) -> ColorRGBA:
        """Parse any CSS color string, fitted into the sRGB gamut."""
        try:
            c = CAColor(s.strip())
        except (ValueError, TypeError) as exc:
            raise ValueError(f"invalid color: {s!r}") from exc
        c = c.convert("srgb").fit(**FIT_SRGB)
        r, g, b = (float(v) for v in c.coords())
        alpha = float(c["alpha"])
        if math.isnan(alpha):
            alpha = 1.0
        return cls(r * 255.0, g * 255.0, b * 255.0, alpha * 255.0)

    def __str__(self) -> str:
        return self.to_hex(alpha=self.a != 255)


BLACK = ColorRGBA(0, 0, 0)
WHITE = ColorRGBA(255, 255, 255)


class ColorSpaceKind(enum.Enum):
    RGB = "rgb"
    OKLAB = "oklab"
    OKLCH = "oklch"

    @property
    def label(self) -> str:
        return _SPACE_LABELS[self]


_SPACE_LABELS = {
    ColorSpaceKind.RGB: "RGB",
    ColorSpaceKind.OKLAB: "OkLab",
    ColorSpaceKind.OKLCH: "OkLCh",
}


# --- 2) IEC 61966-2-1 companding ---------------------------------------------
_GAMMA = 2.4


def srgb_to_linear(x: float) -> float:
    if x <= 0.04045:
        return x / 12.92
    return ((x + 0.055) / 1.055) ** _GAMMA


def linear_to_srgb(x: float) -> float:
    if x <= 0.0031308:
        return x * 12.92
    return 1.055 * x ** (1.0 / _GAMMA) - 0.055


# --- 3) OkLab matrices -------------------------------------------------------
_RGB_LMS = np.array(
    [
        [0.4122214708, 0.5363325363, 0.0514459929],
        [0.2119034982, 0.6806995451, 0.1073969566],
        [0.0883024619, 0.2817188376, 0.6299787005],
    ]
)
_LMS_LAB = np.array(
    [
        [0.2104542553, 0.7936177850, -0.0040720468],
        [1.9779984951, -2.4285922050, 0.4505937099],
        [0.0259040371, 0.7827717662, -0.8086757660],
    ]
)
_LAB_LMS = np.array(
    [
        [1.0, 0.3963377774, 0.2158037573],
        [1.0, -0.1055613458, -0.0638541728],
        [1.0, -0.0894841775, -1.2914855480],
    ]
)
_LMS_RGB = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ]
)


def rgb_to_oklab(color: ColorRGBA) -> Lab:
    lrgb = np.array([srgb_to_linear(v / 255.0) for v in color.rgb])
    lms_ = np.cbrt(_RGB_LMS @ lrgb)
    L, a, b = _LMS_LAB @ lms_
    return float(L), float(a), float(b)


def oklab_to_linear_rgb(L: float, a: float, b: float) -> tuple[float, float, float]:
    """OkLab → linear sRGB without clamping (may leave [0, 1] when out of gamut)."""
    lms = (_LAB_LMS @ np.array([L, a, b])) ** 3
    r, g, bl = _LMS_RGB @ lms
    return float(r), float(g), float(bl)


def oklab_to_rgb(L: float, a: float, b: float, alpha: int = 255) -> ColorRGBA:
    lrgb = np.clip(oklab_to_linear_rgb(L, a, b), 0.0, 1.0)
    r, g, bl = (linear_to_srgb(float(v)) * 255.0 for v in lrgb)
    return ColorRGBA(r, g, bl, alpha)


# --- 4) OkLab <-> OkLCh ------------------------------------------------------


def normalize_hue(h: float) -> float:
    h = h % 360.0
    # -1e-15 % 360 == 360.0 in floating point
    return 0.0 if h >= 360.0 else h


def oklab_to_oklch(L: float, a: float, b: float) -> LCh:
    c = math.hypot(a, b)
    h = normalize_hue(math.degrees(math.atan2(b, a)))
    return L, c, h


def oklch_to_oklab(L: float, c: float, h: float) -> Lab:
    rad = math.radians(h)
    return L, c * math.cos(rad), c * math.sin(rad)


def rgb_to_oklch(color: ColorRGBA) -> LCh:
    return oklab_to_oklch(*rgb_to_oklab(color))


def oklch_to_rgb(L: float, c: float, h: float, alpha: int = 255) -> ColorRGBA:
    return oklab_to_rgb(*oklch_to_oklab(L, c, h), alpha=alpha)


def parse_space(val: str | ColorSpaceKind | None) -> ColorSpaceKind:
    """Lenient name lookup ('rgb', 'OkLab', 'oklch'); unknown names fall back to RGB."""
    if isinstance(val, ColorSpaceKind):
        return val
    v = (val or "").strip().lower()
    try:
        return ColorSpaceKind(v)
    except ValueError:
        log.debug("unknown color space %r, using RGB", val)
        return ColorSpaceKind.RGB


__all__ = [
    "BLACK",
    "WHITE",
    "ColorRGBA",
    "ColorSpaceKind",
    "linear_to_srgb",
    "normalize_hue",
    "oklab_to_linear_rgb",
    "oklab_to_oklch",
    "oklab_to_rgb",
    "oklch_to_oklab",
    "oklch_to_rgb",
    "parse_space",
    "rgb_to_oklab",
    "rgb_to_oklch",
    "srgb_to_linear",
    "to_u8",
]
