# hue_shift.py – luminosity-driven hue shifting for finished ramps
#
# Pixel-art convention: shadows drift toward a cold hue, highlights toward a
# warm one, with optional extra chroma shaped by a luminosity curve.

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

from coloraide import Color

from .blend import lerp_hue
from .colorspace import ColorRGBA, normalize_hue, oklch_to_rgb, rgb_to_oklch
from .defaults import (
    COLD_HUE,
    DEFAULT_CHROMA_BOOST,
    DEFAULT_RAMP_ROTATION,
    GAMUT_CHROMA_CEILING,
    GAMUT_QUANT,
    GAMUT_SEARCH_STEPS,
    MAX_CHROMA_BOOST,
    WARM_HUE,
)

log = logging.getLogger(__name__)


class SaturationCurve(enum.Enum):
    """Shape of the chroma added across the dark → light range."""

    FLAT = "flat"
    LINEAR_UP = "linear-up"
    LINEAR_DOWN = "linear-down"
    EXTREMES = "extremes"
    MIDTONES = "midtones"
    DARK_SATURATED = "dark-saturated"
    LIGHT_SATURATED = "light-saturated"

    def evaluate(self, luminosity: float, strength: float) -> float:
        """Chroma to add (OkLCh units) at ``luminosity`` in [0, 1]."""
        x = luminosity
        if self is SaturationCurve.FLAT:
            shape = 0.5
        elif self is SaturationCurve.LINEAR_UP:
            shape = x
        elif self is SaturationCurve.LINEAR_DOWN:
            shape = 1.0 - x
        elif self is SaturationCurve.EXTREMES:
            shape = (abs(x - 0.5) * 2.0) ** 1.5
        elif self is SaturationCurve.MIDTONES:
            shape = 1.0 - (abs(x - 0.5) * 2.0) ** 1.5
        elif self is SaturationCurve.DARK_SATURATED:
            shape = max(0.0, 1.0 - x) ** 0.7
        else:
            shape = max(0.0, x) ** 0.7
        return shape * strength * MAX_CHROMA_BOOST


class HueShiftCurve(enum.Enum):
    """Where along the luminosity range the hue shift is strongest."""

    EXTREMES = "extremes"
    FLAT = "flat"
    LINEAR_UP = "linear-up"
    LINEAR_DOWN = "linear-down"
    SHADOWS = "shadows"
    HIGHLIGHTS = "highlights"
    MIDTONES = "midtones"

    def evaluate(self, luminosity: float) -> float:
        x = luminosity
        if self is HueShiftCurve.EXTREMES:
            return abs(x - 0.5) * 2.0
        if self is HueShiftCurve.FLAT:
            return 1.0
        if self is HueShiftCurve.LINEAR_UP:
            return x
        if self is HueShiftCurve.LINEAR_DOWN:
            return 1.0 - x
        if self is HueShiftCurve.SHADOWS:
            return max(0.0, 1.0 - x) ** 0.5
        if self is HueShiftCurve.HIGHLIGHTS:
            return max(0.0, x) ** 0.5
        return 1.0 - (abs(x - 0.5) * 2.0) ** 1.5


class HueShiftMode(enum.Enum):
    NONE = "none"
    OKLCH = "oklch"
    HSV = "hsv"


@dataclass(frozen=True)
class HueShiftSettings:
    mode: HueShiftMode = HueShiftMode.OKLCH
    strength: float = 0.3
    shift_curve: HueShiftCurve = HueShiftCurve.EXTREMES
    sat_curve: SaturationCurve = SaturationCurve.MIDTONES
    sat_strength: float = 0.0


# ---- helpers ----


def soft_clamp(value: float, max_value: float) -> float:
    """Identity up to 80% of ``max_value``, exponential compression above."""
    knee = max_value * 0.8
    if value <= knee:
        return value
    headroom = max_value * 0.2
    if headroom <= 0.0:
        return knee
    return knee + headroom * (1.0 - math.exp(-(value - knee) / headroom))


def max_chroma_for_luminosity(L: float) -> float:
    """Rough sRGB chroma ceiling: parabola peaking at L=0.6, floor of 5%."""
    dist = abs(L - 0.6) / 0.5
    return 0.35 * max(1.0 - dist * dist, 0.05)


def _hue_delta(current: float, target: float) -> float:
    d = target - current
    if d > 180.0:
        d -= 360.0
    elif d < -180.0:
        d += 360.0
    return d


def _q(x: float) -> float:
    return round(x / GAMUT_QUANT) * GAMUT_QUANT


@lru_cache(maxsize=16384)
def _in_gamut_chroma(L: float, c: float, h: float) -> float:
    """Largest chroma <= c at (L, h) inside sRGB, by bisection."""
    if Color("oklch", [L, c, h]).in_gamut("srgb"):
        return c
    lo, hi = 0.0, c
    for _ in range(GAMUT_SEARCH_STEPS):
        mid = 0.5 * (lo + hi)
        if Color("oklch", [L, mid, h]).in_gamut("srgb"):
            lo = mid
        else:
            hi = mid
    return lo


def gamut_map_oklch(L: float, c: float, h: float, alpha: float = 255) -> ColorRGBA:
    """Reduce chroma (keeping L and h) until the color fits sRGB."""
    L = min(1.0, max(0.0, L))
    c = min(GAMUT_CHROMA_CEILING, max(0.0, c))  # NaN -> 0
    if not math.isfinite(h):
        h = 0.0
    fitted = _in_gamut_chroma(_q(L), _q(c), _q(normalize_hue(h)))
    if fitted < c:
        log.debug("gamut map: chroma %.4f -> %.4f at L=%.3f h=%.1f", c, fitted, L, h)
    return oklch_to_rgb(L, fitted, h, alpha)


def _rgb_luminosity(color: ColorRGBA) -> float:
    return (0.299 * color.r + 0.587 * color.g + 0.114 * color.b) / 255.0


def _total_shift(h: float, luminosity: float, strength: float, curve: HueShiftCurve) -> float:
    cold = _hue_delta(h, COLD_HUE) * (1.0 - luminosity)
    warm = _hue_delta(h, WARM_HUE) * luminosity
    return (cold + warm) * strength * curve.evaluate(luminosity)


# ---- shifters ----


def hue_shift_oklch(
    color: ColorRGBA,
    strength: float,
    shift_curve: HueShiftCurve,
    sat_curve: SaturationCurve,
    sat_strength: float,
) -> ColorRGBA:
    L, c, h = rgb_to_oklch(color)
    new_h = normalize_hue(h + _total_shift(h, L, strength, shift_curve))
    add = sat_curve.evaluate(L, sat_strength)
    new_c = soft_clamp(c + add, max_chroma_for_luminosity(L))
    return gamut_map_oklch(L, new_c, new_h, color.a)


def hue_shift_hsv(
    color: ColorRGBA,
    strength: float,
    shift_curve: HueShiftCurve,
    sat_curve: SaturationCurve,
    sat_strength: float,
) -> ColorRGBA:
    hsv = Color("srgb", [v / 255.0 for v in color.rgb]).convert("hsv")
    h, s, v = (float(x) for x in hsv.coords())
    if math.isnan(h):
        h = 0.0
    lum = _rgb_luminosity(color)
    new_h = normalize_hue(h + _total_shift(h, lum, strength, shift_curve))
    # curve output is in OkLCh chroma units; HSV saturation spans 0..1
    new_s = soft_clamp(s + sat_curve.evaluate(lum, sat_strength) * 4.0, 1.0)
    r, g, b = Color("hsv", [new_h, new_s, v]).convert("srgb").coords()
    return ColorRGBA(r * 255.0, g * 255.0, b * 255.0, color.a)


def hue_shift_none(
    color: ColorRGBA,
    strength: float,
    shift_curve: HueShiftCurve,
    sat_curve: SaturationCurve,
    sat_strength: float,
) -> ColorRGBA:
    return color


_SHIFTERS = {
    HueShiftMode.NONE: hue_shift_none,
    HueShiftMode.OKLCH: hue_shift_oklch,
    HueShiftMode.HSV: hue_shift_hsv,
}


def apply_hue_shift(colors: Iterable[ColorRGBA], settings: HueShiftSettings) -> list[ColorRGBA]:
    fn = _SHIFTERS[settings.mode]
    return [
        fn(
            c,
            settings.strength,
            settings.shift_curve,
            settings.sat_curve,
            settings.sat_strength,
        )
        for c in colors
    ]


# ---- two-color ramps ----


def generate_ramp_color_oklch(
    c1: ColorRGBA,
    c2: ColorRGBA,
    t: float,
    hue_rotation: float = DEFAULT_RAMP_ROTATION,
    chroma_curve: SaturationCurve = SaturationCurve.MIDTONES,
    chroma_boost: float = DEFAULT_CHROMA_BOOST,
) -> ColorRGBA:
    """One color of an OkLCh ramp from ``c1`` (t=0) to ``c2`` (t=1).

    L and chroma are interpolated linearly and the hue takes the short arc
    plus ``hue_rotation`` degrees. Chroma is scaled by ``0.5 + boost/2`` and
    ``chroma_curve`` adds more on top, depending on lightness. The result is
    gamut mapped by chroma reduction.
    """
    t = min(1.0, max(0.0, t)) if t == t else 0.0
    if not math.isfinite(hue_rotation):
        hue_rotation = 0.0
    l1, ch1, h1 = rgb_to_oklch(c1)
    l2, ch2, h2 = rgb_to_oklch(c2)
    L = l1 + (l2 - l1) * t
    h = lerp_hue(h1, h2, t, hue_rotation)
    base_c = ch1 + (ch2 - ch1) * t
    c = max(0.0, base_c * (0.5 + chroma_boost * 0.5) + chroma_curve.evaluate(L, chroma_boost))
    alpha = c1.a + (c2.a - c1.a) * t
    return gamut_map_oklch(L, c, h, alpha)


def generate_ramp_oklch(
    c1: ColorRGBA,
    c2: ColorRGBA,
    n: int,
    hue_rotation: float = DEFAULT_RAMP_ROTATION,
    chroma_curve: SaturationCurve = SaturationCurve.MIDTONES,
    chroma_boost: float = DEFAULT_CHROMA_BOOST,
) -> list[ColorRGBA]:
    if n < 1:
        return []
    ts = [0.5] if n == 1 else [i / (n - 1) for i in range(n)]
    return [
        generate_ramp_color_oklch(c1, c2, t, hue_rotation, chroma_curve, chroma_boost)
        for t in ts
    ]


__all__ = [
    "HueShiftCurve",
    "HueShiftMode",
    "HueShiftSettings",
    "SaturationCurve",
    "apply_hue_shift",
    "gamut_map_oklch",
    "generate_ramp_color_oklch",
    "generate_ramp_oklch",
    "hue_shift_hsv",
    "hue_shift_none",
    "hue_shift_oklch",
    "max_chroma_for_luminosity",
    "soft_clamp",
]
