"""Two-color blending and one-color lightness extrapolation.

``blend`` mixes two colors at ``t`` in [0, 1]; ``shift`` pushes a single
color toward white (positive direction) or black (negative direction).
The magnitude of ``direction`` is not capped at 1, so ramps can extrapolate
past their outermost anchors.
"""

from __future__ import annotations

from .colorspace import (
    BLACK,
    WHITE,
    ColorRGBA,
    ColorSpaceKind,
    normalize_hue,
    oklab_to_rgb,
    oklch_to_rgb,
    rgb_to_oklab,
    rgb_to_oklch,
)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _clamp01(x: float) -> float:
    return 0.0 if x <= 0.0 else 1.0 if x >= 1.0 else x


def lerp_hue(h1: float, h2: float, t: float, extra_rotation: float = 0.0) -> float:
    """Interpolate hue angles (degrees) along the shorter arc.

    ``extra_rotation`` degrees are added to the arc, so a positive value sweeps
    through more hues on the way from ``h1`` to ``h2``.
    """
    h1, h2 = normalize_hue(h1), normalize_hue(h2)
    d = h2 - h1
    if d > 180.0:
        d -= 360.0
    elif d <= -180.0:
        d += 360.0
    return normalize_hue(h1 + (d + extra_rotation) * t)


# --- blending ----------------------------------------------------------------


def _blend_rgb(c1: ColorRGBA, c2: ColorRGBA, t: float) -> ColorRGBA:
    return ColorRGBA(
        _lerp(c1.r, c2.r, t),
        _lerp(c1.g, c2.g, t),
        _lerp(c1.b, c2.b, t),
        _lerp(c1.a, c2.a, t),
    )


def _blend_oklab(c1: ColorRGBA, c2: ColorRGBA, t: float) -> ColorRGBA:
    l1, a1, b1 = rgb_to_oklab(c1)
    l2, a2, b2 = rgb_to_oklab(c2)
    return oklab_to_rgb(
        _lerp(l1, l2, t), _lerp(a1, a2, t), _lerp(b1, b2, t), _lerp(c1.a, c2.a, t)
    )


def _blend_oklch(c1: ColorRGBA, c2: ColorRGBA, t: float) -> ColorRGBA:
    l1, ch1, h1 = rgb_to_oklch(c1)
    l2, ch2, h2 = rgb_to_oklch(c2)
    return oklch_to_rgb(
        _lerp(l1, l2, t), _lerp(ch1, ch2, t), lerp_hue(h1, h2, t), _lerp(c1.a, c2.a, t)
    )


_BLENDERS = {
    ColorSpaceKind.RGB: _blend_rgb,
    ColorSpaceKind.OKLAB: _blend_oklab,
    ColorSpaceKind.OKLCH: _blend_oklch,
}


def blend(c1: ColorRGBA, c2: ColorRGBA, t: float, space: ColorSpaceKind) -> ColorRGBA:
    """Mix ``c1`` → ``c2``; t=0 gives ``c1`` and t=1 gives ``c2`` exactly."""
    t = _clamp01(t) if t == t else 0.0
    if t == 0.0:
        return c1
    if t == 1.0:
        return c2
    return _BLENDERS[space](c1, c2, t)


# --- extrapolation -----------------------------------------------------------


def _shift_rgb(ref: ColorRGBA, direction: float) -> ColorRGBA:
    target = BLACK if direction < 0.0 else WHITE
    # past the pole every channel already sits on the target
    t = min(abs(direction), 1.0)
    return ColorRGBA(
        _lerp(ref.r, target.r, t),
        _lerp(ref.g, target.g, t),
        _lerp(ref.b, target.b, t),
        ref.a,
    )


def _shift_oklab(ref: ColorRGBA, direction: float) -> ColorRGBA:
    L, a, b = rgb_to_oklab(ref)
    return oklab_to_rgb(_clamp01(L + direction), a, b, ref.a)


def _shift_oklch(ref: ColorRGBA, direction: float) -> ColorRGBA:
    L, c, h = rgb_to_oklch(ref)
    return oklch_to_rgb(_clamp01(L + direction), c, h, ref.a)


_SHIFTERS = {
    ColorSpaceKind.RGB: _shift_rgb,
    ColorSpaceKind.OKLAB: _shift_oklab,
    ColorSpaceKind.OKLCH: _shift_oklch,
}


def shift(ref: ColorRGBA, direction: float, space: ColorSpaceKind) -> ColorRGBA:
    """Lighten (direction > 0) or darken (direction < 0) ``ref`` by |direction|."""
    if direction == 0.0 or direction != direction:
        return ref
    return _SHIFTERS[space](ref, direction)


__all__ = ["blend", "lerp_hue", "shift"]
