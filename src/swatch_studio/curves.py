from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, replace
from typing import ClassVar, Union

from .defaults import (
    CURVE_EXPONENT_RANGE,
    DEFAULT_BEZIER_POINTS,
    DEFAULT_CURVE_EXPONENT,
    DEFAULT_LINEAR_FACTOR,
    LINEAR_FACTOR_RANGE,
)

log = logging.getLogger(__name__)


class CurveKind(enum.Enum):
    LINEAR = "linear"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"
    EASE_IN_OUT = "ease-in-out"
    BEZIER = "bezier"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_LABELS = {
    CurveKind.LINEAR: "Linear",
    CurveKind.EASE_IN: "EaseIn",
    CurveKind.EASE_OUT: "EaseOut",
    CurveKind.EASE_IN_OUT: "EaseInOut",
    CurveKind.BEZIER: "Bezier",
}


def _pow(base: float, exponent: float) -> float:
    # fractional powers of a negative base would be complex
    if base < 0.0 and not float(exponent).is_integer():
        base = 0.0
    try:
        return base ** exponent
    except (ZeroDivisionError, OverflowError):
        # 0 ** -e, or a tiny base under a large negative exponent
        odd = base < 0.0 and float(exponent) % 2.0 == 1.0
        return -math.inf if odd else math.inf


@dataclass(frozen=True)
class Linear:
    factor: float = DEFAULT_LINEAR_FACTOR
    kind: ClassVar[CurveKind] = CurveKind.LINEAR

    def sample(self, t: float) -> float:
        return t * self.factor


@dataclass(frozen=True)
class EaseIn:
    exponent: float = DEFAULT_CURVE_EXPONENT
    kind: ClassVar[CurveKind] = CurveKind.EASE_IN

    def sample(self, t: float) -> float:
        return _pow(t, self.exponent)


@dataclass(frozen=True)
class EaseOut:
    exponent: float = DEFAULT_CURVE_EXPONENT
    kind: ClassVar[CurveKind] = CurveKind.EASE_OUT

    def sample(self, t: float) -> float:
        return 1.0 - _pow(1.0 - t, self.exponent)


@dataclass(frozen=True)
class EaseInOut:
    """EaseIn on the first half, mirrored EaseOut on the second; 0.5 at t=0.5."""

    exponent: float = DEFAULT_CURVE_EXPONENT
    kind: ClassVar[CurveKind] = CurveKind.EASE_IN_OUT

    def sample(self, t: float) -> float:
        if t < 0.5:
            return 0.5 * _pow(2.0 * t, self.exponent)
        return 1.0 - 0.5 * _pow(2.0 * (1.0 - t), self.exponent)


@dataclass(frozen=True)
class Bezier:
    """1-D cubic Bezier: the four control values are outputs, not (x, y) pairs."""

    p0: float = DEFAULT_BEZIER_POINTS[0]
    p1: float = DEFAULT_BEZIER_POINTS[1]
    p2: float = DEFAULT_BEZIER_POINTS[2]
    p3: float = DEFAULT_BEZIER_POINTS[3]
    kind: ClassVar[CurveKind] = CurveKind.BEZIER

    def sample(self, t: float) -> float:
        u = 1.0 - t
        return (
            u * u * u * self.p0
            + 3.0 * u * u * t * self.p1
            + 3.0 * u * t * t * self.p2
            + t * t * t * self.p3
        )


Curve = Union[Linear, EaseIn, EaseOut, EaseInOut, Bezier]

_BY_KIND: dict[CurveKind, type] = {
    CurveKind.LINEAR: Linear,
    CurveKind.EASE_IN: EaseIn,
    CurveKind.EASE_OUT: EaseOut,
    CurveKind.EASE_IN_OUT: EaseInOut,
    CurveKind.BEZIER: Bezier,
}


def curve_from_kind(kind: CurveKind) -> Curve:
    """Curve of the given kind with default parameters."""
    return _BY_KIND[kind]()


def _clamp_param(value: float, bounds: tuple[float, float]) -> float | None:
    v = float(value)
    if math.isnan(v):
        return None
    lo, hi = bounds
    clamped = min(hi, max(lo, v))
    if clamped != v:
        log.debug("curve parameter %r clamped to %r", v, clamped)
    return clamped


def with_param(curve: Curve, value: float) -> Curve:
    """Same curve kind with a new factor/exponent, clamped to the editor range.

    NaN leaves the curve unchanged; so does any value for Bezier.
    """
    if isinstance(curve, Linear):
        v = _clamp_param(value, LINEAR_FACTOR_RANGE)
        return curve if v is None else replace(curve, factor=v)
    if isinstance(curve, (EaseIn, EaseOut, EaseInOut)):
        v = _clamp_param(value, CURVE_EXPONENT_RANGE)
        return curve if v is None else replace(curve, exponent=v)
    return curve


def curve_param(curve: Curve) -> float | None:
    if isinstance(curve, Linear):
        return curve.factor
    if isinstance(curve, (EaseIn, EaseOut, EaseInOut)):
        return curve.exponent
    return None


def parse_curve_kind(val: str | CurveKind | None) -> CurveKind:
    """Accept 'ease_in', 'EaseIn', 'ease-in'...; unknown names give LINEAR."""
    if isinstance(val, CurveKind):
        return val
    v = (val or "").strip().lower().replace("_", "-")
    for kind in CurveKind:
        if v in (kind.value, kind.label.lower()):
            return kind
    log.debug("unknown curve kind %r, using linear", val)
    return CurveKind.LINEAR


def plot_curve(curve: Curve, num_points: int) -> list[tuple[float, float]]:
    """(t, curve(t)) pairs over [0, 1] for drawing the curve preview."""
    n = max(2, int(num_points))
    return [(i / (n - 1), curve.sample(i / (n - 1))) for i in range(n)]


__all__ = [
    "Bezier",
    "Curve",
    "CurveKind",
    "EaseIn",
    "EaseInOut",
    "EaseOut",
    "Linear",
    "curve_from_kind",
    "curve_param",
    "parse_curve_kind",
    "plot_curve",
    "with_param",
]
