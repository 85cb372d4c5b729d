# swatch.py – one color ramp built from positioned anchor colors
#
# Position 0.0 is the bright end and 1.0 the dark end. Samples before the
# first anchor are extrapolated lighter, samples after the last one darker.

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence, Union

from .blend import blend, shift
from .colorspace import BLACK, ColorRGBA, ColorSpaceKind
from .curves import Curve, Linear
from .defaults import DEFAULT_DARK_ANCHOR, DEFAULT_LIGHT_ANCHOR, DEFAULT_SWATCH_SIZE

log = logging.getLogger(__name__)


def clamp_position(position: float) -> float | None:
    """Clamp to [0, 1]; NaN has no meaningful place on the ramp and gives None."""
    p = float(position)
    if math.isnan(p):
        return None
    return 0.0 if p <= 0.0 else 1.0 if p >= 1.0 else p


@dataclass(frozen=True)
class ControlPoint:
    id: int
    position: float
    color: ColorRGBA

    def __post_init__(self) -> None:
        p = clamp_position(self.position)
        if p is None:
            raise ValueError(f"control point {self.id} has a NaN position")
        object.__setattr__(self, "position", p)


PointSpec = Union[ControlPoint, tuple[float, ColorRGBA]]


def _default_points() -> list[ControlPoint]:
    return [
        ControlPoint(0, 0.0, ColorRGBA(*DEFAULT_LIGHT_ANCHOR)),
        ControlPoint(1, 1.0, ColorRGBA(*DEFAULT_DARK_ANCHOR)),
    ]


@dataclass
class Swatch:
    size: int = DEFAULT_SWATCH_SIZE
    _points: list[ControlPoint] = field(default_factory=_default_points, repr=False)
    curve: Curve = field(default_factory=Linear)
    color_space: ColorSpaceKind = ColorSpaceKind.RGB
    _next_id: int = field(default=2, repr=False)

    def __post_init__(self) -> None:
        ids = [cp.id for cp in self._points]
        if len(set(ids)) != len(ids):
            raise ValueError("control point ids must be unique")
        self._next_id = max([self._next_id - 1, *ids]) + 1
        self._sort()

    @classmethod
    def from_points(
        cls,
        size: int,
        points: Iterable[PointSpec],
        curve: Curve | None = None,
        color_space: ColorSpaceKind = ColorSpaceKind.RGB,
    ) -> Swatch:
        """Build a swatch from ControlPoints and/or (position, color) pairs."""
        given: list[ControlPoint] = []
        loose: list[tuple[float, ColorRGBA]] = []
        for p in points:
            if isinstance(p, ControlPoint):
                given.append(p)
            else:
                loose.append((p[0], p[1]))
        sw = cls(size, given, curve if curve is not None else Linear(), color_space, 0)
        for pos, color in loose:
            sw.add_control_point(pos, color)
        return sw

    def copy(self) -> Swatch:
        return copy.deepcopy(self)

    @property
    def control_points(self) -> tuple[ControlPoint, ...]:
        return tuple(self._points)

    @property
    def next_id(self) -> int:
        return self._next_id

    def _sort(self) -> None:
        # (position, id) is a total order: no NaN can get here
        self._points.sort(key=lambda cp: (cp.position, cp.id))

    # ---- sampling ----

    def generate_colors(self, size: int | None = None) -> list[ColorRGBA]:
        n = self.size if size is None else int(size)
        if n < 1:
            return []
        if n == 1:
            return [self.sample(0.5)]
        return [self.sample(i / (n - 1)) for i in range(n)]

    def sample(self, t: float) -> ColorRGBA:
        """Color at ramp position ``t`` (0 = bright end, 1 = dark end)."""
        pts = self._points
        if not pts:
            return BLACK
        if len(pts) == 1:
            return self._sample_single(pts[0], t)

        first, last = pts[0], pts[-1]
        if t < first.position:
            return self._extrapolate_before(t, first)
        if t > last.position:
            return self._extrapolate_after(t, last)
        return self._interpolate_between(t)

    def _sample_single(self, cp: ControlPoint, t: float) -> ColorRGBA:
        if t < cp.position:
            d = self.curve.sample(min(cp.position - t, 1.0))
            return shift(cp.color, d, self.color_space)
        if t > cp.position:
            d = self.curve.sample(min(t - cp.position, 1.0))
            return shift(cp.color, -d, self.color_space)
        return cp.color

    def _extrapolate_before(self, t: float, first: ControlPoint) -> ColorRGBA:
        region = first.position
        if region <= 0.0:
            return first.color
        d = self.curve.sample((first.position - t) / region)
        return shift(first.color, d, self.color_space)

    def _extrapolate_after(self, t: float, last: ControlPoint) -> ColorRGBA:
        region = 1.0 - last.position
        if region <= 0.0:
            return last.color
        d = self.curve.sample((t - last.position) / region)
        return shift(last.color, -d, self.color_space)

    def _interpolate_between(self, t: float) -> ColorRGBA:
        before, after = self._bracket(t)
        segment = after.position - before.position
        local_t = (t - before.position) / segment if segment > 0.0 else 0.0
        return blend(before.color, after.color, self.curve.sample(local_t), self.color_space)

    def _bracket(self, t: float) -> tuple[ControlPoint, ControlPoint]:
        pts = self._points
        for cur, nxt in zip(pts, pts[1:]):
            if cur.position <= t <= nxt.position:
                return cur, nxt
        return pts[-1], pts[-1]

    # ---- control point management ----

    def add_control_point(self, position: float, color: ColorRGBA) -> int | None:
        """Insert an anchor and return its id (None if position is NaN)."""
        p = clamp_position(position)
        if p is None:
            log.warning("ignoring control point with NaN position")
            return None
        cp_id = self._next_id
        self._next_id += 1
        self._points.append(ControlPoint(cp_id, p, color))
        self._sort()
        return cp_id

    def remove_control_point(self, index: int) -> None:
        if 0 <= index < len(self._points):
            del self._points[index]
        else:
            log.debug("remove_control_point: index %d out of range", index)

    def remove_control_point_by_id(self, cp_id: int) -> None:
        self._points = [cp for cp in self._points if cp.id != cp_id]

    def set_control_point_color(self, index: int, color: ColorRGBA) -> None:
        if 0 <= index < len(self._points):
            self._points[index] = replace(self._points[index], color=color)

    def set_control_point_color_by_id(self, cp_id: int, color: ColorRGBA) -> None:
        index = self.find_control_point_index_by_id(cp_id)
        if index is not None:
            self.set_control_point_color(index, color)

    def set_control_point_position(self, index: int, position: float) -> None:
        p = clamp_position(position)
        if p is None:
            log.warning("ignoring NaN position for control point #%d", index)
            return
        if 0 <= index < len(self._points):
            self._points[index] = replace(self._points[index], position=p)
            self._sort()

    def set_control_point_position_by_id(self, cp_id: int, position: float) -> None:
        p = clamp_position(position)
        if p is None:
            log.warning("ignoring NaN position for control point id %d", cp_id)
            return
        index = self.find_control_point_index_by_id(cp_id)
        if index is not None:
            self._points[index] = replace(self._points[index], position=p)
            self._sort()

    def swap_control_points_by_id(self, id_a: int, id_b: int) -> None:
        """Exchange the positions of two anchors; colors stay with their ids."""
        ia = self.find_control_point_index_by_id(id_a)
        ib = self.find_control_point_index_by_id(id_b)
        if ia is None or ib is None:
            return
        a, b = self._points[ia], self._points[ib]
        self._points[ia] = replace(a, position=b.position)
        self._points[ib] = replace(b, position=a.position)
        self._sort()

    def find_control_point_index_by_id(self, cp_id: int) -> int | None:
        return next((i for i, cp in enumerate(self._points) if cp.id == cp_id), None)

    def has_control_point_at(self, position: float, tolerance: float) -> int | None:
        """Index of the first anchor within ``tolerance`` of ``position``."""
        return next(
            (
                i
                for i, cp in enumerate(self._points)
                if abs(cp.position - position) <= tolerance
            ),
            None,
        )


def anchor_triples(points: Sequence[ControlPoint]) -> list[tuple[int, float, ColorRGBA]]:
    return [(cp.id, cp.position, cp.color) for cp in points]


__all__ = ["ControlPoint", "Swatch", "anchor_triples", "clamp_position"]
