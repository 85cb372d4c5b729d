from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from .colorspace import BLACK, ColorRGBA, ColorSpaceKind
from .curves import Curve
from .defaults import PREVIEW_SAMPLES
from .swatch import Swatch, anchor_triples

log = logging.getLogger(__name__)

Ramp = list[ColorRGBA]


@dataclass
class Palette:
    swatches: list[Swatch] = field(default_factory=lambda: [Swatch()])

    def add_swatch(self, swatch: Swatch) -> None:
        self.swatches.append(swatch)

    def __len__(self) -> int:
        return len(self.swatches)


def sample_colors(colors: Ramp, n: int) -> Ramp:
    """Pick ``n`` evenly spaced entries (nearest index); short ramps pass through."""
    if not colors:
        return [BLACK] * n
    if len(colors) <= n:
        return list(colors)
    if n == 1:
        return [colors[len(colors) // 2]]
    last = len(colors) - 1
    return [colors[min(last, int(i / (n - 1) * last + 0.5))] for i in range(n)]


class App:
    """Palette, current selection and the generated-colors cache.

    ``_generated[i]`` always equals ``palette.swatches[i].generate_colors()``.
    Every structural operation below updates both lists in the same call;
    in-place edits of the current swatch go through :meth:`edit_current` or
    must be followed by :meth:`regenerate_current_colors`.
    """

    def __init__(self, palette: Palette | None = None) -> None:
        self.palette = palette if palette is not None and len(palette) else Palette()
        self.current_swatch_index = 0
        self._generated: list[Ramp] = []
        self.regenerate_all_colors()

    # ---- read access ----

    @property
    def generated_colors(self) -> tuple[Ramp, ...]:
        return tuple(list(r) for r in self._generated)

    def _valid(self, index: int) -> bool:
        return 0 <= index < len(self._generated)

    def colors(self, index: int | None = None) -> Ramp:
        """Cached colors of a swatch (the current one by default); [] for a bad index."""
        i = self.current_swatch_index if index is None else index
        if not self._valid(i):
            return []
        return list(self._generated[i])

    def current_swatch(self) -> Swatch:
        return self.palette.swatches[self.current_swatch_index]

    def swatch_count(self) -> int:
        return len(self.palette.swatches)

    def anchors(self, index: int | None = None) -> list[tuple[int, float, ColorRGBA]]:
        i = self.current_swatch_index if index is None else index
        if not self._valid(i):
            return []
        return anchor_triples(self.palette.swatches[i].control_points)

    def preview(self, index: int, n: int = PREVIEW_SAMPLES) -> Ramp:
        if not self._valid(index):
            return [BLACK] * n
        return sample_colors(self._generated[index], n)

    # ---- regeneration ----

    def regenerate_all_colors(self) -> None:
        self._generated = [sw.generate_colors() for sw in self.palette.swatches]

    def regenerate_current_colors(self) -> None:
        i = self.current_swatch_index
        if i < len(self._generated):
            self._generated[i] = self.palette.swatches[i].generate_colors()

    @contextmanager
    def edit_current(self) -> Iterator[Swatch]:
        """Yield the current swatch for in-place edits; regenerate on exit."""
        try:
            yield self.current_swatch()
        finally:
            self.regenerate_current_colors()

    # ---- current swatch parameters ----

    def set_size(self, size: int) -> None:
        with self.edit_current() as sw:
            sw.size = max(1, int(size))

    def set_color_space(self, space: ColorSpaceKind) -> None:
        with self.edit_current() as sw:
            sw.color_space = space

    def set_curve(self, curve: Curve) -> None:
        with self.edit_current() as sw:
            sw.curve = curve

    def pin_color(self, slot: int, color: ColorRGBA) -> int | None:
        """Turn an edited output color into an anchor at that slot's position.

        Recolors an existing anchor within half a slot, otherwise adds one.
        Returns the id of the anchor that now carries ``color``.
        """
        sw = self.current_swatch()
        n = sw.size
        if not 0 <= slot < n:
            log.debug("pin_color: slot %d outside swatch of size %d", slot, n)
            return None
        position = slot / (n - 1) if n > 1 else 0.5
        with self.edit_current() as sw:
            idx = sw.has_control_point_at(position, 0.5 / n)
            if idx is not None:
                sw.set_control_point_color(idx, color)
                return sw.control_points[idx].id
            return sw.add_control_point(position, color)

    # ---- palette structure ----

    def add_swatch(self, swatch: Swatch) -> None:
        self.palette.add_swatch(swatch)
        self._generated.append(swatch.generate_colors())

    def remove_swatch(self, index: int) -> None:
        if len(self.palette.swatches) <= 1:
            log.debug("refusing to remove the last swatch")
            return
        if not 0 <= index < len(self.palette.swatches):
            return
        del self.palette.swatches[index]
        del self._generated[index]
        if self.current_swatch_index >= len(self.palette.swatches):
            self.current_swatch_index = len(self.palette.swatches) - 1

    def move_swatch_up(self, index: int) -> None:
        if 0 < index < len(self.palette.swatches):
            self.swap_swatches(index, index - 1)

    def move_swatch_down(self, index: int) -> None:
        if 0 <= index < len(self.palette.swatches) - 1:
            self.swap_swatches(index, index + 1)

    def duplicate_swatch(self, index: int) -> None:
        if not 0 <= index < len(self.palette.swatches):
            return
        clone = self.palette.swatches[index].copy()
        self.palette.swatches.insert(index + 1, clone)
        self._generated.insert(index + 1, clone.generate_colors())

    def swap_swatches(self, a: int, b: int) -> None:
        n = len(self.palette.swatches)
        if not (0 <= a < n and 0 <= b < n) or a == b:
            return
        sws, gen = self.palette.swatches, self._generated
        sws[a], sws[b] = sws[b], sws[a]
        gen[a], gen[b] = gen[b], gen[a]
        # the selection follows the swatch, not the slot
        if self.current_swatch_index == a:
            self.current_swatch_index = b
        elif self.current_swatch_index == b:
            self.current_swatch_index = a

    def select_swatch(self, index: int) -> None:
        if 0 <= index < len(self.palette.swatches):
            self.current_swatch_index = index

    def new_palette(self) -> None:
        self.palette = Palette()
        self.current_swatch_index = 0
        self.regenerate_all_colors()


__all__ = ["App", "Palette", "sample_colors"]
