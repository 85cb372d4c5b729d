"""Print a generated ramp as hex colors.

Usage
-----
$ python -m swatch_studio                                 # default two-anchor ramp
$ python -m swatch_studio -n 6 --space oklch 0.3:#c04020
$ python -m swatch_studio --curve ease-in --param 1.5 0:#fff0d0 1:navy
"""

from __future__ import annotations

import argparse
import logging
import sys

from .colorspace import ColorRGBA, parse_space
from .curves import curve_from_kind, parse_curve_kind, with_param
from .defaults import DEFAULT_SWATCH_SIZE
from .hue_shift import HueShiftMode, HueShiftSettings, apply_hue_shift
from .swatch import Swatch

log = logging.getLogger(__name__)


def parse_anchor(text: str) -> tuple[float, ColorRGBA]:
    """'0.25:#aabbcc' → (0.25, color); any CSS color is accepted after the colon."""
    pos, sep, color = text.partition(":")
    if not sep:
        raise ValueError(f"anchor must look like POSITION:COLOR, got {text!r}")
    try:
        p = float(pos)
    except ValueError as exc:
        raise ValueError(f"bad anchor position {pos!r}") from exc
    return p, ColorRGBA.from_string(color)


def build_swatch(args: argparse.Namespace) -> Swatch:
    curve = curve_from_kind(parse_curve_kind(args.curve))
    if args.param is not None:
        curve = with_param(curve, args.param)
    space = parse_space(args.space)
    if args.anchors:
        points = [parse_anchor(a) for a in args.anchors]
        return Swatch.from_points(args.size, points, curve, space)
    return Swatch(size=args.size, curve=curve, color_space=space)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="swatch_studio", description=__doc__.splitlines()[0])
    ap.add_argument("anchors", nargs="*", metavar="POS:COLOR")
    ap.add_argument("-n", "--size", type=int, default=DEFAULT_SWATCH_SIZE)
    ap.add_argument("--space", default="rgb", help="rgb | oklab | oklch")
    ap.add_argument("--curve", default="linear")
    ap.add_argument("--param", type=float, default=None, help="factor or exponent")
    ap.add_argument("--hue-shift", type=float, default=0.0, metavar="STRENGTH")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        swatch = build_swatch(args)
    except ValueError as exc:
        log.error("%s", exc)
        return 2

    colors = swatch.generate_colors()
    if args.hue_shift:
        colors = apply_hue_shift(
            colors, HueShiftSettings(mode=HueShiftMode.OKLCH, strength=args.hue_shift)
        )
    log.debug(
        "%d anchors, %s, %s", len(swatch.control_points), swatch.curve, swatch.color_space.label
    )
    for c in colors:
        print(c)
    return 0


if __name__ == "__main__":
    sys.exit(main())
