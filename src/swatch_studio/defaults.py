"""Central place for swatch-studio default settings."""

# Swatch
DEFAULT_SWATCH_SIZE: int = 8
DEFAULT_LIGHT_ANCHOR: tuple[int, int, int] = (240, 230, 220)
DEFAULT_DARK_ANCHOR: tuple[int, int, int] = (20, 20, 40)

# Curve parameters (slider ranges are what the editor offers)
DEFAULT_LINEAR_FACTOR: float = 1.0
LINEAR_FACTOR_RANGE: tuple[float, float] = (0.1, 2.0)
DEFAULT_CURVE_EXPONENT: float = 2.0
CURVE_EXPONENT_RANGE: tuple[float, float] = (0.5, 5.0)
DEFAULT_BEZIER_POINTS: tuple[float, float, float, float] = (0.0, 0.0, 1.0, 1.0)

# Hue shifting
COLD_HUE: float = 240.0  # blue
WARM_HUE: float = 30.0  # orange
MAX_CHROMA_BOOST: float = 0.15  # OkLCh chroma units at full strength
GAMUT_SEARCH_STEPS: int = 16
GAMUT_QUANT: float = 1e-4
GAMUT_CHROMA_CEILING: float = 0.5  # above any sRGB color in OkLCh

# Two-color OkLCh ramps
DEFAULT_RAMP_ROTATION: float = 0.0  # extra hue degrees, editor offers -180..180
DEFAULT_CHROMA_BOOST: float = 1.0  # editor offers 0..2

# Palette list thumbnails
PREVIEW_SAMPLES: int = 4
