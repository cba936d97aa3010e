"""Color helpers for the kernel palette and highlight effects.

Colors are "#rrggbb" strings, which is what Tk canvases accept directly.
`None` stands for a transparent cell (drawn as the grid background).

The kernel palette is laid out in CIE LCh (Lab in polar form): the kernel
row sets the lightness, the column sets the hue, and the chroma is fixed.
Every palette color therefore keeps the same saturation, well above the
washed-out animation shadows, whatever the kernel size.
"""

from __future__ import annotations

import numpy as np

Color = str

TRANSPARENT: Color | None = None

# Each darken step scales the RGB channels by this factor.
DARKER_FACTOR = 0.7

# Color of the top-left kernel entry; its hue is where the palette starts.
KERNEL_SCALE_START = "#d7191c"
# Fixed palette chroma and the lightness range swept by the kernel rows.
# Every hue is inside the sRGB gamut at this chroma across the range.
PALETTE_CHROMA = 26.0
PALETTE_LIGHTNESS_MIN = 52.0
PALETTE_LIGHTNESS_MAX = 78.0

# Reference white (D50) and sRGB/XYZ matrices used by the Lab conversion.
_XN, _YN, _ZN = 0.96422, 1.0, 0.82521
_T0 = 4.0 / 29.0
_T1 = 6.0 / 29.0
_T2 = 3.0 * _T1 * _T1
_T3 = _T1 * _T1 * _T1


def parse_hex(color: Color) -> np.ndarray:
    """'#rrggbb' -> float array [r, g, b] in 0..255."""
    color = color.lstrip("#")
    if len(color) == 3:
        color = "".join(ch * 2 for ch in color)
    return np.array([int(color[i : i + 2], 16) for i in (0, 2, 4)], dtype=np.float64)


def to_hex(rgb: np.ndarray) -> Color:
    """Float [r, g, b] (clamped to 0..255, rounded) -> '#rrggbb'."""
    r, g, b = (int(v) for v in np.rint(np.clip(rgb, 0.0, 255.0)))
    return f"#{r:02x}{g:02x}{b:02x}"


def mix_with_white(hex_color: Color, intensity: float) -> Color:
    """Blend with white: intensity 0 gives white, 1 keeps the color."""
    intensity = float(np.clip(intensity, 0.0, 1.0))
    white = np.full(3, 255.0)
    return to_hex(white + (parse_hex(hex_color) - white) * intensity)


def toward_white(color: Color, fraction: float) -> Color:
    """Move a color `fraction` of the way to white (0 keeps it unchanged)."""
    return mix_with_white(color, 1.0 - fraction)


def darken(color: Color, amount: float = 1.0) -> Color:
    """Scale every channel by DARKER_FACTOR ** amount (0 keeps it unchanged)."""
    if amount == 0:
        return color
    return to_hex(parse_hex(color) * (DARKER_FACTOR**amount))


def luminance(color: Color) -> float:
    """Plain channel mean, used to compare how dark two colors are."""
    return float(np.mean(parse_hex(color)))


def _srgb_to_linear(channel: np.ndarray) -> np.ndarray:
    c = channel / 255.0
    return np.where(c <= 0.04045, c / 12.92, np.power((c + 0.055) / 1.055, 2.4))


def _linear_to_srgb(channel: np.ndarray) -> np.ndarray:
    safe = np.maximum(channel, 0.0031308)
    return 255.0 * np.where(channel <= 0.0031308, 12.92 * channel, 1.055 * np.power(safe, 1 / 2.4) - 0.055)


def _xyz_to_lab_f(t: float) -> float:
    return t ** (1.0 / 3.0) if t > _T3 else t / _T2 + _T0


def _lab_to_xyz_f(t: float) -> float:
    return t**3 if t > _T1 else _T2 * (t - _T0)


def rgb_to_lab(color: Color) -> np.ndarray:
    """'#rrggbb' -> CIE Lab [L, a, b]."""
    r, g, b = _srgb_to_linear(parse_hex(color))
    y = _xyz_to_lab_f((0.2225045 * r + 0.7168786 * g + 0.0606169 * b) / _YN)
    x = _xyz_to_lab_f((0.4360747 * r + 0.3850649 * g + 0.1430804 * b) / _XN)
    z = _xyz_to_lab_f((0.0139322 * r + 0.0971045 * g + 0.7141733 * b) / _ZN)
    return np.array([116.0 * y - 16.0, 500.0 * (x - y), 200.0 * (y - z)])


def lab_to_rgb(lab: np.ndarray) -> Color:
    """CIE Lab [L, a, b] -> '#rrggbb' (out-of-gamut values are clamped)."""
    lightness, a, b = (float(v) for v in lab)
    y = (lightness + 16.0) / 116.0
    x = y + a / 500.0
    z = y - b / 200.0
    x = _XN * _lab_to_xyz_f(x)
    y = _YN * _lab_to_xyz_f(y)
    z = _ZN * _lab_to_xyz_f(z)
    linear = np.array(
        [
            3.1338561 * x - 1.6168667 * y - 0.4906146 * z,
            -0.9787684 * x + 1.9161415 * y + 0.0334540 * z,
            0.0719453 * x - 0.2289914 * y + 1.4052427 * z,
        ]
    )
    return to_hex(_linear_to_srgb(linear))


def lch_to_rgb(lightness: float, chroma: float, hue_degrees: float) -> Color:
    """CIE LCh (polar Lab) -> '#rrggbb'."""
    hue = np.radians(hue_degrees)
    return lab_to_rgb(np.array([lightness, chroma * np.cos(hue), chroma * np.sin(hue)]))


def hue_of(color: Color) -> float:
    """Lab hue angle of a color, in degrees."""
    _, a, b = rgb_to_lab(color)
    return float(np.degrees(np.arctan2(b, a)))


class KernelPalette:
    """Deterministic kernel-coordinate -> color mapping for one kernel size.

    Rows step the lightness evenly from PALETTE_LIGHTNESS_MIN to
    PALETTE_LIGHTNESS_MAX. Columns split the hue circle into equal bands,
    and each row moves half a band further along, so neighbouring rows of
    one column never share a hue. Two entries therefore differ either by
    at least half a hue band at equal-ish lightness, or by two lightness
    steps.
    """

    def __init__(self, weight_height: int, weight_width: int) -> None:
        self.weight_height = weight_height
        self.weight_width = weight_width
        self._hue_start = hue_of(KERNEL_SCALE_START)
        # A single column has the whole circle to itself, so rows spread over it.
        self._row_hue_step = 0.5 if weight_width > 1 else 1.0 / weight_height
        self._cache: dict[tuple[int, int], Color] = {}

    def _lightness(self, row: int) -> float:
        if self.weight_height == 1:
            return (PALETTE_LIGHTNESS_MIN + PALETTE_LIGHTNESS_MAX) / 2
        span = PALETTE_LIGHTNESS_MAX - PALETTE_LIGHTNESS_MIN
        return PALETTE_LIGHTNESS_MIN + span * row / (self.weight_height - 1)

    def _hue(self, row: int, col: int) -> float:
        return self._hue_start + 360.0 * (col + row * self._row_hue_step) / self.weight_width

    def color(self, row: int, col: int) -> Color:
        if not (0 <= row < self.weight_height and 0 <= col < self.weight_width):
            raise IndexError(f"kernel coordinate ({row}, {col}) out of range")
        key = (row, col)
        cached = self._cache.get(key)
        if cached is None:
            cached = lch_to_rgb(self._lightness(row), PALETTE_CHROMA, self._hue(row, col))
            self._cache[key] = cached
        return cached


def kernel_color(kernel_row: int, kernel_col: int, weight_height: int, weight_width: int) -> Color:
    """Palette color for one kernel coordinate (see `KernelPalette`)."""
    return KernelPalette(weight_height, weight_width).color(kernel_row, kernel_col)
