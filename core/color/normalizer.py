"""
Color Normalizer
Converts CSS lab() and oklab() colors to legacy rgb()/rgba() strings that the
rasterizer can parse.

The math is fixed (D50 reference white for Lab, the standard OKLab matrices)
and the functions are pure: malformed numeric input yields "NaN" channels
instead of raising.
"""

import math
import re
from typing import List, Optional

# CIE constants
LAB_EPSILON = 0.008856
LAB_KAPPA = 903.3
D50_WHITE = (0.9642, 1.0, 0.8251)

# XYZ (D50) -> linear sRGB
XYZ_TO_SRGB = (
    (3.1338561, -1.6168667, -0.4906146),
    (-0.9787684, 1.9161415, 0.033454),
    (0.0719453, -0.2289914, 1.4052427),
)

# OKLab -> LMS' (cube root space)
OKLAB_TO_LMS = (
    (1.0, 0.3963377774, 0.2158037573),
    (1.0, -0.1055613458, -0.0638541728),
    (1.0, -0.0894841775, -1.291485548),
)

# LMS -> linear sRGB
LMS_TO_SRGB = (
    (4.0767416621, -3.3077115913, 0.2309699292),
    (-1.2684380046, 2.6097574011, -0.3413193965),
    (-0.0041960863, -0.7034186147, 1.707614701),
)

# oklab() is tried first; the lookbehind keeps lab() from matching inside oklab()
_OKLAB_RE = re.compile(r"oklab\(([^)]+)\)", re.IGNORECASE)
_LAB_RE = re.compile(r"(?<![a-z])lab\(([^)]+)\)", re.IGNORECASE)
_ALPHA_SPLIT_RE = re.compile(r"\s+/\s+")
_LEADING_FLOAT_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_STRICT_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

_PASSTHROUGH = {"", "transparent", "none"}


# ==================== CHANNEL HELPERS ====================

def _gamma_encode(v: float) -> float:
    """Standard piecewise sRGB transfer function."""
    if v > 0.0031308:
        return 1.055 * v ** (1 / 2.4) - 0.055
    return 12.92 * v


def _to_channel(v: float) -> str:
    """Scale to 0-255, round half up, clamp. NaN stays NaN."""
    scaled = v * 255
    if math.isnan(scaled):
        return "NaN"
    scaled = max(0.0, min(255.0, scaled))
    return str(int(math.floor(scaled + 0.5)))


def _format_alpha(alpha: float) -> str:
    if math.isfinite(alpha) and alpha == int(alpha):
        return str(int(alpha))
    return repr(alpha)


def _format(r: float, g: float, b: float, alpha: Optional[float]) -> str:
    channels = ", ".join(_to_channel(_gamma_encode(c)) for c in (r, g, b))
    if alpha is not None and alpha < 1:
        return f"rgba({channels}, {_format_alpha(alpha)})"
    return f"rgb({channels})"


def _cube(v: float) -> float:
    return v * v * v


# ==================== CONVERSIONS ====================

def lab_to_rgb(l: float, a: float, b: float, alpha: Optional[float] = None) -> str:
    """Convert CIE Lab (D50) to an sRGB css string."""
    fy = (l + 16) / 116
    fx = a / 500 + fy
    fz = fy - b / 200

    fx3 = _cube(fx)
    fz3 = _cube(fz)
    xr = fx3 if fx3 > LAB_EPSILON else (116 * fx - 16) / LAB_KAPPA
    yr = _cube((l + 16) / 116) if l > LAB_KAPPA * LAB_EPSILON else l / LAB_KAPPA
    zr = fz3 if fz3 > LAB_EPSILON else (116 * fz - 16) / LAB_KAPPA

    xyz = (xr * D50_WHITE[0], yr * D50_WHITE[1], zr * D50_WHITE[2])
    r, g, bl = (sum(m * c for m, c in zip(row, xyz)) for row in XYZ_TO_SRGB)
    return _format(r, g, bl, alpha)


def oklab_to_rgb(l: float, a: float, b: float, alpha: Optional[float] = None) -> str:
    """Convert OKLab to an sRGB css string."""
    lab = (l, a, b)
    lms = [_cube(sum(m * c for m, c in zip(row, lab))) for row in OKLAB_TO_LMS]
    r, g, bl = (sum(m * c for m, c in zip(row, lms)) for row in LMS_TO_SRGB)
    return _format(r, g, bl, alpha)


# ==================== PARSING ====================

def _to_number(token: str) -> float:
    """Strict numeric conversion; anything else is NaN."""
    if _STRICT_FLOAT_RE.match(token):
        return float(token)
    return float("nan")


def _leading_float(token: str) -> float:
    """Parse the numeric prefix of a string ("0.5", "50%"), NaN if none."""
    match = _LEADING_FLOAT_RE.match(token)
    if not match:
        return float("nan")
    return float(match.group(0))


def _parse_arguments(body: str):
    parts = _ALPHA_SPLIT_RE.split(body)
    values: List[float] = [_to_number(v) for v in parts[0].strip().split()]
    alpha: Optional[float] = None
    if len(parts) > 1 and parts[1]:
        alpha = _leading_float(parts[1])
    elif len(values) > 3:
        # four-channel form without a slash
        alpha = values[3]
    while len(values) < 3:
        values.append(float("nan"))
    return values[0], values[1], values[2], alpha


def contains_perceptual_color(value: Optional[str]) -> bool:
    """True if the value uses lab() or oklab() anywhere (e.g. in a gradient)."""
    if not value:
        return False
    return bool(_OKLAB_RE.search(value) or _LAB_RE.search(value))


def convert_lab_colors_to_rgb(color: Optional[str]) -> Optional[str]:
    """
    Convert a lab()/oklab() color to rgb()/rgba().

    Anything that is not one of those two functions (hex, rgb(), named
    colors, "transparent", "none", empty) is returned unchanged.
    """
    if color is None or color.strip().lower() in _PASSTHROUGH:
        return color

    match = _OKLAB_RE.search(color)
    if match:
        return oklab_to_rgb(*_parse_arguments(match.group(1)))

    match = _LAB_RE.search(color)
    if match:
        return lab_to_rgb(*_parse_arguments(match.group(1)))

    return color
