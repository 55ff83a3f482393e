"""
Color conversion helpers for perceptual CSS color functions.

Usage:
    from core.color import convert_lab_colors_to_rgb

    convert_lab_colors_to_rgb("lab(100 0 0)")   # "rgb(255, 255, 255)"
"""

from .normalizer import (
    lab_to_rgb,
    oklab_to_rgb,
    convert_lab_colors_to_rgb,
    contains_perceptual_color,
)

__all__ = [
    "lab_to_rgb",
    "oklab_to_rgb",
    "convert_lab_colors_to_rgb",
    "contains_perceptual_color",
]
