"""Tests for core/color/normalizer.py: lab()/oklab() to rgb() conversion."""

import pytest

from core.color import contains_perceptual_color, convert_lab_colors_to_rgb, lab_to_rgb, oklab_to_rgb


class TestConvertLabColors:
    """convert_lab_colors_to_rgb() on single color values."""

    def test_lab_white(self):
        assert convert_lab_colors_to_rgb("lab(100 0 0)") == "rgb(255, 255, 255)"

    def test_oklab_white(self):
        assert convert_lab_colors_to_rgb("oklab(1 0 0)") == "rgb(255, 255, 255)"

    def test_lab_black(self):
        assert convert_lab_colors_to_rgb("lab(0 0 0)") == "rgb(0, 0, 0)"

    def test_oklab_black(self):
        assert convert_lab_colors_to_rgb("oklab(0 0 0)") == "rgb(0, 0, 0)"

    def test_lab_blue_is_blue(self):
        result = convert_lab_colors_to_rgb("lab(36.9089 35.0961 -85.6872)")
        r, g, b = (int(c) for c in result[4:-1].split(", "))
        assert b > 150
        assert b > r and b > g

    def test_alpha_below_one_gives_rgba(self):
        assert convert_lab_colors_to_rgb("lab(100 0 0 / 0.5)") == "rgba(255, 255, 255, 0.5)"

    def test_alpha_one_gives_rgb(self):
        assert convert_lab_colors_to_rgb("oklab(1 0 0 / 1)") == "rgb(255, 255, 255)"

    @pytest.mark.parametrize("value", [
        "#1f2937", "rgb(1, 2, 3)", "red", "transparent", "none", "", "hsl(0 0% 50%)",
    ])
    def test_other_values_pass_through(self, value):
        assert convert_lab_colors_to_rgb(value) == value

    def test_none_passes_through(self):
        assert convert_lab_colors_to_rgb(None) is None

    def test_deterministic(self):
        value = "oklab(0.62 0.1 -0.2)"
        assert convert_lab_colors_to_rgb(value) == convert_lab_colors_to_rgb(value)

    def test_channels_are_clamped(self):
        result = convert_lab_colors_to_rgb("lab(100 200 -200)")
        channels = [int(c) for c in result[4:-1].split(", ")]
        assert all(0 <= c <= 255 for c in channels)

    def test_unparseable_channel_propagates_nan(self):
        result = convert_lab_colors_to_rgb("lab(abc 0 0)")
        assert "NaN" in result

    def test_missing_channel_does_not_raise(self):
        result = convert_lab_colors_to_rgb("oklab(0.5)")
        assert result.startswith("rgb(")


class TestDirectConversions:
    """lab_to_rgb() / oklab_to_rgb() with numeric input."""

    def test_lab_mid_gray_is_neutral(self):
        result = lab_to_rgb(50, 0, 0)
        r, g, b = (int(c) for c in result[4:-1].split(", "))
        assert abs(r - g) <= 1 and abs(g - b) <= 1
        assert 110 < r < 125

    def test_oklab_alpha_zero(self):
        assert oklab_to_rgb(1, 0, 0, 0).startswith("rgba(")


class TestContainsPerceptualColor:

    def test_detects_lab_in_gradient(self):
        assert contains_perceptual_color("linear-gradient(lab(50 0 0), #fff)")

    def test_detects_oklab(self):
        assert contains_perceptual_color("oklab(0.5 0 0)")

    def test_ignores_legacy_colors(self):
        assert not contains_perceptual_color("linear-gradient(#000, rgb(1, 2, 3))")

    def test_empty(self):
        assert not contains_perceptual_color(None)
        assert not contains_perceptual_color("")
