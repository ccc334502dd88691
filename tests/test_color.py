"""Tests for PreciseColor and PixelLayout."""

import pytest

from dirblur.core import (
    Color32,
    PreciseColor,
    PixelLayout,
    UnsupportedLayoutError,
    clamp_0_255,
)


class TestPreciseColor:
    def test_zero(self):
        assert PreciseColor.zero() == PreciseColor(0.0, 0.0, 0.0, 0.0)

    def test_add_sub(self):
        c1 = PreciseColor.from_argb(1, 2, 3, 4)
        c2 = PreciseColor.from_argb(1, 1, 1, 1)

        assert c1 + c2 == PreciseColor(2.0, 3.0, 4.0, 5.0)
        assert c1 - c2 == PreciseColor(0.0, 1.0, 2.0, 3.0)

    def test_scalar_multiply_includes_alpha(self):
        c = PreciseColor.from_argb(2, 4, 6, 8)

        assert 0.5 * c == PreciseColor(1.0, 2.0, 3.0, 4.0)
        assert c * 2 == PreciseColor(4.0, 8.0, 12.0, 16.0)

    def test_multiply_by_non_number(self):
        with pytest.raises(TypeError):
            PreciseColor.zero() * "2"

    def test_accumulation_is_unclamped(self):
        c = PreciseColor.from_argb(200, 200, 200, 200) + PreciseColor.from_argb(200, 0, 0, 0)
        c = c - PreciseColor.from_argb(0, 300, 0, 0)

        assert c.a == pytest.approx(400.0)
        assert c.r == pytest.approx(-100.0)

    def test_to_color32_clamps_channels_independently(self):
        c = PreciseColor.from_argb(-10, 300, 127.6, 0).to_color32()

        assert c == Color32(0, 255, 128, 0)
        assert isinstance(c.g, int)

    def test_to_color32_rounds_half_to_even(self):
        c = PreciseColor.from_argb(0.5, 1.5, 2.5, 254.5).to_color32()

        assert c == Color32(0, 2, 2, 254)

    def test_from_color32(self):
        c = PreciseColor.from_color32(Color32(255, 10, 20, 30))

        assert c == PreciseColor(255.0, 10.0, 20.0, 30.0)
        assert c.to_color32() == Color32(255, 10, 20, 30)

    @pytest.mark.parametrize("value, expected", [(-0.1, 0.0), (0.0, 0.0), (12.5, 12.5), (255.0, 255.0), (1e9, 255.0)])
    def test_clamp(self, value, expected):
        assert clamp_0_255(value) == expected


class TestPixelLayout:
    def test_components(self):
        assert PixelLayout.INDEXED8.components == 1
        assert PixelLayout.RGB24.components == 3
        assert PixelLayout.ARGB32.components == 4

    def test_has_alpha(self):
        assert not PixelLayout.INDEXED8.has_alpha
        assert not PixelLayout.RGB24.has_alpha
        assert PixelLayout.ARGB32.has_alpha

    def test_from_components(self):
        for layout in PixelLayout:
            assert PixelLayout.from_components(layout.components) is layout

    @pytest.mark.parametrize("components", [0, 2, 5])
    def test_from_components_unsupported(self, components):
        with pytest.raises(UnsupportedLayoutError):
            PixelLayout.from_components(components)

    def test_pil_modes(self):
        assert PixelLayout.from_pil_mode("L") is PixelLayout.INDEXED8
        assert PixelLayout.from_pil_mode("RGB") is PixelLayout.RGB24
        assert PixelLayout.from_pil_mode("RGBA") is PixelLayout.ARGB32
        assert PixelLayout.ARGB32.pil_mode == "RGBA"

    def test_pil_mode_unsupported(self):
        with pytest.raises(UnsupportedLayoutError):
            PixelLayout.from_pil_mode("CMYK")
