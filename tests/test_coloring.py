"""Tests for RGBA quantization."""

import numpy as np
import pytest

from mandelbrot_plot.rendering.coloring import BandedPalette, quantize, quantize_plot


class TestQuantize:

    def test_bit_fields(self):
        # 0b111001: r=01, g=10, b=11
        assert quantize(0b111001, 64) == (64, 128, 192, 255)

    def test_zero_count_is_opaque_black(self):
        assert quantize(0, 16) == (0, 0, 0, 255)

    def test_high_bits_are_ignored(self):
        assert quantize(0b11000001, 255) == quantize(0b00000001, 255)

    @pytest.mark.parametrize("value,cap", [(16, 16), (255, 255), (0, 0), (40, 16)])
    def test_inside_points_are_black(self, value, cap):
        assert quantize(value, cap) == (0, 0, 0, 255)

    def test_alpha_always_opaque(self):
        assert all(quantize(v, 255)[3] == 255 for v in range(256))


class TestQuantizePlot:

    def test_matches_scalar_rule(self):
        plot = np.arange(256, dtype=np.uint8)
        rgba = quantize_plot(plot, 200).reshape(-1, 4)
        for v in range(256):
            assert tuple(rgba[v]) == quantize(v, 200)

    def test_writes_into_given_buffer(self):
        plot = np.array([1, 2, 16], dtype=np.uint8)
        out = np.zeros(12, dtype=np.uint8)
        result = quantize_plot(plot, 16, out=out)

        assert result is out
        np.testing.assert_array_equal(out, [64, 0, 0, 255,
                                            128, 0, 0, 255,
                                            0, 0, 0, 255])

    def test_rejects_wrong_buffer_size(self):
        with pytest.raises(ValueError, match="RGBA buffer"):
            quantize_plot(np.zeros(4, dtype=np.uint8), 16, out=np.zeros(4, dtype=np.uint8))

    def test_zero_cap_blacks_out_everything(self):
        rgba = quantize_plot(np.array([0, 5, 63], dtype=np.uint8), 0).reshape(-1, 4)
        np.testing.assert_array_equal(rgba, [[0, 0, 0, 255]] * 3)


class TestBandedPalette:

    def test_to_image_is_a_view(self):
        buffer = np.arange(2 * 3 * 4, dtype=np.uint8)
        image = BandedPalette.to_image(buffer, 3, 2)

        assert image.shape == (2, 3, 4)
        assert np.shares_memory(image, buffer)
        assert tuple(image[1, 0]) == (12, 13, 14, 15)
