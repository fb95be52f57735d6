"""
Unit tests for quantisation and background colour detection.
"""
import numpy as np
import pytest

from noteshrink.background import find_background_color, pack_rgb_keys, quantize


class TestQuantize:
    def test_six_bit_bins_are_recentred(self):
        q = quantize(np.array([[0, 3, 4], [248, 250, 255]], dtype=np.float32), 6)
        np.testing.assert_array_equal(q, [[2, 2, 6], [250, 250, 254]])

    def test_eight_bits_is_identity(self):
        colours = np.array([[1, 2, 3], [254, 128, 0]], dtype=np.float32)
        np.testing.assert_array_equal(quantize(colours, 8), colours.astype(np.uint8))

    def test_fractional_channels_truncate(self):
        q = quantize(np.array([[7.9, 8.2, 0.5]], dtype=np.float32), 6)
        np.testing.assert_array_equal(q, [[6, 10, 2]])

    @pytest.mark.parametrize("bits", [0, 9])
    def test_bad_bits(self, bits):
        with pytest.raises(ValueError):
            quantize(np.zeros((1, 3)), bits)


class TestPackKeys:
    def test_packing(self):
        keys = pack_rgb_keys(np.array([[1, 2, 3], [255, 255, 255]], dtype=np.uint8))
        assert keys.tolist() == [0x010203, 0xFFFFFF]


class TestFindBackgroundColor:
    def test_majority_colour(self, rng):
        paper = np.tile([[250, 250, 250]], (60, 1))
        ink = rng.integers(0, 120, size=(40, 3))
        samples = rng.permutation(np.concatenate([paper, ink])).astype(np.float32)
        np.testing.assert_array_equal(find_background_color(samples), [250, 250, 250])

    def test_near_identical_colours_share_a_bin(self):
        samples = np.array(
            [[200, 100, 50], [201, 102, 49], [202, 103, 51], [10, 10, 10], [12, 12, 12]],
            dtype=np.float32,
        )
        np.testing.assert_array_equal(find_background_color(samples), [202, 102, 50])

    def test_single_pixel(self):
        np.testing.assert_array_equal(
            find_background_color(np.array([[17, 130, 255]], dtype=np.float32)),
            [18, 130, 254],
        )

    def test_tie_goes_to_first_seen(self):
        samples = np.array(
            [[10, 10, 10], [200, 200, 200], [200, 200, 200], [10, 10, 10]],
            dtype=np.float32,
        )
        np.testing.assert_array_equal(find_background_color(samples), [10, 10, 10])

    def test_empty_samples(self):
        with pytest.raises(ValueError):
            find_background_color(np.zeros((0, 3), dtype=np.float32))

    def test_dtype(self):
        bg = find_background_color(np.full((3, 3), 100, dtype=np.float32))
        assert bg.dtype == np.float32 and bg.shape == (3,)
