"""
Unit tests for random pixel sampling.
"""
import numpy as np
import pytest

from noteshrink.sampling import sample_count, sample_pixels


def _unique_pixel_image(height=20, width=50):
    """Every pixel carries its flat index in (r, g)."""
    idx = np.arange(height * width)
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[..., 0] = (idx % 256).reshape(height, width)
    img[..., 1] = (idx // 256).reshape(height, width)
    return img


class TestSampleCount:
    def test_floor(self):
        assert sample_count(1000, 0.05) == 50
        assert sample_count(16, 0.05) == 0
        assert sample_count(999, 0.5) == 499

    def test_min_samples_capped_by_pixels(self):
        assert sample_count(16, 0.05, min_samples=1024) == 16
        assert sample_count(5000, 0.05, min_samples=1024) == 1024
        assert sample_count(100000, 0.05, min_samples=1024) == 5000


class TestSamplePixels:
    def test_length_and_dtype(self, rng):
        img = _unique_pixel_image()
        samples = sample_pixels(img, 0.1, rng=rng)
        assert samples.shape == (100, 3)
        assert samples.dtype == np.float32

    def test_no_duplicate_pixels(self, rng):
        img = _unique_pixel_image()
        samples = sample_pixels(img, 0.5, rng=rng)
        keys = samples[:, 0].astype(int) + 256 * samples[:, 1].astype(int)
        assert len(set(keys.tolist())) == samples.shape[0]

    def test_full_fraction_is_a_permutation(self, rng):
        img = _unique_pixel_image()
        samples = sample_pixels(img, 1.0, rng=rng)
        got = np.sort(samples[:, 0] + 256 * samples[:, 1])
        np.testing.assert_array_equal(got, np.arange(img.shape[0] * img.shape[1]))

    def test_seeded_runs_repeat(self):
        img = _unique_pixel_image()
        a = sample_pixels(img, 0.2, rng=np.random.default_rng(7))
        b = sample_pixels(img, 0.2, rng=np.random.default_rng(7))
        np.testing.assert_array_equal(a, b)

    def test_source_untouched(self, rng):
        img = _unique_pixel_image()
        before = img.copy()
        samples = sample_pixels(img, 0.3, rng=rng)
        samples[:] = 0
        np.testing.assert_array_equal(img, before)

    def test_uniform_coverage(self):
        # Left and right halves should be drawn in roughly equal numbers.
        img = np.zeros((100, 100, 3), dtype=np.uint8)
        img[:, 50:] = 255
        samples = sample_pixels(img, 0.2, rng=np.random.default_rng(3))
        share_right = float(np.mean(samples[:, 0] == 255))
        assert share_right == pytest.approx(0.5, abs=0.05)

    def test_unseeded_default(self):
        img = _unique_pixel_image()
        assert sample_pixels(img, 0.1).shape == (100, 3)
