"""
Unit tests for HSV foreground classification.
"""
import numpy as np

from noteshrink.foreground import foreground_mask

BG = np.array([200, 200, 200], dtype=np.float32)


class TestForegroundMask:
    def test_saturation_only_difference(self):
        # Same value (max channel 200), saturation 0.5 vs 0.
        mask = foreground_mask(BG, np.array([[200, 100, 100]]), 0.25, 0.20)
        assert mask.tolist() == [True]

    def test_value_only_difference(self):
        # Grey, so saturation matches; value drops by ~0.39.
        mask = foreground_mask(BG, np.array([[100, 100, 100]]), 0.25, 0.20)
        assert mask.tolist() == [True]

    def test_small_differences_are_background(self):
        colours = np.array([[190, 190, 190], [200, 190, 185], [210, 205, 200]])
        assert not foreground_mask(BG, colours, 0.25, 0.20).any()

    def test_threshold_is_inclusive(self):
        bg = np.array([255, 255, 255], dtype=np.float32)
        # value exactly 0.5 below
        colour = np.array([[127.5, 127.5, 127.5]], dtype=np.float32)
        assert foreground_mask(bg, colour, 0.5, 1.0).tolist() == [True]

    def test_image_shaped_input(self):
        img = np.full((3, 4, 3), 200, dtype=np.uint8)
        img[1, 2] = (0, 0, 0)
        mask = foreground_mask(BG, img, 0.25, 0.20)
        assert mask.shape == (3, 4)
        assert mask.sum() == 1 and mask[1, 2]

    def test_zero_thresholds_mark_everything(self):
        colours = np.array([[200, 200, 200], [0, 0, 0]])
        assert foreground_mask(BG, colours, 0.0, 0.0).all()
