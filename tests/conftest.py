"""
Shared fixtures: small synthetic pages and seeded random sources.
"""
import numpy as np
import pytest

PAPER = (250, 250, 248)
INK = (10, 10, 10)


@pytest.fixture
def rng():
    """Seeded generator so sampling is repeatable."""
    return np.random.default_rng(1234)


@pytest.fixture
def tiny_page():
    """4x4 page: 12 paper pixels, 4 dark ink pixels down the first column."""
    img = np.empty((4, 4, 3), dtype=np.uint8)
    img[:, :] = PAPER
    img[:, 0] = INK
    return img


@pytest.fixture
def colour_page():
    """
    64x64 cream page with bands of black, red and blue ink.

    Rows 0-39 paper, 40-47 black, 48-55 red, 56-63 blue.
    """
    img = np.empty((64, 64, 3), dtype=np.uint8)
    img[:, :] = (245, 240, 230)
    img[40:48] = (20, 20, 20)
    img[48:56] = (200, 30, 30)
    img[56:64] = (30, 60, 200)
    return img
