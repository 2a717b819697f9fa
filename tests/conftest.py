import logging

import numpy as np
import pytest


def make_symmetric_glcm(n_tones, seed=0, max_count=20):
    """Normalised symmetric co-occurrence matrix built from random pair counts."""
    rng = np.random.default_rng(seed)
    counts = rng.integers(0, max_count, size=(n_tones, n_tones)).astype(np.float64)
    counts = counts + counts.T
    return counts / counts.sum()


@pytest.fixture(autouse=True)
def reset_dev_logger():
    """Give every test a clean, enabled package logger."""
    logger = logging.getLogger("Dev_logger")
    logger.handlers.clear()
    logger.disabled = False
    logger.setLevel(logging.DEBUG)
    logger.propagate = True
    yield
    logger.handlers.clear()
    logger.disabled = False


@pytest.fixture
def identity_glcm():
    n_tones = 4
    return np.eye(n_tones) / n_tones


@pytest.fixture
def two_tone_glcm():
    return np.array([[0.5, 0.0], [0.0, 0.5]])


@pytest.fixture
def symmetric_glcm():
    return make_symmetric_glcm(6, seed=7)


@pytest.fixture
def direction_glcms():
    """Four matrices standing in for the 0, 45, 90 and 135 degree offsets."""
    return [make_symmetric_glcm(5, seed=seed) for seed in (1, 2, 3, 4)]
