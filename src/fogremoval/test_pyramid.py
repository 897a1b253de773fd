# -*- coding: utf-8 -*-

import numpy as np
import pytest
import tensorflow as tf

from fogremoval.config import FrameShapeError
from fogremoval.local_statistics import local_statistics
from fogremoval.pyramid import max_pyramid, pyramid_depth, sample_level, variance_pyramid


@pytest.mark.parametrize('height, width, depth', [
    (1, 1, 1),
    (64, 64, 7),
    (65, 10, 8),
    (1080, 1920, 12),
    (9, 9, 5),
])
def test_pyramid_depth(height, width, depth):
    assert pyramid_depth(height, width) == depth

def test_pyramid_depth_rejects_empty_frame():
    with pytest.raises(FrameShapeError):
        pyramid_depth(0, 16)
    with pytest.raises(FrameShapeError):
        pyramid_depth(16, 0)

def test_isolated_bright_pixel():
    dark = np.zeros((1, 64, 64, 1), np.float32)
    dark[0, 20, 37, 0] = 0.9

    base = local_statistics(tf.constant(dark), 16, 'tiled').tile_max
    levels = [level.numpy()[0, ..., 0] for level in max_pyramid(base, pyramid_depth(64, 64))]

    assert len(levels) == 8
    assert [level.shape[0] for level in levels] == [4, 2, 1, 1, 1, 1, 1, 1]
    assert levels[0][1, 2] == np.float32(0.9)
    assert np.count_nonzero(levels[0]) == 1

    maxima = [level.max() for level in levels]
    assert all(a >= b for a, b in zip(maxima, maxima[1:]))
    for k, level in enumerate(levels):
        assert level[min(1 >> k, level.shape[0] - 1), min(2 >> k, level.shape[1] - 1)] == np.float32(0.9)
        assert np.count_nonzero(level) == 1

def test_max_pyramid_odd_sizes_keep_edge_texels():
    base = np.zeros((1, 3, 5, 1), np.float32)
    base[0, 2, 4, 0] = 0.7

    levels = max_pyramid(tf.constant(base), 3)

    assert [tuple(level.shape[1:3]) for level in levels] == [(3, 5), (2, 3), (1, 2), (1, 1)]
    assert levels[1].numpy()[0, 1, 2, 0] == np.float32(0.7)
    assert levels[-1].numpy()[0, 0, 0, 0] == np.float32(0.7)

def test_variance_pyramid_averages_valid_texels():
    levels = variance_pyramid(tf.fill([1, 5, 3, 1], 0.02), 4)

    assert levels[-1].shape == (1, 1, 1, 1)
    for level in levels:
        assert np.allclose(level.numpy(), 0.02)

def test_variance_pyramid_coarsest_is_mean():
    rng = np.random.default_rng(1)
    variance = rng.uniform(0.0, 0.01, (1, 16, 16, 1)).astype(np.float32)

    levels = variance_pyramid(tf.constant(variance), pyramid_depth(16, 16))

    assert np.isclose(levels[-1].numpy()[0, 0, 0, 0], variance.mean(), rtol=1e-5)

def test_sample_level():
    level = tf.fill([1, 1, 1, 1], 0.3)
    sampled = sample_level(level, 6, 9)

    assert sampled.shape == (1, 6, 9, 1)
    assert np.allclose(sampled.numpy(), 0.3)

    full = tf.zeros([1, 6, 9, 1])
    assert sample_level(full, 6, 9) is full
