# -*- coding: utf-8 -*-

""" Local mean and variance of the dark channel over a W x W window

Two strategies compute the same window sums S = sum(d) and S2 = sum(d^2):

    separable: box filter as a row pass then a column pass of running sums
    tiled:     per-tile summed-area table over a 2W x 2W support region

mean = S / W^2, variance = (S2 - S^2 / W^2) / W^2
"""

import collections

import tensorflow as tf

from fogremoval.config import WINDOW, ConfigurationError
from fogremoval.pyramid import tile_maxima
from fogremoval.utils.box_filter import box_filter, clamp_to_edge

LocalStatistics = collections.namedtuple('LocalStatistics', ['mean', 'variance', 'tile_max'])


def _moments(s, s2, w, dtype):
    n = float(w * w)
    mean = s / n
    variance = tf.maximum((s2 - s * s / n) / n, 0.0)

    return tf.cast(mean, dtype), tf.cast(variance, dtype)

def separable_statistics(dark, window=WINDOW):
    """ Local statistics with the two-pass separable box filter.

    Args:
        dark: dark channel, 4-D tensor [N, H, W, 1]
        window: window size

    Returns:
        LocalStatistics
    """
    assert dark.shape.ndims == 4

    s = box_filter(dark, window)
    s2 = box_filter(tf.square(tf.cast(dark, tf.float64)), window)
    mean, variance = _moments(s, s2, window, dark.dtype)

    return LocalStatistics(mean, variance, tile_maxima(dark, window))

def _tile_window_sums(support, window):
    """ Window sums for one batch of tile workspaces.

    Args:
        support: [..., 2W, 2W] workspaces, one per output tile
        window: W

    Returns:
        [..., W, W] window sums for the tile's output pixels
    """
    # summed-area table, rows first then columns, with a leading zero row and column
    sat = tf.cumsum(tf.cumsum(support, axis=-2), axis=-1)
    sat = tf.pad(sat, [[0, 0]] * (sat.shape.ndims - 2) + [[1, 0], [1, 0]])

    w = window
    return sat[..., w:2 * w, w:2 * w] - sat[..., :w, w:2 * w] - sat[..., w:2 * w, :w] + sat[..., :w, :w]

def tiled_statistics(dark, window=WINDOW):
    """ Local statistics with the cooperative-tile reduction.

    Each W x W output tile reads a 2W x 2W support region (W / 2 halo on each
    side) into its own workspace. The workspace holds d and d^2, is reduced to
    a summed-area table and discarded once the tile's window sums are read out.

    Args:
        dark: dark channel, 4-D tensor [N, H, W, 1]
        window: window size, also the output tile size

    Returns:
        LocalStatistics
    """
    assert dark.shape.ndims == 4

    tile = window
    halo = window // 2
    support = tile + 2 * halo
    height, width = dark.shape[1], dark.shape[2]
    tiles_y, tiles_x = -(-height // tile), -(-width // tile)

    padded = clamp_to_edge(dark, halo, tiles_y * tile - height + halo, axis=1)
    padded = clamp_to_edge(padded, halo, tiles_x * tile - width + halo, axis=2)

    patches = tf.image.extract_patches(
        padded,
        sizes=[1, support, support, 1],
        strides=[1, tile, tile, 1],
        rates=[1, 1, 1, 1],
        padding='VALID')
    workspace = tf.reshape(tf.cast(patches, tf.float64), [-1, tiles_y, tiles_x, support, support])

    s = _tile_window_sums(workspace, window)
    s2 = _tile_window_sums(tf.square(workspace), window)
    mean, variance = _moments(s, s2, window, dark.dtype)

    inner = workspace[..., halo:halo + tile, halo:halo + tile]
    tile_max = tf.cast(tf.reduce_max(inner, axis=[-2, -1])[..., tf.newaxis], dark.dtype)

    def untile(x):
        x = tf.transpose(x, [0, 1, 3, 2, 4])
        x = tf.reshape(x, [-1, tiles_y * tile, tiles_x * tile, 1])
        return x[:, :height, :width, :]

    return LocalStatistics(untile(mean), untile(variance), tile_max)

def local_statistics(dark, window=WINDOW, strategy='separable'):
    """ Mean, variance and tile maxima of the dark channel.

    Args:
        dark: dark channel, 4-D tensor [N, H, W, 1]
        window: window size
        strategy: 'separable' or 'tiled'

    Returns:
        LocalStatistics(mean, variance, tile_max)
    """
    if strategy == 'separable':
        return separable_statistics(dark, window)
    if strategy == 'tiled':
        return tiled_statistics(dark, window)

    raise ConfigurationError('Unknown strategy {!r}'.format(strategy))
