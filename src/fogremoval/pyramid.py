# -*- coding: utf-8 -*-

""" Max pyramid of the dark channel and average mip chain of the local variance
"""

import tensorflow as tf

from fogremoval.config import FrameShapeError
from fogremoval.utils.box_filter import clamp_to_edge


def pyramid_depth(height, width):
    """ Smallest L such that 2 ** L >= max(height, width), plus one. """
    if min(int(height), int(width)) < 1:
        raise FrameShapeError('frame must have at least one pixel, got {}x{}'.format(height, width))
    size = max(int(height), int(width))

    return (size - 1).bit_length() + 1

def tile_maxima(dark, tile):
    """ Max of the dark channel over each tile x tile block.

    Partial tiles on the right and bottom edges see the edge-clamped image, which
    leaves their maximum unchanged.

    Args:
        dark: 4-D tensor [N, H, W, 1]
        tile: tile size

    Returns:
        [N, ceil(H / tile), ceil(W / tile), 1]
    """
    assert dark.shape.ndims == 4

    height, width = dark.shape[1], dark.shape[2]
    padded = clamp_to_edge(dark, 0, -height % tile, axis=1)
    padded = clamp_to_edge(padded, 0, -width % tile, axis=2)

    return tf.nn.max_pool2d(padded, ksize=tile, strides=tile, padding='VALID')

def _reduce_chain(base, depth, pool):
    levels = [base]
    for _ in range(depth):
        # 'SAME' with a 2x2 kernel only pads at the end, and the pools ignore padding
        levels.append(pool(levels[-1], ksize=2, strides=2, padding='SAME'))

    return levels

def max_pyramid(base, depth):
    """ Levels 0..depth, each texel the max of the 2x2 block below it.

    Args:
        base: tile maxima, 4-D tensor
        depth: pyramid depth L

    Returns:
        List of depth + 1 tensors, finest first
    """
    assert base.shape.ndims == 4

    return _reduce_chain(base, depth, tf.nn.max_pool2d)

def variance_pyramid(variance, depth):
    """ Levels 0..depth of the local variance, 2x2 averages. The last level is the noise floor. """
    assert variance.shape.ndims == 4

    return _reduce_chain(variance, depth, tf.nn.avg_pool2d)

def sample_level(level, height, width):
    """ Bilinear lookup of a pyramid level at the texture coordinate of every pixel of a height x width frame. """
    assert level.shape.ndims == 4

    if level.shape[1] == height and level.shape[2] == width:
        return level

    return tf.image.resize(level, [height, width], method='bilinear')
