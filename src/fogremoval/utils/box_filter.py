# -*- coding: utf-8 -*-

""" Edge-clamped box filter via running sums

Reference:
    https://github.com/wuhuikai/DeepGuidedFilter
"""

import tensorflow as tf


def clamp_to_edge(inputs, before, after, axis):
    """ Pad `axis` by repeating its first and last entries.

    Args:
        inputs: a 4-D tensor
        before: number of entries to add in front
        after: number of entries to add at the back
        axis: the axis to pad

    Returns:
        The padded tensor
    """
    assert inputs.shape.ndims == 4

    size = tf.shape(inputs)[axis]
    indices = tf.clip_by_value(tf.range(-before, size + after), 0, size - 1)

    return tf.gather(inputs, indices, axis=axis)

def diff_x(inputs, w):
    assert inputs.shape.ndims == 4

    return inputs[:, w:] - inputs[:, :-w]

def diff_y(inputs, w):
    assert inputs.shape.ndims == 4

    return inputs[:, :, w:] - inputs[:, :, :-w]

def box_filter(x, w):
    """ Sum of `x` over a w x w window at every pixel.

    The window covers offsets [-w // 2, w - w // 2 - 1] on both axes and reads
    outside the image are clamped to the edge. Sums are accumulated in float64.

    Args:
        x: a 4-D tensor [N, H, W, C]
        w: window size

    Returns:
        Window sums, float64, same shape as `x`
    """
    assert x.shape.ndims == 4

    r = w // 2
    x = tf.cast(x, tf.float64)

    # rows: exclusive running sum, then differences w apart
    x = clamp_to_edge(x, r, w - r, axis=1)
    x = diff_x(tf.cumsum(x, axis=1, exclusive=True), w)

    # columns
    x = clamp_to_edge(x, r, w - r, axis=2)
    x = diff_y(tf.cumsum(x, axis=2, exclusive=True), w)

    return x
