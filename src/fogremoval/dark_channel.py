# -*- coding: utf-8 -*-

""" Dark channel of a color frame
"""

import tensorflow as tf


def dark_channel(images):
    """ Get the dark channel prior in the (RGB) image data.

    Unlike the classic prior, no minimum filter is applied here; the local
    statistics downstream do the spatial pooling.

    Args:
        images: a 4-D tensor [N, H, W, 3].

    Returns:
        The dark channel, [N, H, W, 1]
    """
    assert images.shape.ndims == 4

    return tf.reduce_min(images, axis=-1, keepdims=True)
