# -*- coding: utf-8 -*-

""" Blend the fog-removed and original frames in luma along the transmission
"""

import tensorflow as tf

from fogremoval.utils.scattering import dehaze, haze

TRANSMISSION_FLOOR = 0.05


def reintroduce_fog(current, original, transmission, airlight):
    """ Reapply fog to the luma of the working frame.

    Both lumas are dehazed with the floored transmission, interpolated by the
    transmission (heavy haze leans on the original frame), and hazed again.
    Chroma comes from the working frame untouched.

    Args:
        current: working frame, possibly processed by other effects, [N, H, W, 3]
        original: copy of the source frame taken before other effects ran, [N, H, W, 3]
        transmission: [N, H, W, 1]
        airlight: [N, H, W, 1]

    Returns:
        Final frame, [N, H, W, 3]
    """
    assert current.shape.ndims == 4 and original.shape.ndims == 4

    t = tf.maximum(transmission, TRANSMISSION_FLOOR)

    yuv = tf.image.rgb_to_yuv(current)
    luma, chroma = yuv[..., :1], yuv[..., 1:]
    original_luma = tf.image.rgb_to_yuv(original)[..., :1]

    original_luma = dehaze(original_luma, t, airlight)
    new_luma = dehaze(luma, t, airlight)

    blended = original_luma + (new_luma - original_luma) * t
    blended = haze(blended, t, airlight)

    return tf.image.yuv_to_rgb(tf.concat([blended, chroma], axis=-1))
