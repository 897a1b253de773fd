# -*- coding: utf-8 -*-

""" Estimate a spatially varying atmospheric light from the dark channel max pyramid
"""

import tensorflow as tf

from fogremoval.config import PyramidRangeError
from fogremoval.pyramid import sample_level

# Band of max pyramid levels averaged into the airlight: from the first level
# up to (depth - coarse offset). Empirically tuned.
AIRLIGHT_FIRST_LEVEL = 1
AIRLIGHT_COARSE_OFFSET = 4

AIRLIGHT_MIN = 0.05
AIRLIGHT_MAX = 1.0


def airlight_band(depth, first=AIRLIGHT_FIRST_LEVEL, coarse_offset=AIRLIGHT_COARSE_OFFSET):
    """ Inclusive (first, last) pyramid levels averaged into the airlight.

    Args:
        depth: pyramid depth L, the pyramid holds levels 0..L
        first: finest level of the band
        coarse_offset: the band stops at level L - coarse_offset

    Returns:
        (first, last)

    Raises:
        PyramidRangeError: negative bounds, or the band is empty
    """
    if first < 0 or coarse_offset < 0:
        raise PyramidRangeError('airlight band needs first >= 0 and coarse_offset >= 0, got {} and {}'.format(first, coarse_offset))

    last = depth - coarse_offset
    if last < first:
        raise PyramidRangeError(
            'airlight band [{}, {}] does not fit a pyramid of depth {}'.format(first, last, depth))

    return first, last

def estimate_airlight(levels, height, width, band):
    """ Average the band of max pyramid levels at each pixel and clamp to [0.05, 1].

    Args:
        levels: max pyramid, list of 4-D tensors, finest first
        height, width: frame size
        band: (first, last) from airlight_band

    Returns:
        Airlight, [N, H, W, 1]
    """
    first, last = band
    if last >= len(levels):
        raise PyramidRangeError('airlight band {} needs {} levels, pyramid has {}'.format(band, last + 1, len(levels)))

    samples = [sample_level(levels[k], height, width) for k in range(first, last + 1)]
    airlight = tf.add_n(samples) / float(len(samples))

    return tf.clip_by_value(airlight, AIRLIGHT_MIN, AIRLIGHT_MAX)
