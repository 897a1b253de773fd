# -*- coding: utf-8 -*-

""" Koschmieder single-scattering model

    hazy:   I(z) = J(z) * t(z) + A(z)(1 - t(z))
    dehazy: J(z) = (I(z) - A(z)) / t(z) + A(z)
"""

import tensorflow as tf


def dehaze(hazy, transmission_map, atmospheric_light):
    """ Transformation from hazy to dehazy, J(z) = (I(z) - A(z)) / t(z) + A(z)

    The caller is responsible for keeping the transmission map away from zero.

    Args:
        hazy: Hazy image
        transmission_map: Transmission map
        atmospheric_light: Atmospheric light

    Returns:
        Dehazy image
    """
    return (hazy - atmospheric_light) / transmission_map + atmospheric_light

def haze(dehazy, transmission_map, atmospheric_light):
    """ Transformation from clear to hazy, I(z) = J(z) * t(z) + A(z)(1 - t(z))

    Args:
        dehazy: Dehazy image
        transmission_map: Transmission map
        atmospheric_light: Atmospheric light

    Returns:
        Hazy image
    """
    return (dehazy - atmospheric_light) * transmission_map + atmospheric_light

def synthesize_haze(clear, depth, atmospheric_light=0.8, beta=1.0):
    """ Add homogeneous fog to a clear frame, with t(z) = exp(-beta * depth(z)).

    Args:
        clear: 4-D tensor [N, H, W, 3] in [0, 1]
        depth: 4-D tensor [N, H, W, 1], linear depth in [0, 1]
        atmospheric_light: scalar or broadcastable airlight
        beta: scattering coefficient

    Returns:
        The hazy frame and its transmission map
    """
    assert clear.shape.ndims == 4 and depth.shape.ndims == 4

    transmission_map = tf.exp(-beta * tf.cast(depth, clear.dtype))
    hazy = haze(clear, transmission_map, atmospheric_light)

    return hazy, transmission_map
