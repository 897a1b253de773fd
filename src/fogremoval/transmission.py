# -*- coding: utf-8 -*-

""" Adaptive (Wiener) filtering of the dark channel and transmission estimate

    gain   = max(var - noise, 0) / max(var, eps)
    veil   = clamp(mean + clamp(gain * (d - mean), 0, 1), 0, 1)
    t      = 1 - veil * d / A
    t     *= exp(depth_multiplier * depth) * exp(strength_multiplier)

Reference:
    Gibson, K. B., Nguyen, T. Q. "Fast single image fog removal using the adaptive Wiener filter", ICIP 2013.
"""

import math

import tensorflow as tf

# Floor on the local variance before it is used as a divisor
VARIANCE_EPSILON = 1e-6


def wiener_veil(dark, mean, variance, noise):
    """ Denoised veil estimate.

    Args:
        dark: dark channel
        mean: local mean of the dark channel
        variance: local variance of the dark channel
        noise: noise floor, broadcastable to `variance`

    Returns:
        Veil in [0, 1]
    """
    # a flat window (zero variance) gets zero gain
    gain = tf.maximum(variance - noise, 0.0) / tf.maximum(variance, VARIANCE_EPSILON)
    residual = tf.clip_by_value(gain * (dark - mean), 0.0, 1.0)

    return tf.clip_by_value(mean + residual, 0.0, 1.0)

def adaptive_transmission(dark, mean, variance, noise, airlight, depth,
                          strength_multiplier=0.0, depth_multiplier=0.0):
    """ Transmission from the Koschmieder model with a Wiener-filtered veil.

    The result is not clamped from above; values above one darken on reintroduction.

    Args:
        dark: dark channel, [N, H, W, 1]
        mean, variance: local statistics of the dark channel
        noise: noise floor
        airlight: airlight in [0.05, 1]
        depth: linear depth in [0, 1], [N, H, W, 1]
        strength_multiplier: global strength, 0 leaves t unchanged
        depth_multiplier: depth dependent strength, 0 leaves t unchanged

    Returns:
        (transmission, veil)
    """
    veil = wiener_veil(dark, mean, variance, noise)
    transmission = 1.0 - veil * dark / airlight

    modulation = tf.exp(depth_multiplier * tf.cast(depth, transmission.dtype)) * math.exp(strength_multiplier)
    transmission = transmission * modulation

    return transmission, veil
