# -*- coding: utf-8 -*-

import math

import numpy as np
import tensorflow as tf

from fogremoval.transmission import adaptive_transmission, wiener_veil


def field(value, shape=(1, 4, 4, 1)):
    return tf.fill(list(shape), float(value))

def test_gain_follows_signal_to_noise():
    veil = wiener_veil(field(0.6), field(0.5), field(4e-3), field(1e-3)).numpy()

    assert np.allclose(veil, 0.5 + 0.75 * 0.1)

def test_flat_region_trusts_mean():
    veil = wiener_veil(field(0.6), field(0.5), field(1e-3), field(2e-3)).numpy()

    assert np.allclose(veil, 0.5)

def test_residual_below_mean_is_clipped():
    veil = wiener_veil(field(0.3), field(0.5), field(4e-3), field(0.0)).numpy()

    assert np.allclose(veil, 0.5)

def test_zero_variance_is_finite():
    veil = wiener_veil(field(0.4), field(0.4), field(0.0), field(0.0)).numpy()

    assert np.all(np.isfinite(veil))
    assert np.allclose(veil, 0.4)

def test_zero_variance_has_zero_gain():
    veil = wiener_veil(field(0.5), field(0.4), field(0.0), field(0.0)).numpy()

    assert np.all(np.isfinite(veil))
    assert np.allclose(veil, 0.4)

def test_tiny_variance_is_divided_by_the_floor():
    veil = wiener_veil(field(0.5), field(0.4), field(1e-8), field(0.0)).numpy()

    assert np.allclose(veil, 0.4 + 0.1 * 1e-8 / 1e-6)

def test_constant_field():
    c = 0.4
    transmission, veil = adaptive_transmission(
        field(c), field(c), field(0.0), field(0.0), field(c), field(0.0))

    assert np.allclose(veil.numpy(), c)
    assert np.allclose(transmission.numpy(), 1.0 - c)

def test_strength_and_depth_modulation():
    args = (field(0.5), field(0.5), field(0.0), field(0.0), field(0.8))
    depth = tf.constant(np.linspace(0.0, 1.0, 16, dtype=np.float32).reshape((1, 4, 4, 1)))

    base, _ = adaptive_transmission(*args, depth)
    strong, _ = adaptive_transmission(*args, depth, strength_multiplier=-0.5)
    deep, _ = adaptive_transmission(*args, depth, depth_multiplier=0.75)

    assert np.allclose(strong.numpy(), base.numpy() * math.exp(-0.5))
    assert np.allclose(deep.numpy(), base.numpy() * np.exp(0.75 * depth.numpy()))

def test_transmission_is_not_clamped_above_one():
    transmission, _ = adaptive_transmission(
        field(0.5), field(0.5), field(0.0), field(0.0), field(0.5), field(1.0),
        strength_multiplier=1.0, depth_multiplier=1.0)

    assert np.allclose(transmission.numpy(), 0.5 * math.e ** 2)
