# -*- coding: utf-8 -*-

""" Per-frame fog removal: (source frame, depth, config) -> final frame

    dark channel -> local statistics ---------------------+
                 -> tile maxima -> max pyramid -> airlight +-> transmission -> reintroduction
                    variance -> variance mip chain -> noise +
"""

import collections
import logging

import numpy as np
import tensorflow as tf

from fogremoval.airlight import airlight_band, estimate_airlight
from fogremoval.config import FogRemovalConfig, FrameShapeError
from fogremoval.dark_channel import dark_channel
from fogremoval.local_statistics import local_statistics
from fogremoval.pyramid import max_pyramid, pyramid_depth, sample_level, variance_pyramid
from fogremoval.reintroduce import reintroduce_fog
from fogremoval.transmission import adaptive_transmission

logger = logging.getLogger(__name__)

FogEstimate = collections.namedtuple('FogEstimate', [
    'dark', 'mean', 'variance', 'tile_max', 'max_levels', 'variance_levels',
    'noise', 'airlight', 'veil', 'transmission', 'original',
])


class FogRemoval(object):
    """ Fog removal for frames of a fixed size.

    Setup checks the configuration and the frame size against the pyramid, so a
    frame too small for the airlight band fails here rather than per frame.
    Nothing is kept between frames.

    Args:
        height, width: frame size
        config: FogRemovalConfig, defaults when omitted
    """

    def __init__(self, height, width, config=None):
        self.config = (config or FogRemovalConfig()).validate()
        self.height = int(height)
        self.width = int(width)
        self.depth = pyramid_depth(self.height, self.width)
        self.band = airlight_band(self.depth)

        self._estimate = tf.function(self._estimate_frames)
        self._reintroduce = tf.function(reintroduce_fog)

        logger.debug('FogRemoval %dx%d: pyramid depth %d, airlight levels %s, %s statistics',
                     self.width, self.height, self.depth, self.band, self.config.strategy)

    def _estimate_frames(self, images, depth):
        cfg = self.config

        dark = dark_channel(images)
        stats = local_statistics(dark, cfg.window, cfg.strategy)

        max_levels = max_pyramid(stats.tile_max, self.depth)
        variance_levels = variance_pyramid(stats.variance, self.depth)
        noise = sample_level(variance_levels[-1], self.height, self.width)

        airlight = estimate_airlight(max_levels, self.height, self.width, self.band)
        transmission, veil = adaptive_transmission(
            dark, stats.mean, stats.variance, noise, airlight, depth,
            strength_multiplier=cfg.strength_multiplier,
            depth_multiplier=cfg.depth_multiplier)

        return FogEstimate(
            dark=dark,
            mean=stats.mean,
            variance=stats.variance,
            tile_max=stats.tile_max,
            max_levels=max_levels,
            variance_levels=variance_levels,
            noise=noise,
            airlight=airlight,
            veil=veil,
            transmission=transmission,
            original=images)

    def _frames(self, image):
        frames = np.array(image, dtype=np.float32, copy=True)
        if frames.ndim == 3:
            frames = frames[np.newaxis]
        if frames.ndim != 4 or frames.shape[1:] != (self.height, self.width, 3):
            raise FrameShapeError('expected a {}x{} RGB frame, got shape {}'.format(
                self.width, self.height, np.shape(image)))

        return frames

    def _depth(self, depth, count):
        field = np.asarray(depth, dtype=np.float32)
        if field.shape[-2:] == (self.height, self.width):
            field = field[..., np.newaxis]
        if field.ndim == 3:
            field = field[np.newaxis]
        if field.ndim != 4 or field.shape[1:] != (self.height, self.width, 1):
            raise FrameShapeError('expected a {}x{} depth field, got shape {}'.format(
                self.width, self.height, np.shape(depth)))
        if field.shape[0] != count:
            if field.shape[0] != 1:
                raise FrameShapeError('{} depth fields for {} frames'.format(field.shape[0], count))
            field = np.broadcast_to(field, (count,) + field.shape[1:])

        return field

    def estimate(self, image, depth):
        """ Run every stage up to the transmission map.

        The source frame is copied on entry, so the estimate keeps the
        pre-effect image even if the caller's buffer is overwritten afterwards.

        Args:
            image: [H, W, 3] or [N, H, W, 3] linear RGB in [0, 1]
            depth: [H, W], [H, W, 1], [N, H, W] or [N, H, W, 1] linear depth in [0, 1]

        Returns:
            FogEstimate of 4-D tensors
        """
        frames = self._frames(image)
        depth = self._depth(depth, frames.shape[0])

        return self._estimate(tf.constant(frames), tf.constant(depth))

    def reintroduce(self, estimate, current=None):
        """ Final frame from an estimate and the current working frame.

        Args:
            estimate: FogEstimate from `estimate`
            current: working frame after other effects; the captured original when omitted

        Returns:
            numpy array with the rank of `current`, or [N, H, W, 3] when `current` is omitted
        """
        if current is None:
            frames = estimate.original
            squeeze = False
        else:
            squeeze = np.ndim(current) == 3
            frames = tf.constant(self._frames(current))
            if frames.shape[0] != estimate.original.shape[0]:
                raise FrameShapeError('{} working frames for an estimate of {} frames'.format(
                    frames.shape[0], estimate.original.shape[0]))

        final = self._reintroduce(frames, estimate.original, estimate.transmission, estimate.airlight).numpy()

        return final[0] if squeeze else final

    def __call__(self, image, depth, current=None):
        """ Fog removal for one frame (or a batch of independent frames).

        Args:
            image: source frame
            depth: linear depth
            current: working frame after other effects, defaults to `image`

        Returns:
            Final frame with the rank of `image`
        """
        estimate = self.estimate(image, depth)
        final = self.reintroduce(estimate, image if current is None else current)

        return final

def remove_fog(image, depth, config=None):
    """ One-shot fog removal, setting up for the frame size on every call. """
    height, width = np.shape(image)[-3:-1]

    return FogRemoval(height, width, config)(image, depth)
