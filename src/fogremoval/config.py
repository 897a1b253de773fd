# -*- coding: utf-8 -*-

""" Configuration and errors for fog removal
"""

from dataclasses import dataclass

# Side of the square window used for the local statistics
WINDOW = 16

STRATEGIES = ('separable', 'tiled')

DEFAULT_STRENGTH_MULTIPLIER = -0.125
DEFAULT_DEPTH_MULTIPLIER = -0.075
MULTIPLIER_RANGE = (-1.0, 1.0)


class FogRemovalError(ValueError):
    """ Base class for setup and call-boundary errors. """


class ConfigurationError(FogRemovalError):
    pass


class PyramidRangeError(FogRemovalError):
    """ Raised when a pyramid level band does not fit the computed pyramid depth. """


class FrameShapeError(FogRemovalError):
    pass


@dataclass
class FogRemovalConfig:
    """ Tunable inputs of the fog removal pass.

    Args:
        strength_multiplier: global strength dial, transmission is scaled by exp(strength_multiplier)
        depth_multiplier: depth dial, transmission is scaled by exp(depth_multiplier * depth)
        strategy: 'separable' (two-pass box filter) or 'tiled' (per-tile summed-area table)
        window: side of the local statistics window
    """
    strength_multiplier: float = DEFAULT_STRENGTH_MULTIPLIER
    depth_multiplier: float = DEFAULT_DEPTH_MULTIPLIER
    strategy: str = 'separable'
    window: int = WINDOW

    def validate(self):
        low, high = MULTIPLIER_RANGE
        for name in ('strength_multiplier', 'depth_multiplier'):
            value = getattr(self, name)
            if not low <= value <= high:
                raise ConfigurationError('{} = {} is outside [{}, {}]'.format(name, value, low, high))
        if self.strategy not in STRATEGIES:
            raise ConfigurationError('Unknown strategy {!r}, expected one of {}'.format(self.strategy, STRATEGIES))
        if self.window <= 0 or self.window % 2:
            raise ConfigurationError('window must be a positive even number, got {}'.format(self.window))
        return self
