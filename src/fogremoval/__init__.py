# -*- coding: utf-8 -*-

""" Real-time fog removal with the dark channel prior and an adaptive Wiener filter
"""

from fogremoval.config import (
    ConfigurationError,
    FogRemovalConfig,
    FogRemovalError,
    FrameShapeError,
    PyramidRangeError,
)
from fogremoval.pipeline import FogEstimate, FogRemoval, remove_fog

__all__ = [
    'ConfigurationError',
    'FogEstimate',
    'FogRemoval',
    'FogRemovalConfig',
    'FogRemovalError',
    'FrameShapeError',
    'PyramidRangeError',
    'remove_fog',
]
