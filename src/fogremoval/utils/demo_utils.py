# -*- coding: utf-8 -*-

""" Run fog removal on an image and plot the intermediate fields

Usage:
    python -m fogremoval.utils.demo_utils path/to/hazy.png [output.png]
"""

import logging
import sys

import matplotlib.pyplot as plt
import numpy as np
from PIL import Image
from skimage import img_as_ubyte
from skimage.io import imsave

from fogremoval.pipeline import FogRemoval

logger = logging.getLogger(__name__)


def load_image(path):
    """ RGB image as float32 in [0, 1]. """
    return np.asarray(Image.open(path).convert('RGB'), dtype=np.float32) / 255.0

def depth_ramp(height, width):
    """ Linear depth increasing from the bottom row (near) to the top row (far). """
    ramp = np.linspace(1.0, 0.0, height, dtype=np.float32)

    return np.repeat(ramp[:, np.newaxis], width, axis=1)

def show_estimate(image, estimate, final):
    imgs = [
        image, estimate.dark[0, ..., 0], estimate.airlight[0, ..., 0],
        estimate.veil[0, ..., 0], estimate.transmission[0, ..., 0], np.clip(final, 0, 1),
    ]
    titles = [
        'Hazy', 'Dark channel', 'Airlight',
        'Veil', 'Transmission', 'Final',
    ]

    plt.figure(figsize=(18, 8))
    for i in range(len(imgs)):
        plt.subplot(2, 3, i + 1)
        plt.title(titles[i])
        plt.imshow(np.asarray(imgs[i]), cmap='gray', vmin=0, vmax=1)
        plt.axis('off')
    plt.tight_layout()
    plt.show()

def main(argv):
    if len(argv) < 2:
        print(__doc__)
        return 1

    image = load_image(argv[1])
    height, width = image.shape[:2]
    fog_removal = FogRemoval(height, width)

    estimate = fog_removal.estimate(image, depth_ramp(height, width))
    final = fog_removal.reintroduce(estimate, image)
    logger.info('Airlight in [%.3f, %.3f], transmission in [%.3f, %.3f]',
                float(np.min(estimate.airlight)), float(np.max(estimate.airlight)),
                float(np.min(estimate.transmission)), float(np.max(estimate.transmission)))

    if len(argv) > 2:
        imsave(argv[2], img_as_ubyte(np.clip(final, 0, 1)))
        logger.info('Saved %s', argv[2])

    show_estimate(image, estimate, final)
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='[%(asctime)s] %(message)s')
    sys.exit(main(sys.argv))
