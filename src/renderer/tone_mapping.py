# renderer/tone_mapping.py
import math
from typing import Tuple

import numpy as np
from numba import njit

from core.vector import Color

# Upper clamp before scaling by 256, keeps every channel below 256
MAX_INTENSITY = 0.999

def gamma_correct(color: Color) -> Color:
    """
    Gamma 2 tone curve: square root of each linear channel.
    """
    return Color(math.sqrt(max(color.x, 0.0)),
                 math.sqrt(max(color.y, 0.0)),
                 math.sqrt(max(color.z, 0.0)))

def _quantize(c: float) -> int:
    return int(256 * min(max(c, 0.0), MAX_INTENSITY))

def to_rgb8(color: Color) -> Tuple[int, int, int]:
    """
    Converts an averaged linear color into an 8-bit (r, g, b) triple.
    """
    corrected = gamma_correct(color)
    return _quantize(corrected.x), _quantize(corrected.y), _quantize(corrected.z)

@njit
def tone_map_kernel(linear_image, output_image):
    height, width, channels = linear_image.shape
    for y in range(height):
        for x in range(width):
            for c in range(channels):
                value = linear_image[y, x, c]
                if value < 0.0:
                    value = 0.0
                value = math.sqrt(value)
                if value > MAX_INTENSITY:
                    value = MAX_INTENSITY
                output_image[y, x, c] = int(256 * value)

def tone_map_image(linear_image: np.ndarray) -> np.ndarray:
    """
    Applies the same transform as to_rgb8 to a (height, width, 3) array of
    linear colors and returns a uint8 array.
    """
    linear = np.ascontiguousarray(linear_image, dtype=np.float64)
    output = np.empty(linear.shape, dtype=np.uint8)
    tone_map_kernel(linear, output)
    return output
