# renderer/canvas.py
import logging
import math
import numpy as np
from PIL import Image
from core.vector import Color
from core.utils import clamp

logger = logging.getLogger(__name__)

class Canvas:
    """
    Display-ready pixel buffer: (height, width, 3) floats in [0, 1], row 0
    being the bottom of the image (y grows upward, like the camera's v).

    Gamma correction and clamping happen in write_pixel(); the integrator
    hands in raw linear sums. Rows are independent, so workers writing
    disjoint rows need no locking; readers may observe a partially
    written frame.
    """
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.buffer = np.zeros((height, width, 3), dtype=np.float64)

    def write_pixel(self, x: int, y: int, pixel_color: Color, samples_per_pixel: int) -> bool:
        """
        Averages a sum of samples, applies gamma 2 and clamps to [0, 1].
        Out-of-range writes are logged and ignored.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            logger.warning("Ignoring pixel write out of range: (x,y) -> (%d,%d)", x, y)
            return False

        scale = 1.0 / samples_per_pixel
        self.buffer[y, x] = (
            clamp(math.sqrt(max(0.0, pixel_color.x * scale)), 0.0, 1.0),
            clamp(math.sqrt(max(0.0, pixel_color.y * scale)), 0.0, 1.0),
            clamp(math.sqrt(max(0.0, pixel_color.z * scale)), 0.0, 1.0),
        )
        return True

    def clear(self):
        self.buffer.fill(0.0)

    def to_image_array(self) -> np.ndarray:
        """
        Returns an upright (top row first) uint8 copy of the buffer.
        """
        return (np.flipud(self.buffer) * 255.999).astype(np.uint8)

    def to_surface_array(self) -> np.ndarray:
        """
        Returns a (width, height, 3) uint8 array as pygame.surfarray expects.
        """
        return np.ascontiguousarray(self.to_image_array().transpose(1, 0, 2))

    def save(self, path: str):
        Image.fromarray(self.to_image_array()).save(path)
        logger.info("Saved %dx%d image to %s", self.width, self.height, path)
