# renderer/image.py
import logging
import os
import numpy as np
from PIL import Image
from core.vector import Vector3
from renderer.tone_mapping import TONE_MAPPERS

logger = logging.getLogger(__name__)

class Canvas:
    """
    Pixel buffer of linear colors that is written out as an 8-bit image.

    Pixel (0, 0) is the bottom-left corner of the picture. Colors are kept
    unclamped; clamping and gamma encoding happen only in to_uint8()/save().
    """
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.data = np.zeros((height, width, 3), dtype=np.float64)

    @classmethod
    def from_array(cls, linear: np.ndarray) -> "Canvas":
        """Wraps a (height, width, 3) array whose row 0 is the top of the picture."""
        linear = np.asarray(linear, dtype=np.float64)
        canvas = cls(linear.shape[1], linear.shape[0])
        canvas.data[...] = linear
        return canvas

    def set_pixel(self, x: int, y: int, color: Vector3):
        self.data[self.height - 1 - y, x] = (color.x, color.y, color.z)

    def get_pixel(self, x: int, y: int) -> Vector3:
        r, g, b = self.data[self.height - 1 - y, x]
        return Vector3(float(r), float(g), float(b))

    def to_uint8(self, tone_map: str = "clamp") -> np.ndarray:
        try:
            mapper = TONE_MAPPERS[tone_map]
        except KeyError:
            raise ValueError(f"Unknown tone mapping {tone_map!r}; expected one of {sorted(TONE_MAPPERS)}") from None
        return mapper(self.data)

    def save(self, path: str, tone_map: str = "clamp"):
        """Writes the image; the format follows the file extension."""
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)
        Image.fromarray(self.to_uint8(tone_map)).save(path)
        logger.info("Saved %dx%d image to %s", self.width, self.height, path)
