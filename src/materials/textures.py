# materials/textures.py
import math
from typing import Optional, Union
import numpy as np
from core.vector import Vector3
from materials.perlin import Perlin
from materials.texture_loader import load_image_data

class Texture:
    """Base class for all textures: a color as a function of (u, v, point)."""
    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        raise NotImplementedError("value() must be implemented by texture subclasses.")

class SolidColor(Texture):
    """A solid color texture."""
    def __init__(self, color: Vector3):
        self.color = color

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        return self.color

class CheckerTexture(Texture):
    """
    A 3D checker pattern: space is cut into cubes of side `scale`, and the
    parity of the cube index picks the even or the odd texture.
    """
    def __init__(self, scale: float, even: Union[Vector3, Texture], odd: Union[Vector3, Texture]):
        self.inv_scale = 1.0 / scale
        self.even = even if isinstance(even, Texture) else SolidColor(even)
        self.odd = odd if isinstance(odd, Texture) else SolidColor(odd)

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        x = math.floor(self.inv_scale * p.x)
        y = math.floor(self.inv_scale * p.y)
        z = math.floor(self.inv_scale * p.z)
        if (x + y + z) % 2 == 0:
            return self.even.value(u, v, p)
        return self.odd.value(u, v, p)

class ImageTexture(Texture):
    """
    A texture from an image. Holds a (height, width, 3) array of linear
    colors; v = 0 is the bottom row of the image.
    """
    def __init__(self, image_path: Optional[str] = None, data: Optional[np.ndarray] = None):
        if data is None:
            if image_path is None:
                raise ValueError("ImageTexture needs an image path or pixel data")
            data = load_image_data(image_path)
        data = np.asarray(data, dtype=np.float64)
        if data.ndim != 3 or data.shape[2] != 3 or data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"Image data must have shape (height, width, 3), got {data.shape}")
        self.data = data
        self.height, self.width = data.shape[:2]

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        u = min(max(u, 0.0), 1.0)
        v = 1.0 - min(max(v, 0.0), 1.0)  # Flip V to image rows

        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        color = self.data[y, x]
        return Vector3(float(color[0]), float(color[1]), float(color[2]))

class NoiseTexture(Texture):
    """
    Marble-like procedural texture: a sine stripe along z whose phase is
    disturbed by Perlin turbulence.
    """
    def __init__(self, scale: float = 1.0, seed=None, turbulence_depth: int = 7):
        self.noise = Perlin(seed)
        self.scale = scale
        self.turbulence_depth = turbulence_depth

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        t = self.noise.turbulence(p, self.turbulence_depth)
        gray = 0.5 * (1 + math.sin(self.scale * p.z + 10 * t))
        return Vector3(gray, gray, gray)
