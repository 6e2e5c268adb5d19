# materials/diffuse_light.py
from typing import Union
from core.vector import BLACK, Vector3
from geometry.hittable import HitRecord
from materials.material import Material, as_texture
from materials.textures import Texture

class DiffuseLight(Material):
    """
    One-sided emitter: radiates its texture color from the front face only
    and never scatters.
    """
    def __init__(self, emit: Union[Vector3, Texture]):
        super().__init__()
        self.texture = as_texture(emit)

    def emitted(self, rec: HitRecord, u: float, v: float, p: Vector3) -> Vector3:
        if not rec.front_face:
            return BLACK
        return self.texture.value(u, v, p)
