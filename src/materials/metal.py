# materials/metal.py
from typing import Optional, Union
from core.ray import Ray
from core.utils import random_in_unit_sphere
from core.vector import Vector3
from geometry.hittable import HitRecord
from materials.material import Material, ScatterRecord, as_texture
from materials.textures import Texture

class Metal(Material):
    """
    Specular reflector. `fuzz` (clamped to 1) perturbs the mirror direction
    by a random point in a sphere of that radius.
    """
    def __init__(self, albedo: Union[Vector3, Texture], fuzz: float = 0.0):
        super().__init__()
        self.texture = as_texture(albedo)
        self.fuzz = min(fuzz, 1)

    def scatter(self, rec: HitRecord, rng) -> Optional[ScatterRecord]:
        reflected = rec.ray.direction.normalize().reflect(rec.normal)
        direction = reflected + random_in_unit_sphere(rng) * self.fuzz
        if direction.dot(rec.normal) <= 0:
            # Fuzz pushed the ray below the surface; absorb it.
            return None

        attenuation = self.texture.value(rec.u, rec.v, rec.p)
        return ScatterRecord(attenuation, skip_pdf_ray=Ray(rec.p, direction, rec.ray.time))
