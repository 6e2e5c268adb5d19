# materials/lambertian.py
import math
from typing import Union
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord
from materials.material import Material, ScatterRecord, as_texture
from materials.pdf import CosinePdf
from materials.textures import Texture

class Lambertian(Material):
    """
    Lambertian diffuse material. Scattered directions are cosine-weighted
    about the normal; the albedo comes from a texture.
    """

    def __init__(self, albedo: Union[Vector3, Texture]):
        super().__init__()
        self.texture = as_texture(albedo)

    def scatter(self, rec: HitRecord, rng) -> ScatterRecord:
        attenuation = self.texture.value(rec.u, rec.v, rec.p)
        return ScatterRecord(attenuation, pdf=CosinePdf(rec.normal))

    def scattering_pdf(self, rec: HitRecord, scattered: Ray) -> float:
        cos_theta = rec.normal.dot(scattered.direction.normalize())
        return max(0.0, cos_theta / math.pi)
