# materials/isotropic.py
import math
from typing import Union
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord
from materials.material import Material, ScatterRecord, as_texture
from materials.pdf import SpherePdf
from materials.textures import Texture

class Isotropic(Material):
    """
    Phase function of a participating medium: scatters uniformly over the
    sphere of directions.
    """
    def __init__(self, albedo: Union[Vector3, Texture]):
        super().__init__()
        self.texture = as_texture(albedo)

    def scatter(self, rec: HitRecord, rng) -> ScatterRecord:
        attenuation = self.texture.value(rec.u, rec.v, rec.p)
        return ScatterRecord(attenuation, pdf=SpherePdf())

    def scattering_pdf(self, rec: HitRecord, scattered: Ray) -> float:
        return 1.0 / (4.0 * math.pi)
