# src/materials/dielectric.py
import math
from core.ray import Ray
from core.vector import WHITE
from geometry.hittable import HitRecord
from materials.material import Material, ScatterRecord

class Dielectric(Material):
    """
    Clear refractive material (glass, water). Chooses between reflection and
    refraction stochastically using Schlick's approximation.
    """
    def __init__(self, ref_idx: float):
        super().__init__()
        self.ref_idx = ref_idx

    def scatter(self, rec: HitRecord, rng) -> ScatterRecord:
        # Determine if we're entering or exiting the material
        ni_over_nt = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = rec.ray.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ni_over_nt * sin_theta > 1.0
        if cannot_refract or schlick(cos_theta, ni_over_nt) > rng.random():
            direction = unit_direction.reflect(rec.normal)
        else:
            direction = unit_direction.refract(rec.normal, ni_over_nt)

        return ScatterRecord(WHITE, skip_pdf_ray=Ray(rec.p, direction, rec.ray.time))

def schlick(cos_theta: float, ref_idx: float) -> float:
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cos_theta), 5)
