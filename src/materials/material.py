# materials/material.py
from typing import NamedTuple, Optional
from core.ray import Ray
from core.vector import BLACK, Vector3
from geometry.hittable import HitRecord
from materials.textures import SolidColor, Texture

class ScatterRecord(NamedTuple):
    """
    Outcome of a scattering event. Exactly one of `pdf` and `skip_pdf_ray`
    is set: a pdf the integrator samples (and mixes with light sampling), or
    a concrete ray to follow with unit importance weight.
    """
    attenuation: Vector3
    pdf: Optional[object] = None
    skip_pdf_ray: Optional[Ray] = None

class Material:
    """
    Abstract material class. The default material neither scatters nor emits.
    """
    def scatter(self, rec: HitRecord, rng) -> Optional[ScatterRecord]:
        """
        Returns a ScatterRecord, or None when the ray is absorbed or the
        material is a pure emitter.
        """
        return None

    def emitted(self, rec: HitRecord, u: float, v: float, p: Vector3) -> Vector3:
        return BLACK

    def scattering_pdf(self, rec: HitRecord, scattered: Ray) -> float:
        """Density with which this material itself scatters into `scattered`."""
        return 0.0

def as_texture(albedo) -> Texture:
    """Wraps a plain color in a SolidColor; passes textures through."""
    if isinstance(albedo, Texture):
        return albedo
    return SolidColor(albedo)
