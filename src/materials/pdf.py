# materials/pdf.py
"""
Direction distributions used for importance sampling.

Each Pdf can draw a direction (generate) and report the solid-angle
density of any direction (value). For a fixed origin, value() integrates
to 1 over the sphere of directions.
"""
import math
from core.onb import ONB
from core.utils import random_cosine_direction, random_unit_vector
from core.vector import Vector3

class Pdf:
    """Base class for direction distributions."""
    def value(self, direction: Vector3) -> float:
        raise NotImplementedError("value() must be implemented by subclasses.")

    def generate(self, rng) -> Vector3:
        raise NotImplementedError("generate() must be implemented by subclasses.")

class SpherePdf(Pdf):
    """Uniform density over the unit sphere."""
    def value(self, direction: Vector3) -> float:
        return 1.0 / (4.0 * math.pi)

    def generate(self, rng) -> Vector3:
        return random_unit_vector(rng)

class CosinePdf(Pdf):
    """Density cos(theta) / pi about a normal, zero below the surface."""
    def __init__(self, normal: Vector3):
        self.uvw = ONB(normal)

    def value(self, direction: Vector3) -> float:
        cos_theta = direction.normalize().dot(self.uvw.w)
        return max(0.0, cos_theta / math.pi)

    def generate(self, rng) -> Vector3:
        return self.uvw.transform(random_cosine_direction(rng))

class HittablePdf(Pdf):
    """Samples directions from `origin` toward a (light) object."""
    def __init__(self, objects, origin: Vector3):
        self.objects = objects
        self.origin = origin

    def value(self, direction: Vector3) -> float:
        return self.objects.pdf_value(self.origin, direction)

    def generate(self, rng) -> Vector3:
        return self.objects.random(self.origin, rng)

class MixturePdf(Pdf):
    """Even blend of two distributions."""
    def __init__(self, p0: Pdf, p1: Pdf):
        self.p0 = p0
        self.p1 = p1

    def value(self, direction: Vector3) -> float:
        return 0.5 * self.p0.value(direction) + 0.5 * self.p1.value(direction)

    def generate(self, rng) -> Vector3:
        if rng.random() < 0.5:
            return self.p0.generate(rng)
        return self.p1.generate(rng)
