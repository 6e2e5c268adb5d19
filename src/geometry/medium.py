# geometry/medium.py
import math
import random
from typing import Optional
from core.aabb import AABB
from core.exceptions import SceneConfigurationError
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import Hittable, HitRecord
from materials.isotropic import Isotropic

class ConstantMedium(Hittable):
    """
    Homogeneous participating medium (fog, smoke) filling a convex boundary.

    A ray crossing the boundary scatters after a free-flight distance drawn
    as -ln(U) / density; if that distance exceeds the chord through the
    boundary the ray passes through untouched.
    """
    def __init__(self, boundary: Hittable, density: float, albedo):
        if not density > 0:
            raise SceneConfigurationError(f"Medium density must be positive, got {density}")
        self.boundary = boundary
        self.neg_inv_density = -1.0 / density
        self.phase_function = Isotropic(albedo)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        rng = rng or random

        enter = self.boundary.hit(ray, -math.inf, math.inf, rng)
        if enter is None:
            return None
        leave = self.boundary.hit(ray, enter.t + 0.0001, math.inf, rng)
        if leave is None:
            return None

        t_enter = max(enter.t, t_min)
        t_leave = min(leave.t, t_max)
        if t_enter >= t_leave:
            return None
        t_enter = max(t_enter, 0.0)

        ray_length = ray.direction.length()
        distance_inside = (t_leave - t_enter) * ray_length
        # 1 - U keeps the argument of log in (0, 1].
        hit_distance = self.neg_inv_density * math.log(1.0 - rng.random())
        if hit_distance > distance_inside:
            return None

        t = t_enter + hit_distance / ray_length
        # Scattering is isotropic, so the normal and face are arbitrary.
        return HitRecord(ray, t, ray.at(t), Vector3(1, 0, 0), True, self.phase_function)

    def bounding_box(self) -> AABB:
        return self.boundary.bounding_box()
