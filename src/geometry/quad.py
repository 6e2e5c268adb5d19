# geometry/quad.py
import math
from typing import Optional
from core.aabb import AABB
from core.exceptions import SceneConfigurationError
from core.interval import Interval
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import Hittable, HitRecord

# Rays this close to parallel with the plane are treated as misses.
PARALLEL_EPSILON = 1e-8

class Quad(Hittable):
    """
    A parallelogram with corner `q` and edge vectors `u` and `v`.

    The plane is normal . p = d with normal = unit(u x v). A hit point p is
    written as q + alpha * u + beta * v; it lies inside the quad when both
    alpha and beta are in [0, 1].
    """
    def __init__(self, q: Vector3, u: Vector3, v: Vector3, material):
        n = u.cross(v)
        if n.near_zero():
            raise SceneConfigurationError(f"Quad edges {u} and {v} are parallel or zero-length")

        self.q = q
        self.u = u
        self.v = v
        self.material = material
        self.normal = n.normalize()
        self.d = self.normal.dot(q)
        self.w = n / n.length_squared()
        self.area = n.length()
        self.box = AABB.surrounding_box(
            AABB.from_points(q, q + u + v),
            AABB.from_points(q + u, q + v),
        )

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        denominator = self.normal.dot(ray.direction)
        if abs(denominator) < PARALLEL_EPSILON:
            return None

        t = (self.d - self.normal.dot(ray.origin)) / denominator
        if t < t_min or t > t_max:
            return None

        planar = ray.at(t) - self.q
        alpha = self.w.dot(planar.cross(self.v))
        beta = self.w.dot(self.u.cross(planar))
        if not Interval.UNIT.contains(alpha) or not Interval.UNIT.contains(beta):
            return None

        return HitRecord.from_outward_normal(ray, t, self.normal, self.material, alpha, beta)

    def bounding_box(self) -> AABB:
        return self.box

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        rec = self.hit(Ray(origin, direction), 0.001, math.inf)
        if rec is None:
            return 0.0

        direction_length_squared = direction.length_squared()
        distance_squared = rec.t * rec.t * direction_length_squared
        cosine = abs(direction.dot(rec.normal)) / math.sqrt(direction_length_squared)
        if cosine < PARALLEL_EPSILON:
            return 0.0
        return distance_squared / (cosine * self.area)

    def random(self, origin: Vector3, rng) -> Vector3:
        point = self.q + self.u * rng.random() + self.v * rng.random()
        return point - origin
