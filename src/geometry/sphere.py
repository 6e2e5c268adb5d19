# geometry/sphere.py
import math
from typing import Optional
from core.aabb import AABB
from core.onb import ONB
from core.ray import Ray
from core.utils import random_to_sphere, random_unit_vector
from core.vector import Vector3
from geometry.hittable import Hittable, HitRecord

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.

    A moving sphere travels linearly from `center` at time 0 to
    `center + velocity` at time 1; its bounding box covers the whole sweep.
    """
    def __init__(self, center: Vector3, radius: float, material, velocity: Optional[Vector3] = None):
        self.center = center
        self.radius = max(0.0, radius)
        self.material = material
        self.velocity = velocity
        offset = Vector3(self.radius, self.radius, self.radius)
        self.box = AABB.from_points(center - offset, center + offset)
        if velocity is not None:
            end = center + velocity
            self.box = AABB.surrounding_box(self.box, AABB.from_points(end - offset, end + offset))

    @classmethod
    def moving(cls, center0: Vector3, center1: Vector3, radius: float, material) -> "Sphere":
        return cls(center0, radius, material, velocity=center1 - center0)

    @property
    def is_moving(self) -> bool:
        return self.velocity is not None

    def center_at(self, time: float) -> Vector3:
        if self.velocity is None:
            return self.center
        return self.center + self.velocity * time

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        center = self.center_at(ray.time)
        oc = ray.origin - center
        a = ray.direction.length_squared()
        if a == 0 or self.radius == 0:
            return None
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_disc) / a
        if root < t_min or root > t_max:
            root = (-half_b + sqrt_disc) / a
            if root < t_min or root > t_max:
                return None

        point = ray.at(root)
        outward_normal = (point - center) / self.radius
        u, v = sphere_uv(outward_normal)
        return HitRecord.from_outward_normal(ray, root, outward_normal, self.material, u, v)

    def bounding_box(self) -> AABB:
        return self.box

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        if self.hit(Ray(origin, direction), 0.001, math.inf) is None:
            return 0.0

        distance_squared = (self.center - origin).length_squared()
        radius_squared = self.radius * self.radius
        if distance_squared <= radius_squared:
            return 0.0
        cos_theta_max = math.sqrt(1 - radius_squared / distance_squared)
        solid_angle = 2 * math.pi * (1 - cos_theta_max)
        if solid_angle <= 0.0:
            return 0.0
        return 1.0 / solid_angle

    def random(self, origin: Vector3, rng) -> Vector3:
        direction = self.center - origin
        distance_squared = direction.length_squared()
        if distance_squared <= self.radius * self.radius:
            return random_unit_vector(rng)
        uvw = ONB(direction)
        return uvw.transform(random_to_sphere(rng, self.radius, distance_squared))

def sphere_uv(p: Vector3):
    """
    Surface coordinates of a point on the unit sphere: u is the angle around
    the y axis from x=-1, v the angle from y=-1, both scaled to [0, 1].
    """
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    phi = math.atan2(-p.z, p.x) + math.pi
    return phi / (2 * math.pi), theta / math.pi
