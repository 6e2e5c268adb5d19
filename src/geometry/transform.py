# geometry/transform.py
import math
from typing import Optional
from core.aabb import AABB
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import Hittable, HitRecord

class Translate(Hittable):
    """
    An instance of `obj` moved by `offset`. Rays are moved into object space
    instead of moving the object; the returned record refers to the
    original ray.
    """
    def __init__(self, obj: Hittable, offset: Vector3):
        self.obj = obj
        self.offset = offset
        self.box = obj.bounding_box().translate(offset)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        offset_ray = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.obj.hit(offset_ray, t_min, t_max, rng)
        if rec is None:
            return None
        return rec.transformed(ray, rec.normal)

    def bounding_box(self) -> AABB:
        return self.box

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.obj.pdf_value(origin - self.offset, direction)

    def random(self, origin: Vector3, rng) -> Vector3:
        return self.obj.random(origin - self.offset, rng)

class RotateY(Hittable):
    """
    An instance of `obj` rotated about the y axis by `angle` degrees.
    """
    def __init__(self, obj: Hittable, angle: float):
        self.obj = obj
        self.angle = angle
        radians = math.radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)
        self.box = obj.bounding_box().rotate_y(angle)

    def to_object(self, p: Vector3) -> Vector3:
        return Vector3(
            self.cos_theta * p.x - self.sin_theta * p.z,
            p.y,
            self.sin_theta * p.x + self.cos_theta * p.z,
        )

    def to_world(self, p: Vector3) -> Vector3:
        return Vector3(
            self.cos_theta * p.x + self.sin_theta * p.z,
            p.y,
            -self.sin_theta * p.x + self.cos_theta * p.z,
        )

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        rotated_ray = Ray(self.to_object(ray.origin), self.to_object(ray.direction), ray.time)
        rec = self.obj.hit(rotated_ray, t_min, t_max, rng)
        if rec is None:
            return None
        return rec.transformed(ray, self.to_world(rec.normal))

    def bounding_box(self) -> AABB:
        return self.box

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.obj.pdf_value(self.to_object(origin), self.to_object(direction))

    def random(self, origin: Vector3, rng) -> Vector3:
        return self.to_world(self.obj.random(self.to_object(origin), rng))
