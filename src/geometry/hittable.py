# geometry/hittable.py
from typing import NamedTuple, Optional
from core.aabb import AABB
from core.ray import Ray
from core.utils import random_unit_vector
from core.vector import Vector3

class HitRecord(NamedTuple):
    """
    Records details of a ray-object intersection. Never mutated; transforms
    build a new record instead.

    `normal` always opposes the incoming ray; `front_face` tells whether the
    ray arrived from the side the outward normal points to.
    """
    ray: Ray
    t: float
    p: Vector3
    normal: Vector3
    front_face: bool
    material: object
    u: float = 0.0
    v: float = 0.0

    @classmethod
    def from_outward_normal(cls, ray: Ray, t: float, outward_normal: Vector3,
                            material, u: float = 0.0, v: float = 0.0) -> "HitRecord":
        """
        Ensures that the normal always points against the ray.
        """
        front_face = ray.direction.dot(outward_normal) < 0
        normal = outward_normal if front_face else -outward_normal
        return cls(ray, t, ray.at(t), normal, front_face, material, u, v)

    def transformed(self, ray: Ray, normal: Vector3) -> "HitRecord":
        """
        The same hit expressed against the world-space `ray`, with a
        world-space normal. Face orientation and surface coordinates carry over.
        """
        return HitRecord(ray, self.t, ray.at(self.t), normal, self.front_face,
                         self.material, self.u, self.v)

class Hittable:
    """
    Abstract class for objects that can be hit by a ray.

    Objects that can act as light sources for importance sampling also
    override pdf_value() and random().
    """
    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self) -> AABB:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        """Solid-angle density of sampling `direction` from `origin` toward this object."""
        return 0.0

    def random(self, origin: Vector3, rng) -> Vector3:
        """A direction from `origin` toward this object."""
        return random_unit_vector(rng)
