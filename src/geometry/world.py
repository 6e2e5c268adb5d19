# src/geometry/world.py
import logging
from typing import Iterator, List, Optional
from core.aabb import AABB
from core.exceptions import SceneConfigurationError
from core.ray import Ray
from core.utils import random_unit_vector
from core.vector import Vector3
from geometry.bvh import BVHNode
from geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)

class HittableList(Hittable):
    """
    An ordered list of Hittable objects with a running bounding box.

    Serves both as the scene container (frozen into a BVH with build_bvh())
    and as the collection of lights sampled by the integrator.
    """
    def __init__(self, objects: Optional[List[Hittable]] = None):
        self.objects: List[Hittable] = []
        self.box = AABB.EMPTY
        for obj in objects or ():
            self.add(obj)

    def add(self, obj: Hittable):
        self.objects.append(obj)
        self.box = AABB.surrounding_box(self.box, obj.bounding_box())

    def clear(self):
        self.objects.clear()
        self.box = AABB.EMPTY

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def validate(self):
        """
        Fails fast on objects the renderer cannot trust: every object must
        report a finite, non-empty bounding box.
        """
        for index, obj in enumerate(self.objects):
            box = obj.bounding_box()
            if box.is_empty() or not box.is_finite():
                raise SceneConfigurationError(
                    f"Object {index} ({type(obj).__name__}) has an unusable bounding box: {box}"
                )

    def build_bvh(self):
        """
        Validates the objects and freezes them into a BVH. The list itself
        is left untouched.
        """
        if not self.objects:
            raise SceneConfigurationError("Cannot build a BVH over an empty scene")
        self.validate()
        root = BVHNode.from_list(self)
        logger.info("Built BVH over %d objects (depth %d)", len(self.objects), root.depth())
        return root

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far, rng)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self) -> AABB:
        return self.box

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        if not self.objects:
            return 0.0
        weight = 1.0 / len(self.objects)
        return sum(weight * obj.pdf_value(origin, direction) for obj in self.objects)

    def random(self, origin: Vector3, rng) -> Vector3:
        if not self.objects:
            return random_unit_vector(rng)
        return self.objects[rng.randrange(len(self.objects))].random(origin, rng)
