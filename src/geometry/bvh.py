# src/geometry/bvh.py
from typing import List, Optional
from core.aabb import AABB
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord

class BVHNode(Hittable):
    """
    Median-split bounding volume hierarchy.

    Each node's range of objects is split on the longest axis of its
    bounding box, after sorting by the minimum extent on that axis. A node
    over one object references it on both sides; a node over two holds one
    per side. Leaves alias the scene's objects rather than copying them.
    The tree is built once and never modified.
    """
    def __init__(self, objects: List[Hittable], start: int, end: int):
        self.box = AABB.EMPTY
        for i in range(start, end):
            self.box = AABB.surrounding_box(self.box, objects[i].bounding_box())

        axis = self.box.longest_axis()
        object_span = end - start

        if object_span == 1:
            self.left = self.right = objects[start]
        elif object_span == 2:
            self.left = objects[start]
            self.right = objects[start + 1]
        else:
            objects[start:end] = sorted(
                objects[start:end],
                key=lambda obj: obj.bounding_box().axis_interval(axis).min,
            )
            mid = start + object_span // 2
            self.left = BVHNode(objects, start, mid)
            self.right = BVHNode(objects, mid, end)

        self.box = AABB.surrounding_box(self.left.bounding_box(), self.right.bounding_box())

    @classmethod
    def from_list(cls, hittables) -> "BVHNode":
        """Builds a tree over a copy of a HittableList's objects."""
        objects = list(hittables.objects)
        if not objects:
            raise ValueError("BVHNode needs at least one object")
        return cls(objects, 0, len(objects))

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max, rng)
        if self.right is self.left:
            return hit_left
        # The right subtree may only report something closer.
        hit_right = self.right.hit(ray, t_min, hit_left.t if hit_left else t_max, rng)
        return hit_right or hit_left

    def bounding_box(self) -> AABB:
        return self.box

    def depth(self) -> int:
        left = self.left.depth() if isinstance(self.left, BVHNode) else 0
        right = self.right.depth() if isinstance(self.right, BVHNode) else 0
        return 1 + max(left, right)
