# src/core/aabb.py
import math
from core.interval import Interval
from core.vector import Vector3

class AABB:
    """
    Axis-aligned bounding box stored as one Interval per axis.

    Every axis is widened by PADDING at construction so that flat geometry
    (such as an axis-aligned quad) never produces a zero-thickness box.
    """
    PADDING = 1e-3

    def __init__(self, x: Interval = Interval.EMPTY, y: Interval = Interval.EMPTY,
                 z: Interval = Interval.EMPTY):
        self.x = x.expand(self.PADDING) if not x.is_empty() else x
        self.y = y.expand(self.PADDING) if not y.is_empty() else y
        self.z = z.expand(self.PADDING) if not z.is_empty() else z

    @classmethod
    def from_points(cls, a: Vector3, b: Vector3) -> "AABB":
        """Box spanning two opposite corners given in any order."""
        return cls(
            Interval(min(a.x, b.x), max(a.x, b.x)),
            Interval(min(a.y, b.y), max(a.y, b.y)),
            Interval(min(a.z, b.z), max(a.z, b.z)),
        )

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        box = AABB.__new__(AABB)
        box.x = Interval.union(box0.x, box1.x)
        box.y = Interval.union(box0.y, box1.y)
        box.z = Interval.union(box0.z, box1.z)
        return box

    @property
    def minimum(self) -> Vector3:
        return Vector3(self.x.min, self.y.min, self.z.min)

    @property
    def maximum(self) -> Vector3:
        return Vector3(self.x.max, self.y.max, self.z.max)

    def axis_interval(self, axis: int) -> Interval:
        if axis == 1:
            return self.y
        if axis == 2:
            return self.z
        return self.x

    def longest_axis(self) -> int:
        x_size, y_size, z_size = self.x.size(), self.y.size(), self.z.size()
        if x_size >= y_size and x_size >= z_size:
            return 0
        if y_size >= z_size:
            return 1
        return 2

    def is_empty(self) -> bool:
        return self.x.is_empty() or self.y.is_empty() or self.z.is_empty()

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (
            self.x.min, self.x.max, self.y.min, self.y.max, self.z.min, self.z.max))

    def contains_box(self, other: "AABB") -> bool:
        return (self.x.min <= other.x.min and other.x.max <= self.x.max and
                self.y.min <= other.y.min and other.y.max <= self.y.max and
                self.z.min <= other.z.min and other.z.max <= self.z.max)

    def hit(self, ray, t_min: float, t_max: float) -> bool:
        # Slab method: for each axis, narrow the [t_min, t_max] window.
        origin = ray.origin
        direction = ray.direction
        for axis in range(3):
            slab = self.axis_interval(axis)
            d = direction[axis]
            o = origin[axis]
            if d == 0.0:
                if o < slab.min or o > slab.max:
                    return False
                continue
            inv_d = 1.0 / d
            t0 = (slab.min - o) * inv_d
            t1 = (slab.max - o) * inv_d
            if inv_d < 0:
                t0, t1 = t1, t0
            if t0 > t_min:
                t_min = t0
            if t1 < t_max:
                t_max = t1
            if t_max <= t_min:
                return False
        return True

    def translate(self, offset: Vector3) -> "AABB":
        box = AABB.__new__(AABB)
        box.x = self.x.translate(offset.x)
        box.y = self.y.translate(offset.y)
        box.z = self.z.translate(offset.z)
        return box

    def rotate_y(self, angle_degrees: float) -> "AABB":
        """
        Box enclosing this box rotated about the y axis, found by rotating
        all eight corners and taking the axis-wise extremes.
        """
        radians = math.radians(angle_degrees)
        sin_theta = math.sin(radians)
        cos_theta = math.cos(radians)

        lo = [math.inf, math.inf, math.inf]
        hi = [-math.inf, -math.inf, -math.inf]
        for x in (self.x.min, self.x.max):
            for y in (self.y.min, self.y.max):
                for z in (self.z.min, self.z.max):
                    corner = (cos_theta * x + sin_theta * z, y, -sin_theta * x + cos_theta * z)
                    for axis in range(3):
                        lo[axis] = min(lo[axis], corner[axis])
                        hi[axis] = max(hi[axis], corner[axis])

        box = AABB.__new__(AABB)
        box.x = Interval(lo[0], hi[0])
        box.y = Interval(lo[1], hi[1])
        box.z = Interval(lo[2], hi[2])
        return box

    def __repr__(self) -> str:
        return f"AABB({self.x}, {self.y}, {self.z})"


AABB.EMPTY = AABB()
AABB.UNIVERSE = AABB(Interval.UNIVERSE, Interval.UNIVERSE, Interval.UNIVERSE)
