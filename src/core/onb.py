# core/onb.py
from core.vector import Vector3

class ONB:
    """
    Orthonormal basis whose w axis is aligned with a given direction.
    """
    __slots__ = ("u", "v", "w")

    def __init__(self, normal: Vector3):
        self.w = normal.normalize()
        a = Vector3(0, 1, 0) if abs(self.w.x) > 0.9 else Vector3(1, 0, 0)
        self.v = a.cross(self.w).normalize()
        self.u = self.w.cross(self.v)

    def transform(self, local: Vector3) -> Vector3:
        """Maps local (u, v, w) coordinates to world space."""
        return self.u * local.x + self.v * local.y + self.w * local.z
