# geometry/box.py
from core.vector import Vector3
from geometry.quad import Quad
from geometry.world import HittableList

class Box(HittableList):
    """
    Axis-aligned box spanning two opposite corners, built from six
    outward-facing quads.
    """
    def __init__(self, a: Vector3, b: Vector3, material):
        super().__init__()
        lo = Vector3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))
        hi = Vector3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))

        dx = Vector3(hi.x - lo.x, 0, 0)
        dy = Vector3(0, hi.y - lo.y, 0)
        dz = Vector3(0, 0, hi.z - lo.z)

        self.add(Quad(Vector3(lo.x, lo.y, hi.z), dx, dy, material))   # front
        self.add(Quad(Vector3(hi.x, lo.y, hi.z), -dz, dy, material))  # right
        self.add(Quad(Vector3(hi.x, lo.y, lo.z), -dx, dy, material))  # back
        self.add(Quad(Vector3(lo.x, lo.y, lo.z), dz, dy, material))   # left
        self.add(Quad(Vector3(lo.x, hi.y, hi.z), dx, -dz, material))  # top
        self.add(Quad(Vector3(lo.x, lo.y, lo.z), dx, dz, material))   # bottom
