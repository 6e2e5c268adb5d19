# materials/perlin.py
import math
import numpy as np
from numba import njit
from core.vector import Vector3

POINT_COUNT = 256

@njit
def _noise(ranvec, perm_x, perm_y, perm_z, x, y, z):
    fx = math.floor(x)
    fy = math.floor(y)
    fz = math.floor(z)
    u = x - fx
    v = y - fy
    w = z - fz
    i = int(fx)
    j = int(fy)
    k = int(fz)

    # Hermite smoothing of the lattice weights.
    uu = u * u * (3.0 - 2.0 * u)
    vv = v * v * (3.0 - 2.0 * v)
    ww = w * w * (3.0 - 2.0 * w)

    accum = 0.0
    for di in range(2):
        for dj in range(2):
            for dk in range(2):
                idx = perm_x[(i + di) & 255] ^ perm_y[(j + dj) & 255] ^ perm_z[(k + dk) & 255]
                dot = (ranvec[idx, 0] * (u - di) +
                       ranvec[idx, 1] * (v - dj) +
                       ranvec[idx, 2] * (w - dk))
                accum += ((di * uu + (1 - di) * (1 - uu)) *
                          (dj * vv + (1 - dj) * (1 - vv)) *
                          (dk * ww + (1 - dk) * (1 - ww)) * dot)
    return accum

@njit
def _turbulence(ranvec, perm_x, perm_y, perm_z, x, y, z, depth):
    accum = 0.0
    weight = 1.0
    for _ in range(depth):
        accum += weight * _noise(ranvec, perm_x, perm_y, perm_z, x, y, z)
        weight *= 0.5
        x *= 2.0
        y *= 2.0
        z *= 2.0
    return abs(accum)

class Perlin:
    """
    Gradient (Perlin) noise over 3D space: random unit gradients on an
    integer lattice, hashed through three permutation tables. Values lie
    roughly in [-1, 1].
    """
    def __init__(self, seed=None):
        rng = np.random.default_rng(seed)
        ranvec = rng.uniform(-1.0, 1.0, size=(POINT_COUNT, 3))
        lengths = np.linalg.norm(ranvec, axis=1)
        lengths[lengths == 0] = 1.0
        self.ranvec = ranvec / lengths[:, None]
        self.perm_x = rng.permutation(POINT_COUNT).astype(np.int64)
        self.perm_y = rng.permutation(POINT_COUNT).astype(np.int64)
        self.perm_z = rng.permutation(POINT_COUNT).astype(np.int64)

    def noise(self, p: Vector3) -> float:
        return float(_noise(self.ranvec, self.perm_x, self.perm_y, self.perm_z,
                            float(p.x), float(p.y), float(p.z)))

    def turbulence(self, p: Vector3, depth: int = 7) -> float:
        """Sum of `depth` octaves of noise, each at double frequency and half weight."""
        return float(_turbulence(self.ranvec, self.perm_x, self.perm_y, self.perm_z,
                                 float(p.x), float(p.y), float(p.z), int(depth)))
