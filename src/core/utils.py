# core/utils.py
"""
Random sampling helpers. Every helper draws from an explicit `rng`
(anything with `random()` and `uniform()`, normally a `random.Random`
owned by one pixel) so renders are reproducible per seed.
"""
import math
from core.vector import Vector3

def random_in_unit_sphere(rng) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.length_squared() < 1.0:
            return p

def random_unit_vector(rng) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    while True:
        p = random_in_unit_sphere(rng)
        length_squared = p.length_squared()
        if length_squared > 1e-160:
            return p / math.sqrt(length_squared)

def random_in_unit_disk(rng) -> Vector3:
    """
    Returns a random point inside the unit disk in the xy-plane.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0)
        if p.length_squared() < 1.0:
            return p

def random_cosine_direction(rng) -> Vector3:
    """
    Returns a direction about +z with density cos(theta) / pi.
    """
    r1 = rng.random()
    r2 = rng.random()
    phi = 2 * math.pi * r1
    sqrt_r2 = math.sqrt(r2)
    return Vector3(math.cos(phi) * sqrt_r2, math.sin(phi) * sqrt_r2, math.sqrt(1 - r2))

def random_to_sphere(rng, radius: float, distance_squared: float) -> Vector3:
    """
    Returns a direction about +z uniformly distributed over the cone
    subtended by a sphere of `radius` whose center lies `sqrt(distance_squared)`
    away along +z.
    """
    r1 = rng.random()
    r2 = rng.random()
    cos_theta_max = math.sqrt(max(0.0, 1 - radius * radius / distance_squared))
    z = 1 + r2 * (cos_theta_max - 1)
    phi = 2 * math.pi * r1
    sin_theta = math.sqrt(max(0.0, 1 - z * z))
    return Vector3(math.cos(phi) * sin_theta, math.sin(phi) * sin_theta, z)
