# camera/camera.py
import math
from core.vector import Vector3
from core.ray import Ray
from core.utils import random_in_unit_disk

class Camera:
    """
    Thin-lens camera looking from `look_from` toward `look_at`.

    `vfov` is the vertical field of view in degrees. A non-zero `aperture`
    gives defocus blur with the plane of focus `focus_dist` away. Rays are
    stamped with a time drawn uniformly from the shutter interval
    [time0, time1).
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, view_up: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 10.0, time0: float = 0.0, time1: float = 1.0):
        self.position = look_from
        self.look_at = look_at
        self.view_up = view_up
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture  # Lens aperture for depth of field
        self.focus_dist = focus_dist  # Distance to focus plane
        self.lens_radius = aperture / 2.0
        self.time0 = time0
        self.time1 = time1
        self.update_camera()

    def update_camera(self):
        """Updates the camera's basis vectors and viewport."""
        self.backward = (self.position - self.look_at).normalize()
        self.right = self.view_up.cross(self.backward).normalize()
        self.up = self.backward.cross(self.right)

        # Compute viewport dimensions based on fov
        viewport_height = 2.0 * math.tan(math.radians(self.vfov) / 2)
        viewport_width = self.aspect_ratio * viewport_height

        # Scale by focus distance
        self.horizontal = self.right * (viewport_width * self.focus_dist)
        self.vertical = self.up * (viewport_height * self.focus_dist)

        self.lower_left_corner = (self.position -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.backward * self.focus_dist)

    def get_ray(self, s: float, t: float, rng) -> Ray:
        """
        Ray through the viewport point (s, t), where (0, 0) is the lower-left
        corner and (1, 1) the upper-right.
        """
        time = self.time0 + rng.random() * (self.time1 - self.time0)
        origin = self.position
        if self.lens_radius > 0:
            rd = random_in_unit_disk(rng) * self.lens_radius
            origin = origin + self.right * rd.x + self.up * rd.y

        direction = (self.lower_left_corner +
                     self.horizontal * s +
                     self.vertical * t -
                     origin)
        return Ray(origin, direction, time)
