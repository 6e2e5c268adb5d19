"""Tests for static and moving spheres."""

import math
import random

import pytest

from core.ray import Ray
from core.vector import Vector3
from geometry.sphere import Sphere, sphere_uv


class TestSphereHit:
    def test_unit_sphere_hit_from_front(self, gray) -> None:
        sphere = Sphere(Vector3(0, 0, 0), 1.0, gray)
        rec = sphere.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 0.001, math.inf)
        assert rec is not None
        assert rec.t == pytest.approx(4.0)
        assert rec.normal.x == pytest.approx(0.0)
        assert rec.normal.y == pytest.approx(0.0)
        assert rec.normal.z == pytest.approx(1.0)
        assert rec.front_face
        assert rec.material is gray

    def test_miss(self, gray) -> None:
        sphere = Sphere(Vector3(0, 0, 0), 1.0, gray)
        assert sphere.hit(Ray(Vector3(0, 2, 5), Vector3(0, 0, -1)), 0.001, math.inf) is None

    def test_far_root_when_near_root_out_of_range(self, gray) -> None:
        sphere = Sphere(Vector3(0, 0, 0), 1.0, gray)
        rec = sphere.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 4.5, math.inf)
        assert rec.t == pytest.approx(6.0)
        # Leaving the sphere: the stored normal opposes the ray.
        assert not rec.front_face
        assert rec.normal.z == pytest.approx(1.0)

    def test_hit_from_inside(self, gray) -> None:
        sphere = Sphere(Vector3(0, 0, 0), 2.0, gray)
        rec = sphere.hit(Ray(Vector3(0, 0, 0), Vector3(1, 0, 0)), 0.001, math.inf)
        assert rec.t == pytest.approx(2.0)
        assert not rec.front_face
        assert rec.normal.dot(Vector3(1, 0, 0)) < 0

    def test_hit_matches_discriminant(self, gray) -> None:
        gen = random.Random(3)
        center = Vector3(0.5, -0.25, 1.0)
        radius = 1.5
        sphere = Sphere(center, radius, gray)
        for _ in range(500):
            origin = Vector3(gen.uniform(-6, 6), gen.uniform(-6, 6), gen.uniform(-6, 6))
            direction = Vector3(gen.uniform(-1, 1), gen.uniform(-1, 1), gen.uniform(-1, 1))
            ray = Ray(origin, direction)
            oc = origin - center
            a = direction.length_squared()
            half_b = oc.dot(direction)
            c = oc.length_squared() - radius * radius
            discriminant = half_b * half_b - a * c

            rec = sphere.hit(ray, -math.inf, math.inf)
            if discriminant < 0:
                assert rec is None
            else:
                assert rec is not None
                assert (ray.at(rec.t) - center).length() == pytest.approx(radius, rel=1e-6)

    def test_zero_length_direction_misses(self, gray) -> None:
        sphere = Sphere(Vector3(0, 0, 0), 1.0, gray)
        assert sphere.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, 0)), 0.001, math.inf) is None


class TestMovingSphere:
    def test_center_moves_with_time(self, gray) -> None:
        sphere = Sphere.moving(Vector3(0, 0, 0), Vector3(0, 2, 0), 0.5, gray)
        assert sphere.is_moving
        assert sphere.center_at(0.5) == Vector3(0, 1, 0)

    def test_hit_uses_ray_time(self, gray) -> None:
        sphere = Sphere.moving(Vector3(0, 0, 0), Vector3(0, 2, 0), 0.5, gray)
        early = Ray(Vector3(0, 2, 5), Vector3(0, 0, -1), time=0.0)
        late = Ray(Vector3(0, 2, 5), Vector3(0, 0, -1), time=1.0)
        assert sphere.hit(early, 0.001, math.inf) is None
        assert sphere.hit(late, 0.001, math.inf).t == pytest.approx(4.5)

    def test_box_covers_the_sweep(self, gray) -> None:
        box = Sphere.moving(Vector3(0, 0, 0), Vector3(0, 2, 0), 0.5, gray).bounding_box()
        assert box.y.min <= -0.5
        assert box.y.max >= 2.5


class TestSphereSampling:
    def test_random_directions_hit_the_sphere(self, rng) -> None:
        sphere = Sphere(Vector3(0, 0, -5), 1.0, None)
        origin = Vector3(0, 0, 0)
        for _ in range(200):
            direction = sphere.random(origin, rng)
            assert sphere.hit(Ray(origin, direction), 0.001, math.inf) is not None
            assert sphere.pdf_value(origin, direction) > 0

    def test_pdf_value_is_inverse_solid_angle(self) -> None:
        sphere = Sphere(Vector3(0, 0, -2), 1.0, None)
        cos_theta_max = math.sqrt(1 - 1 / 4)
        expected = 1 / (2 * math.pi * (1 - cos_theta_max))
        assert sphere.pdf_value(Vector3(0, 0, 0), Vector3(0, 0, -1)) == pytest.approx(expected)

    def test_pdf_value_zero_for_missing_direction(self) -> None:
        sphere = Sphere(Vector3(0, 0, -2), 1.0, None)
        assert sphere.pdf_value(Vector3(0, 0, 0), Vector3(0, 0, 1)) == 0.0

    def test_origin_inside_sphere_is_guarded(self, rng) -> None:
        sphere = Sphere(Vector3(0, 0, 0), 1.0, None)
        assert sphere.pdf_value(Vector3(0, 0, 0), Vector3(1, 0, 0)) == 0.0
        assert sphere.random(Vector3(0, 0, 0), rng).length() == pytest.approx(1.0)


class TestSphereUV:
    def test_poles_and_equator(self) -> None:
        assert sphere_uv(Vector3(0, -1, 0))[1] == pytest.approx(0.0)
        assert sphere_uv(Vector3(0, 1, 0))[1] == pytest.approx(1.0)
        u, v = sphere_uv(Vector3(1, 0, 0))
        assert u == pytest.approx(0.5)
        assert v == pytest.approx(0.5)
        assert sphere_uv(Vector3(0, 0, 1))[0] == pytest.approx(0.25)
