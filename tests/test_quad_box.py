"""Tests for Quad and Box."""

import math

import pytest

from core.exceptions import SceneConfigurationError
from core.ray import Ray
from core.vector import Vector3
from geometry.box import Box
from geometry.quad import Quad


@pytest.fixture
def square(gray):
    """2x2 square in the z=0 plane, centered on the origin, facing +z."""
    return Quad(Vector3(-1, -1, 0), Vector3(2, 0, 0), Vector3(0, 2, 0), gray)


class TestQuad:
    def test_hit_center(self, square) -> None:
        rec = square.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 0.001, math.inf)
        assert rec.t == pytest.approx(5.0)
        assert rec.front_face
        assert rec.normal == Vector3(0, 0, 1)
        assert rec.u == pytest.approx(0.5)
        assert rec.v == pytest.approx(0.5)

    def test_hit_from_behind_flips_normal(self, square) -> None:
        rec = square.hit(Ray(Vector3(0.5, 0.5, -3), Vector3(0, 0, 1)), 0.001, math.inf)
        assert rec.t == pytest.approx(3.0)
        assert not rec.front_face
        assert rec.normal == Vector3(0, 0, -1)

    def test_miss_outside_edges(self, square) -> None:
        assert square.hit(Ray(Vector3(1.5, 0, 5), Vector3(0, 0, -1)), 0.001, math.inf) is None
        assert square.hit(Ray(Vector3(0, -1.01, 5), Vector3(0, 0, -1)), 0.001, math.inf) is None

    def test_parallel_ray_misses(self, square) -> None:
        assert square.hit(Ray(Vector3(-5, 0, 0), Vector3(1, 0, 0)), 0.001, math.inf) is None

    def test_out_of_range_t_misses(self, square) -> None:
        assert square.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 0.001, 4.0) is None

    def test_degenerate_edges_rejected(self, gray) -> None:
        with pytest.raises(SceneConfigurationError):
            Quad(Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(2, 0, 0), gray)

    def test_flat_quad_has_thick_box(self, square) -> None:
        assert square.bounding_box().z.size() > 0

    def test_pdf_value_straight_on(self) -> None:
        light = Quad(Vector3(-1, -1, -1), Vector3(2, 0, 0), Vector3(0, 2, 0), None)
        # distance^2 / (cos * area) = 1 / (1 * 4)
        assert light.pdf_value(Vector3(0, 0, 0), Vector3(0, 0, -1)) == pytest.approx(0.25)
        assert light.pdf_value(Vector3(0, 0, 0), Vector3(0, 0, 1)) == 0.0

    def test_random_points_land_on_quad(self, rng) -> None:
        light = Quad(Vector3(-1, -1, -1), Vector3(2, 0, 0), Vector3(0, 2, 0), None)
        origin = Vector3(0, 0, 0)
        for _ in range(100):
            direction = light.random(origin, rng)
            assert direction.z == pytest.approx(-1.0)
            assert -1 <= direction.x <= 1
            assert -1 <= direction.y <= 1


class TestBox:
    def test_six_faces_pointing_outward(self, gray) -> None:
        box = Box(Vector3(0, 0, 0), Vector3(1, 2, 3), gray)
        center = Vector3(0.5, 1, 1.5)
        assert len(box) == 6
        for face in box:
            face_center = face.q + (face.u + face.v) * 0.5
            assert (face_center - center).dot(face.normal) > 0

    def test_hit_from_outside(self, gray) -> None:
        box = Box(Vector3(0, 0, 0), Vector3(1, 1, 1), gray)
        rec = box.hit(Ray(Vector3(0.5, 0.5, 5), Vector3(0, 0, -1)), 0.001, math.inf)
        assert rec.t == pytest.approx(4.0)
        assert rec.front_face
        assert rec.normal == Vector3(0, 0, 1)

    def test_hit_from_inside(self, gray) -> None:
        box = Box(Vector3(0, 0, 0), Vector3(1, 1, 1), gray)
        rec = box.hit(Ray(Vector3(0.5, 0.5, 0.5), Vector3(1, 0, 0)), 0.001, math.inf)
        assert rec.t == pytest.approx(0.5)
        assert not rec.front_face

    def test_corners_in_any_order(self, gray) -> None:
        box = Box(Vector3(1, 1, 1), Vector3(0, 0, 0), gray)
        assert box.bounding_box().contains_box(Box(Vector3(0, 0, 0), Vector3(1, 1, 1), gray).bounding_box())
