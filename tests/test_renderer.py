"""Tests for the path-tracing integrator and the render loop."""

import itertools
import math
import random
import statistics

import numpy as np
import pytest
from PIL import Image

from camera.camera import Camera
from core.exceptions import DegenerateSampleError, SceneConfigurationError
from core.ray import Ray
from core.vector import BLACK, WHITE, Vector3
from geometry.box import Box
from geometry.quad import Quad
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.diffuse_light import DiffuseLight
from materials.lambertian import Lambertian
from materials.material import Material, ScatterRecord
from materials.pdf import Pdf
from renderer import raytracer
from renderer.image import Canvas
from renderer.raytracer import Renderer, render
from renderer.scenes import SCENES, Scene, final_scene


def small_cornell() -> Scene:
    """Unit-sized closed box: five walls, a ceiling light and one diffuse block."""
    red = Lambertian(Vector3(0.65, 0.05, 0.05))
    white = Lambertian(Vector3(0.73, 0.73, 0.73))
    green = Lambertian(Vector3(0.12, 0.45, 0.15))
    light = DiffuseLight(Vector3(15, 15, 15))

    world = HittableList()
    world.add(Quad(Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 1), green))
    world.add(Quad(Vector3(0, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 1), red))
    world.add(Quad(Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(0, 0, 1), white))
    world.add(Quad(Vector3(0, 1, 0), Vector3(1, 0, 0), Vector3(0, 0, 1), white))
    world.add(Quad(Vector3(0, 0, 1), Vector3(1, 0, 0), Vector3(0, 1, 0), white))
    light_quad = Quad(Vector3(0.3, 0.999, 0.3), Vector3(0.4, 0, 0), Vector3(0, 0, 0.4), light)
    world.add(light_quad)
    world.add(Box(Vector3(0.55, 0, 0.5), Vector3(0.8, 0.3, 0.75), white))

    camera = Camera(Vector3(0.5, 0.5, -1.4), Vector3(0.5, 0.5, 0), Vector3(0, 1, 0),
                    vfov=40, aspect_ratio=1.0)
    return Scene(world, HittableList([light_quad]), camera, BLACK, 1.0)


class ZeroPdf(Pdf):
    def value(self, direction):
        return 0.0

    def generate(self, rng):
        return Vector3(0, 1, 0)


class DegenerateMaterial(Material):
    def scatter(self, rec, rng):
        return ScatterRecord(WHITE, pdf=ZeroPdf())


class NaNLight(Material):
    def emitted(self, rec, u, v, p):
        return Vector3(math.nan, 0, 0)


def facing_sphere(material) -> Scene:
    world = HittableList([Sphere(Vector3(0, 0, -3), 1.0, material)])
    camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), vfov=20, aspect_ratio=1.0)
    return Scene(world, None, camera, Vector3(0.2, 0.3, 0.4), 1.0)


class TestRendererSetup:
    @pytest.mark.parametrize(
        "kwargs",
        [dict(width=0), dict(height=-1), dict(samples_per_pixel=0), dict(max_depth=0)],
    )
    def test_rejects_invalid_parameters(self, kwargs) -> None:
        scene = facing_sphere(Lambertian(WHITE))
        settings = dict(width=4, height=4, samples_per_pixel=1, max_depth=2)
        settings.update(kwargs)
        with pytest.raises(SceneConfigurationError):
            Renderer(scene.world, scene.camera, **settings)

    def test_rejects_empty_world(self) -> None:
        camera = facing_sphere(None).camera
        with pytest.raises(SceneConfigurationError):
            Renderer(HittableList(), camera, 4, 4)

    def test_empty_light_list_means_material_sampling(self) -> None:
        scene = facing_sphere(Lambertian(WHITE))
        renderer = Renderer(scene.world, scene.camera, 2, 2, lights=HittableList())
        assert renderer.lights is None

    def test_world_is_frozen_into_bvh(self) -> None:
        scene = small_cornell()
        renderer = Renderer(scene.world, scene.camera, 2, 2)
        assert type(renderer.world).__name__ == "BVHNode"


class TestRayColor:
    def test_depth_exhausted_is_black(self, rng) -> None:
        scene = facing_sphere(DiffuseLight(WHITE))
        renderer = Renderer(scene.world, scene.camera, 2, 2, background=scene.background)
        assert renderer.ray_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0, rng) == BLACK

    def test_miss_returns_background(self, rng) -> None:
        scene = facing_sphere(Lambertian(WHITE))
        renderer = Renderer(scene.world, scene.camera, 2, 2, background=scene.background)
        color = renderer.ray_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, 1)), 5, rng)
        assert color == scene.background

    def test_emitter_returns_its_emission(self, rng) -> None:
        scene = facing_sphere(DiffuseLight(Vector3(2, 3, 4)))
        renderer = Renderer(scene.world, scene.camera, 2, 2)
        color = renderer.ray_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 5, rng)
        assert color == Vector3(2, 3, 4)

    def test_white_furnace(self, rng) -> None:
        # A non-absorbing diffuse sphere under a uniform white sky reflects
        # exactly the sky radiance.
        scene = facing_sphere(Lambertian(WHITE))
        renderer = Renderer(scene.world, scene.camera, 2, 2, background=WHITE, max_depth=50)
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        for _ in range(20):
            color = renderer.ray_color(ray, 50, rng)
            assert color.x == pytest.approx(1.0)

    def test_zero_density_sample_is_rejected(self, rng) -> None:
        scene = facing_sphere(DegenerateMaterial())
        renderer = Renderer(scene.world, scene.camera, 2, 2, background=WHITE)
        color = renderer.ray_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 5, rng)
        assert color == BLACK
        assert renderer.degenerate_samples == 1

    def test_zero_density_sample_raises_in_strict_mode(self, rng) -> None:
        scene = facing_sphere(DegenerateMaterial())
        renderer = Renderer(scene.world, scene.camera, 2, 2, background=WHITE, strict=True)
        with pytest.raises(DegenerateSampleError):
            renderer.ray_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 5, rng)


class TestRenderPixel:
    def test_non_finite_samples_are_discarded(self) -> None:
        scene = facing_sphere(NaNLight())
        renderer = Renderer(scene.world, scene.camera, 3, 3, samples_per_pixel=5)
        assert renderer.render_pixel(1, 1) == BLACK
        assert renderer.discarded_samples == 5

    def test_background_pixel(self) -> None:
        scene = facing_sphere(Lambertian(WHITE))
        camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, 1), Vector3(0, 1, 0), vfov=20, aspect_ratio=1.0)
        renderer = Renderer(scene.world, camera, 3, 3, samples_per_pixel=4, background=scene.background)
        color = renderer.render_pixel(0, 0)
        assert color.x == pytest.approx(0.2)
        assert color.z == pytest.approx(0.4)

    def test_same_seed_same_pixel(self) -> None:
        scene = small_cornell()
        a = Renderer(scene.world, scene.camera, 8, 8, lights=scene.lights, samples_per_pixel=4, seed=3)
        b = Renderer(scene.world, scene.camera, 8, 8, lights=scene.lights, samples_per_pixel=4, seed=3)
        assert a.render_pixel(4, 2) == b.render_pixel(4, 2)

    def test_variance_drops_with_more_samples(self) -> None:
        scene = small_cornell()

        def estimates(spp):
            values = []
            for seed in range(12):
                renderer = Renderer(scene.world, scene.camera, 16, 16, lights=scene.lights,
                                    samples_per_pixel=spp, max_depth=8, seed=seed)
                values.append(renderer.render_pixel(4, 3).y)
            return values

        coarse = estimates(4)
        fine = estimates(64)
        assert statistics.pvariance(fine) < statistics.pvariance(coarse)
        spread = math.sqrt(statistics.pvariance(coarse) / len(coarse))
        assert abs(statistics.mean(fine) - statistics.mean(coarse)) <= 5 * spread + 1e-9
        assert statistics.mean(fine) > 0


class TestRender:
    def test_cornell_box_is_lit_under_the_light(self) -> None:
        scene = small_cornell()
        image = render(scene.world, scene.lights, scene.camera, 16, 16,
                       samples_per_pixel=16, max_depth=6, background=scene.background, seed=1)
        assert image.shape == (16, 16, 3)
        assert np.isfinite(image).all()
        assert image.mean() > 0.05

        luminance = image.sum(axis=2)
        row, col = np.unravel_index(np.argmax(luminance), luminance.shape)
        # Row 0 is the top of the picture; the light sits near the top middle.
        assert row <= 4
        assert 5 <= col <= 10

    def test_progress_and_canvas(self) -> None:
        scene = facing_sphere(Lambertian(Vector3(0.5, 0.5, 0.5)))
        canvas = Canvas(4, 3)
        calls = []
        image = render(scene.world, None, scene.camera, 4, 3, samples_per_pixel=2, max_depth=3,
                       background=scene.background, canvas=canvas,
                       progress=lambda done, total: calls.append((done, total)))
        assert calls[-1] == (12, 12)
        assert len(calls) == 12
        np.testing.assert_allclose(canvas.data, image)

    def test_same_seed_same_image(self) -> None:
        scene = small_cornell()
        first = render(scene.world, scene.lights, scene.camera, 4, 4, samples_per_pixel=2, seed=9)
        second = render(scene.world, scene.lights, scene.camera, 4, 4, samples_per_pixel=2, seed=9)
        np.testing.assert_array_equal(first, second)

    def test_time_limit_stops_between_pixels(self, monkeypatch) -> None:
        clock = itertools.count()
        monkeypatch.setattr(raytracer.time, "monotonic", lambda: float(next(clock)))
        scene = facing_sphere(DiffuseLight(WHITE))
        calls = []
        image = render(scene.world, None, scene.camera, 3, 3, samples_per_pixel=1,
                       background=WHITE, time_limit=2.5,
                       progress=lambda done, total: calls.append(done))
        # The clock ticks once per check, so only the first two pixels start.
        assert calls == [1, 2]
        assert (image[0, :2] > 0).all()
        assert (image[0, 2] == 0).all()
        assert (image[1:] == 0).all()


class TestScenes:
    @pytest.mark.parametrize("name", sorted(SCENES))
    def test_reference_scene_renders(self, name: str) -> None:
        scene = SCENES[name]()
        image = render(scene.world, scene.lights, scene.camera, 3, 2, samples_per_pixel=1,
                       max_depth=3, background=scene.background)
        assert image.shape == (2, 3, 3)
        assert np.isfinite(image).all()

    def test_final_scene_adds_earth_only_with_texture(self, tmp_path) -> None:
        path = tmp_path / "earth.png"
        Image.fromarray(np.full((4, 8, 3), 128, dtype=np.uint8)).save(path)
        plain = final_scene()
        textured = final_scene(texture_path=str(path))
        assert len(textured.world) == len(plain.world) + 1

    def test_final_scene_camera_sits_inside_fog(self) -> None:
        scene = final_scene()
        origin = scene.camera.get_ray(0.5, 0.5, random.Random(0)).origin
        assert origin.length() < 5000
