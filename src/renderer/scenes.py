# renderer/scenes.py
"""
Reference scenes. Each builder returns a Scene whose `world` is a plain
HittableList (frozen into a BVH by the renderer) and whose `lights` lists
the shapes worth sampling directly.
"""
import random
from typing import NamedTuple, Optional
from camera.camera import Camera
from core.vector import BLACK, Vector3
from geometry.box import Box
from geometry.bvh import BVHNode
from geometry.medium import ConstantMedium
from geometry.quad import Quad
from geometry.sphere import Sphere
from geometry.transform import RotateY, Translate
from geometry.world import HittableList
from materials.dielectric import Dielectric
from materials.diffuse_light import DiffuseLight
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.textures import CheckerTexture, ImageTexture, NoiseTexture

class Scene(NamedTuple):
    world: HittableList
    lights: Optional[HittableList]
    camera: Camera
    background: Vector3
    aspect_ratio: float

SKY = Vector3(0.7, 0.8, 1.0)

def _cornell_walls(world: HittableList, light_quad: Quad):
    red = Lambertian(Vector3(0.65, 0.05, 0.05))
    white = Lambertian(Vector3(0.73, 0.73, 0.73))
    green = Lambertian(Vector3(0.12, 0.45, 0.15))

    world.add(Quad(Vector3(555, 0, 0), Vector3(0, 555, 0), Vector3(0, 0, 555), green))
    world.add(Quad(Vector3(0, 0, 0), Vector3(0, 555, 0), Vector3(0, 0, 555), red))
    world.add(light_quad)
    world.add(Quad(Vector3(0, 0, 0), Vector3(555, 0, 0), Vector3(0, 0, 555), white))
    world.add(Quad(Vector3(555, 555, 555), Vector3(-555, 0, 0), Vector3(0, 0, -555), white))
    world.add(Quad(Vector3(0, 0, 555), Vector3(555, 0, 0), Vector3(0, 555, 0), white))
    return white

def _cornell_camera(aspect_ratio: float) -> Camera:
    return Camera(Vector3(278, 278, -800), Vector3(278, 278, 0), Vector3(0, 1, 0),
                  vfov=40, aspect_ratio=aspect_ratio)

def cornell_box(aspect_ratio: float = 1.0) -> Scene:
    """Cornell box with a rotated tall box, a glass sphere and a ceiling light."""
    world = HittableList()
    light = DiffuseLight(Vector3(15, 15, 15))
    # Faces down into the box.
    light_quad = Quad(Vector3(343, 554, 332), Vector3(-130, 0, 0), Vector3(0, 0, -105), light)
    white = _cornell_walls(world, light_quad)

    box1 = Box(Vector3(0, 0, 0), Vector3(165, 330, 165), white)
    world.add(Translate(RotateY(box1, 15), Vector3(265, 0, 295)))

    glass_ball = Sphere(Vector3(190, 90, 190), 90, Dielectric(1.5))
    world.add(glass_ball)

    lights = HittableList()
    lights.add(Quad(Vector3(343, 554, 332), Vector3(-130, 0, 0), Vector3(0, 0, -105), None))
    lights.add(Sphere(Vector3(190, 90, 190), 90, None))

    return Scene(world, lights, _cornell_camera(aspect_ratio), BLACK, aspect_ratio)

def cornell_diffuse(aspect_ratio: float = 1.0) -> Scene:
    """Cornell box with two diffuse boxes and only the ceiling light sampled."""
    world = HittableList()
    light = DiffuseLight(Vector3(15, 15, 15))
    light_quad = Quad(Vector3(343, 554, 332), Vector3(-130, 0, 0), Vector3(0, 0, -105), light)
    white = _cornell_walls(world, light_quad)

    box1 = Box(Vector3(0, 0, 0), Vector3(165, 330, 165), white)
    world.add(Translate(RotateY(box1, 15), Vector3(265, 0, 295)))
    box2 = Box(Vector3(0, 0, 0), Vector3(165, 165, 165), white)
    world.add(Translate(RotateY(box2, -18), Vector3(130, 0, 65)))

    lights = HittableList([light_quad])
    return Scene(world, lights, _cornell_camera(aspect_ratio), BLACK, aspect_ratio)

def cornell_smoke(aspect_ratio: float = 1.0) -> Scene:
    """Cornell box whose two boxes are filled with black and white smoke."""
    world = HittableList()
    light = DiffuseLight(Vector3(7, 7, 7))
    light_quad = Quad(Vector3(113, 554, 127), Vector3(330, 0, 0), Vector3(0, 0, 305), light)
    white = _cornell_walls(world, light_quad)

    box1 = Translate(RotateY(Box(Vector3(0, 0, 0), Vector3(165, 330, 165), white), 15),
                     Vector3(265, 0, 295))
    box2 = Translate(RotateY(Box(Vector3(0, 0, 0), Vector3(165, 165, 165), white), -18),
                     Vector3(130, 0, 65))
    world.add(ConstantMedium(box1, 0.01, Vector3(0, 0, 0)))
    world.add(ConstantMedium(box2, 0.01, Vector3(1, 1, 1)))

    lights = HittableList([Quad(Vector3(113, 554, 127), Vector3(330, 0, 0), Vector3(0, 0, 305), None)])
    return Scene(world, lights, _cornell_camera(aspect_ratio), BLACK, aspect_ratio)

def quads(aspect_ratio: float = 1.0) -> Scene:
    """Five colored quads facing the camera, lit by the sky."""
    world = HittableList()
    world.add(Quad(Vector3(-3, -2, 5), Vector3(0, 0, -4), Vector3(0, 4, 0), Lambertian(Vector3(1.0, 0.2, 0.2))))
    world.add(Quad(Vector3(-2, -2, 0), Vector3(4, 0, 0), Vector3(0, 4, 0), Lambertian(Vector3(0.2, 1.0, 0.2))))
    world.add(Quad(Vector3(3, -2, 1), Vector3(0, 0, 4), Vector3(0, 4, 0), Lambertian(Vector3(0.2, 0.2, 1.0))))
    world.add(Quad(Vector3(-2, 3, 1), Vector3(4, 0, 0), Vector3(0, 0, 4), Lambertian(Vector3(1.0, 0.5, 0.0))))
    world.add(Quad(Vector3(-2, -3, 5), Vector3(4, 0, 0), Vector3(0, 0, -4), Lambertian(Vector3(0.2, 0.8, 0.8))))

    camera = Camera(Vector3(0, 0, 9), Vector3(0, 0, 0), Vector3(0, 1, 0), vfov=80, aspect_ratio=aspect_ratio)
    return Scene(world, None, camera, SKY, aspect_ratio)

def checkered_spheres(aspect_ratio: float = 16.0 / 9.0) -> Scene:
    checker = CheckerTexture(0.32, Vector3(0.2, 0.3, 0.1), Vector3(0.9, 0.9, 0.9))
    world = HittableList()
    world.add(Sphere(Vector3(0, -10, 0), 10, Lambertian(checker)))
    world.add(Sphere(Vector3(0, 10, 0), 10, Lambertian(checker)))

    camera = Camera(Vector3(13, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0), vfov=20, aspect_ratio=aspect_ratio)
    return Scene(world, None, camera, SKY, aspect_ratio)

def perlin_spheres(aspect_ratio: float = 16.0 / 9.0, seed: int = 42) -> Scene:
    perlin = NoiseTexture(4.0, seed=seed)
    world = HittableList()
    world.add(Sphere(Vector3(0, -1000, 0), 1000, Lambertian(perlin)))
    world.add(Sphere(Vector3(0, 2, 0), 2, Lambertian(perlin)))

    camera = Camera(Vector3(13, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0), vfov=20, aspect_ratio=aspect_ratio)
    return Scene(world, None, camera, SKY, aspect_ratio)

def simple_light(aspect_ratio: float = 16.0 / 9.0, seed: int = 42) -> Scene:
    """Perlin spheres lit only by a spherical and a rectangular light."""
    perlin = NoiseTexture(4.0, seed=seed)
    diffuse_light = DiffuseLight(Vector3(4, 4, 4))
    world = HittableList()
    world.add(Sphere(Vector3(0, -1000, 0), 1000, Lambertian(perlin)))
    world.add(Sphere(Vector3(0, 2, 0), 2, Lambertian(perlin)))
    sphere_light = Sphere(Vector3(0, 7, 0), 2, diffuse_light)
    quad_light = Quad(Vector3(3, 1, -2), Vector3(2, 0, 0), Vector3(0, 2, 0), diffuse_light)
    world.add(sphere_light)
    world.add(quad_light)

    camera = Camera(Vector3(26, 3, 6), Vector3(0, 2, 0), Vector3(0, 1, 0), vfov=20, aspect_ratio=aspect_ratio)
    return Scene(world, HittableList([sphere_light, quad_light]), camera, BLACK, aspect_ratio)

def earth(texture_path: str, aspect_ratio: float = 16.0 / 9.0) -> Scene:
    globe = Sphere(Vector3(0, 0, 0), 2, Lambertian(ImageTexture(texture_path)))
    camera = Camera(Vector3(0, 0, 12), Vector3(0, 0, 0), Vector3(0, 1, 0), vfov=20, aspect_ratio=aspect_ratio)
    return Scene(HittableList([globe]), None, camera, SKY, aspect_ratio)

def bouncing_spheres(aspect_ratio: float = 16.0 / 9.0, seed: int = 42, grid: int = 11) -> Scene:
    """
    Random field of small spheres, the diffuse ones moving upward during the
    shutter interval, on a checkered ground.
    """
    rng = random.Random(seed)
    world = HittableList()
    checker = CheckerTexture(0.32, Vector3(0.2, 0.3, 0.1), Vector3(0.9, 0.9, 0.9))
    world.add(Sphere(Vector3(0, -1000, 0), 1000, Lambertian(checker)))

    small = HittableList()
    for a in range(-grid, grid):
        for b in range(-grid, grid):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Vector3(4, 0.2, 0)).length() <= 0.9:
                continue
            if choose_mat < 0.8:
                albedo = Vector3(rng.random() * rng.random(), rng.random() * rng.random(),
                                 rng.random() * rng.random())
                end = center + Vector3(0, rng.uniform(0, 0.5), 0)
                small.add(Sphere.moving(center, end, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                albedo = Vector3(rng.uniform(0.5, 1), rng.uniform(0.5, 1), rng.uniform(0.5, 1))
                small.add(Sphere(center, 0.2, Metal(albedo, rng.uniform(0, 0.5))))
            else:
                small.add(Sphere(center, 0.2, Dielectric(1.5)))
    if len(small):
        world.add(BVHNode.from_list(small))

    world.add(Sphere(Vector3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Vector3(-4, 1, 0), 1.0, Lambertian(Vector3(0.4, 0.2, 0.1))))
    world.add(Sphere(Vector3(4, 1, 0), 1.0, Metal(Vector3(0.7, 0.6, 0.5), 0.0)))

    camera = Camera(Vector3(13, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0), vfov=20,
                    aspect_ratio=aspect_ratio, aperture=0.1, focus_dist=10.0)
    return Scene(world, None, camera, SKY, aspect_ratio)

def final_scene(aspect_ratio: float = 1.0, seed: int = 42,
                texture_path: Optional[str] = None) -> Scene:
    """
    Every feature at once: a BVH of ground boxes, a moving sphere, glass,
    fuzzy metal, a medium inside glass, scene-wide fog, Perlin noise and a
    rotated cluster of small spheres. The earth sphere is only added when
    `texture_path` is given.
    """
    rng = random.Random(seed)
    world = HittableList()

    ground = Lambertian(Vector3(0.48, 0.83, 0.53))
    boxes = HittableList()
    boxes_per_side = 20
    for i in range(boxes_per_side):
        for j in range(boxes_per_side):
            w = 100.0
            x0 = -1000.0 + i * w
            z0 = -1000.0 + j * w
            boxes.add(Box(Vector3(x0, 0, z0), Vector3(x0 + w, rng.uniform(1, 101), z0 + w), ground))
    world.add(BVHNode.from_list(boxes))

    light = DiffuseLight(Vector3(7, 7, 7))
    world.add(Quad(Vector3(123, 554, 147), Vector3(300, 0, 0), Vector3(0, 0, 265), light))

    center = Vector3(400, 400, 200)
    world.add(Sphere.moving(center, center + Vector3(30, 0, 0), 50,
                            Lambertian(Vector3(0.7, 0.3, 0.1))))
    world.add(Sphere(Vector3(260, 150, 45), 50, Dielectric(1.5)))
    world.add(Sphere(Vector3(0, 150, 145), 50, Metal(Vector3(0.8, 0.8, 0.9), 1.0)))

    boundary = Sphere(Vector3(360, 150, 145), 70, Dielectric(1.5))
    world.add(boundary)
    world.add(ConstantMedium(boundary, 0.2, Vector3(0.2, 0.4, 0.9)))
    # Thin fog around everything, camera included.
    fog = Sphere(Vector3(0, 0, 0), 5000, Dielectric(1.5))
    world.add(ConstantMedium(fog, 1e-4, Vector3(1, 1, 1)))

    if texture_path is not None:
        world.add(Sphere(Vector3(400, 200, 400), 100, Lambertian(ImageTexture(texture_path))))
    world.add(Sphere(Vector3(220, 280, 300), 80, Lambertian(NoiseTexture(0.2, seed=seed))))

    white = Lambertian(Vector3(0.73, 0.73, 0.73))
    cluster = HittableList()
    for _ in range(1000):
        cluster.add(Sphere(Vector3(rng.uniform(0, 165), rng.uniform(0, 165), rng.uniform(0, 165)),
                           10, white))
    world.add(Translate(RotateY(BVHNode.from_list(cluster), 15), Vector3(-100, 270, 395)))

    camera = Camera(Vector3(478, 278, -600), Vector3(278, 278, 0), Vector3(0, 1, 0),
                    vfov=40, aspect_ratio=aspect_ratio)
    lights = HittableList([Quad(Vector3(123, 554, 147), Vector3(300, 0, 0), Vector3(0, 0, 265), None)])
    return Scene(world, lights, camera, BLACK, aspect_ratio)

SCENES = {
    "cornell": cornell_box,
    "cornell-diffuse": cornell_diffuse,
    "cornell-smoke": cornell_smoke,
    "quads": quads,
    "checkered": checkered_spheres,
    "perlin": perlin_spheres,
    "simple-light": simple_light,
    "bouncing": bouncing_spheres,
    "final": final_scene,
}
