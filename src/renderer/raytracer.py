# renderer/raytracer.py
"""
Monte Carlo path tracer.

The Renderer estimates the radiance arriving at each pixel by averaging
independent samples of `ray_color`, the recursive light-transport
estimator. Diffuse and volumetric bounces draw their next direction from an
even mixture of the material's own distribution and a distribution aimed at
the scene's lights, then reweight by scattering_pdf / mixture_pdf so the
estimate stays unbiased whichever strategy produced the direction.

Example:
    >>> from renderer.scenes import cornell_box
    >>> from renderer.raytracer import render
    >>> scene = cornell_box()
    >>> image = render(scene.world, scene.lights, scene.camera, 64, 64,
    ...                samples_per_pixel=16, max_depth=10, background=scene.background)
"""
import itertools
import logging
import math
import random
import time
from typing import Callable, Optional
import numpy as np
from core.exceptions import DegenerateSampleError, SceneConfigurationError
from core.ray import Ray
from core.vector import BLACK, Vector3
from geometry.hittable import Hittable
from geometry.world import HittableList
from materials.pdf import HittablePdf, MixturePdf

logger = logging.getLogger(__name__)

# Minimum hit distance; keeps scattered rays from re-hitting their origin.
EPSILON = 1e-3
DEFAULT_MAX_DEPTH = 50
DEFAULT_SAMPLES = 100

ProgressCallback = Callable[[int, int], None]

def freeze_scene(world: Hittable) -> Hittable:
    """
    Validates a scene and, for a plain list of objects, builds its BVH.
    Any other Hittable (already a BVH, a single object) is used as given.
    """
    if isinstance(world, HittableList):
        return world.build_bvh()
    box = world.bounding_box()
    if box.is_empty() or not box.is_finite():
        raise SceneConfigurationError(f"Scene has an unusable bounding box: {box}")
    return world

class Renderer:
    """
    Renders one scene from one camera into a (height, width, 3) array of
    linear radiance values. Pixel sampling is stratified on a
    sqrt(spp) x sqrt(spp) grid, with any leftover samples drawn uniformly.

    Each pixel draws from its own random.Random seeded from (seed, x, y),
    so a render is reproducible and pixels are statistically independent.
    """
    def __init__(self, world: Hittable, camera, width: int, height: int,
                 lights: Optional[Hittable] = None,
                 samples_per_pixel: int = DEFAULT_SAMPLES,
                 max_depth: int = DEFAULT_MAX_DEPTH,
                 background: Vector3 = BLACK,
                 seed: int = 0,
                 strict: bool = False):
        if width <= 0 or height <= 0:
            raise SceneConfigurationError(f"Image size must be positive, got {width}x{height}")
        if samples_per_pixel <= 0:
            raise SceneConfigurationError(f"samples_per_pixel must be positive, got {samples_per_pixel}")
        if max_depth < 1:
            raise SceneConfigurationError(f"max_depth must be at least 1, got {max_depth}")

        self.world = freeze_scene(world)
        self.lights = lights
        if isinstance(lights, HittableList):
            lights.validate()
            if len(lights) == 0:
                self.lights = None
        self.camera = camera
        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.background = background
        self.seed = seed
        self.strict = strict

        self.sqrt_spp = math.isqrt(samples_per_pixel)
        self.recip_sqrt_spp = 1.0 / self.sqrt_spp
        self.degenerate_samples = 0
        self.discarded_samples = 0

    def pixel_rng(self, x: int, y: int) -> random.Random:
        return random.Random(f"{self.seed}:{x}:{y}")

    def ray_color(self, ray: Ray, depth: int, rng) -> Vector3:
        """
        Estimates the radiance carried back along `ray`, following at most
        `depth` more bounces.
        """
        if depth <= 0:
            return BLACK

        rec = self.world.hit(ray, EPSILON, math.inf, rng)
        if rec is None:
            return self.background

        material = rec.material
        emitted = material.emitted(rec, rec.u, rec.v, rec.p)
        srec = material.scatter(rec, rng)
        if srec is None:
            return emitted

        if srec.skip_pdf_ray is not None:
            return emitted + srec.attenuation * self.ray_color(srec.skip_pdf_ray, depth - 1, rng)

        if self.lights is None:
            sampling_pdf = srec.pdf
        else:
            sampling_pdf = MixturePdf(srec.pdf, HittablePdf(self.lights, rec.p))

        scattered = Ray(rec.p, sampling_pdf.generate(rng), ray.time)
        pdf_value = sampling_pdf.value(scattered.direction)
        if not pdf_value > 0.0:
            self.degenerate_samples += 1
            if self.strict:
                raise DegenerateSampleError(
                    f"Sampled direction {scattered.direction} has density {pdf_value}"
                )
            logger.debug("Rejected sample with density %r at %r", pdf_value, rec.p)
            return emitted

        scattering_pdf = material.scattering_pdf(rec, scattered)
        if scattering_pdf == 0.0:
            return emitted

        sample_color = self.ray_color(scattered, depth - 1, rng)
        return emitted + srec.attenuation * sample_color * (scattering_pdf / pdf_value)

    def render_pixel(self, x: int, y: int) -> Vector3:
        """
        Mean of samples_per_pixel radiance estimates through pixel (x, y),
        where y = 0 is the bottom row. Not clamped.
        """
        rng = self.pixel_rng(x, y)
        r = g = b = 0.0
        kept = 0

        def accumulate(s, t):
            nonlocal r, g, b, kept
            color = self.ray_color(self.camera.get_ray(s, t, rng), self.max_depth, rng)
            if not color.is_finite():
                self.discarded_samples += 1
                return
            r += color.x
            g += color.y
            b += color.z
            kept += 1

        for i in range(self.sqrt_spp):
            for j in range(self.sqrt_spp):
                s = (x + (i + rng.random()) * self.recip_sqrt_spp) / self.width
                t = (y + (j + rng.random()) * self.recip_sqrt_spp) / self.height
                accumulate(s, t)
        for _ in range(self.samples_per_pixel - self.sqrt_spp * self.sqrt_spp):
            accumulate((x + rng.random()) / self.width, (y + rng.random()) / self.height)

        if kept == 0:
            return BLACK
        return Vector3(r / kept, g / kept, b / kept)

    def render(self, progress: Optional[ProgressCallback] = None,
               time_limit: Optional[float] = None, canvas=None) -> np.ndarray:
        """
        Renders every pixel and returns a (height, width, 3) float array with
        row 0 at the top of the picture.

        Args:
            progress: Called as progress(done, total) after each pixel.
            time_limit: Seconds after which no new pixel is started; pixels
                not reached stay black.
            canvas: Optional image writer; receives set_pixel(x, y, color)
                for each finished pixel.
        """
        image = np.zeros((self.height, self.width, 3), dtype=np.float64)
        total = self.width * self.height
        done = 0
        start = time.monotonic()
        logger.info("Rendering %dx%d at %d spp, max depth %d",
                    self.width, self.height, self.samples_per_pixel, self.max_depth)

        for row, x in itertools.product(range(self.height), range(self.width)):
            if time_limit is not None and time.monotonic() - start > time_limit:
                logger.warning("Time limit of %.1fs reached after %d of %d pixels",
                               time_limit, done, total)
                break
            y = self.height - 1 - row
            color = self.render_pixel(x, y)
            image[row, x] = (color.x, color.y, color.z)
            if canvas is not None:
                canvas.set_pixel(x, y, color)
            done += 1
            if progress is not None:
                progress(done, total)
            if x == self.width - 1:
                logger.debug("Finished row %d of %d", row + 1, self.height)

        elapsed = time.monotonic() - start
        logger.info("Rendered %d pixels in %.2fs", done, elapsed)
        if self.degenerate_samples or self.discarded_samples:
            logger.warning("Skipped %d zero-density and %d non-finite samples",
                           self.degenerate_samples, self.discarded_samples)
        return image

def render(scene: Hittable, lights: Optional[Hittable], camera, width: int, height: int,
           samples_per_pixel: int = DEFAULT_SAMPLES, max_depth: int = DEFAULT_MAX_DEPTH,
           background: Vector3 = BLACK, seed: int = 0,
           progress: Optional[ProgressCallback] = None, canvas=None,
           time_limit: Optional[float] = None) -> np.ndarray:
    """Renders `scene` and returns the linear (height, width, 3) pixel grid."""
    renderer = Renderer(scene, camera, width, height, lights=lights,
                        samples_per_pixel=samples_per_pixel, max_depth=max_depth,
                        background=background, seed=seed)
    return renderer.render(progress=progress, time_limit=time_limit, canvas=canvas)
