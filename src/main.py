# main.py
"""Render one of the reference scenes to an image file.

Usage:
    python src/main.py [options]

Example:
    python src/main.py --scene cornell --width 200 --samples 64 --output cornell.png
"""
import argparse
import logging
import sys
import time
import pygame
from renderer.image import Canvas
from renderer.raytracer import Renderer
from renderer.scenes import SCENES, earth, final_scene
from renderer.tone_mapping import TONE_MAPPERS

logger = logging.getLogger("main")

QUALITY_LEVELS = {
    "interactive": {"samples": 4, "bounces": 4, "scale": 0.5},
    "balanced": {"samples": 64, "bounces": 20, "scale": 0.75},
    "high_quality": {"samples": 500, "bounces": 50, "scale": 1.0},
}

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render a scene with the Monte Carlo path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--scene", choices=sorted(SCENES) + ["earth"], default="cornell",
                        help="Scene to render (default: cornell)")
    parser.add_argument("--texture", type=str, default=None,
                        help="Image file for the earth sphere (earth and final scenes)")
    parser.add_argument("--quality", choices=sorted(QUALITY_LEVELS), default="balanced",
                        help="Preset for samples, bounces and resolution scale (default: balanced)")
    parser.add_argument("--width", type=int, default=400,
                        help="Full-scale image width in pixels (default: 400)")
    parser.add_argument("--samples", type=int, default=None,
                        help="Samples per pixel; overrides the quality preset")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="Maximum bounces per path; overrides the quality preset")
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    parser.add_argument("--output", type=str, default="render.png",
                        help="Output file path (default: render.png)")
    parser.add_argument("--tone-map", choices=sorted(TONE_MAPPERS), default="clamp",
                        help="Tone mapping for the saved image (default: clamp)")
    parser.add_argument("--time-limit", type=float, default=None,
                        help="Stop starting new pixels after this many seconds")
    parser.add_argument("--preview", action="store_true",
                        help="Show the image in a window while it renders")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Log debug output")
    verbosity.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser.parse_args(argv)

class Preview:
    """Pygame window that shows the canvas as rows finish."""
    def __init__(self, canvas: Canvas, tone_map: str, window_width: int = 800):
        pygame.init()
        self.canvas = canvas
        self.tone_map = tone_map
        scale = max(1, window_width // canvas.width)
        self.window_size = (canvas.width * scale, canvas.height * scale)
        self.screen = pygame.display.set_mode(self.window_size)
        pygame.display.set_caption("Path Tracer")
        self.closed = False

    def refresh(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.closed = True
        if self.closed:
            return
        # surfarray wants (width, height, 3)
        frame = self.canvas.to_uint8(self.tone_map).transpose(1, 0, 2)
        surface = pygame.surfarray.make_surface(frame)
        if surface.get_size() != self.window_size:
            surface = pygame.transform.scale(surface, self.window_size)
        self.screen.blit(surface, (0, 0))
        pygame.display.flip()

    def wait(self):
        clock = pygame.time.Clock()
        while not self.closed:
            self.refresh()
            clock.tick(15)

    def close(self):
        pygame.quit()

def build_scene(args: argparse.Namespace):
    if args.scene == "earth":
        if args.texture is None:
            raise SystemExit("--texture is required for the earth scene")
        return earth(args.texture)
    if args.scene == "final":
        return final_scene(texture_path=args.texture)
    return SCENES[args.scene]()

def run(args: argparse.Namespace) -> int:
    quality = QUALITY_LEVELS[args.quality]
    samples = args.samples if args.samples is not None else quality["samples"]
    max_depth = args.max_depth if args.max_depth is not None else quality["bounces"]

    scene = build_scene(args)
    width = max(1, int(args.width * quality["scale"]))
    height = max(1, int(width / scene.aspect_ratio))
    logger.info("Scene %s at %dx%d, %d spp, depth %d (%s)",
                args.scene, width, height, samples, max_depth, args.quality)

    canvas = Canvas(width, height)
    renderer = Renderer(scene.world, scene.camera, width, height, lights=scene.lights,
                        samples_per_pixel=samples, max_depth=max_depth,
                        background=scene.background, seed=args.seed)

    preview = Preview(canvas, args.tone_map) if args.preview else None
    start = time.monotonic()

    def progress(done: int, total: int):
        if done % width != 0 and done != total:
            return
        if preview is not None:
            preview.refresh()
        if not args.quiet:
            elapsed = time.monotonic() - start
            print(f"\r  Progress: {done}/{total} pixels ({100.0 * done / total:.1f}%) "
                  f"- {elapsed:.1f}s", end="", flush=True)

    try:
        renderer.render(progress=progress, time_limit=args.time_limit, canvas=canvas)
        if not args.quiet:
            print()
        canvas.save(args.output, tone_map=args.tone_map)
        if preview is not None:
            preview.wait()
    finally:
        if preview is not None:
            preview.close()
    return 0

def main(argv=None) -> int:
    args = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        return run(args)
    except (ValueError, OSError) as e:
        logger.error("Render failed: %s", e)
        return 1

if __name__ == "__main__":
    sys.exit(main())
