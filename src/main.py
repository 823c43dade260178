# main.py
import argparse
import logging
import sys
import threading
import pygame
from core.utils import seed
from renderer.canvas import Canvas
from renderer.raytracer import Renderer
from renderer.settings import BACKENDS, QUALITY_LEVELS, RenderSettings, default_workers
from scenes.library import SCENES, build_scene

logger = logging.getLogger(__name__)

ASPECT_RATIO = 16.0 / 9.0

class Application:
    """
    Shows the canvas in a pygame window while a background thread renders
    into it. Rows appear as they finish; a frame may show a row half way
    through being written.
    """
    def __init__(self, setup, settings: RenderSettings, output: str = None):
        pygame.init()
        self.setup = setup
        self.settings = settings
        self.output = output
        self.canvas = Canvas(settings.width, settings.height)
        self.camera = setup.make_camera(settings.aspect_ratio)
        self.renderer = Renderer(settings)

        self.screen = pygame.display.set_mode((settings.width, settings.height))
        pygame.display.set_caption(f"Ray Tracer: {setup.name}")
        self.clock = pygame.time.Clock()

        self.render_thread = threading.Thread(target=self.render, daemon=True)
        self.render_error = None
        self.finished = False

    def render(self):
        try:
            self.renderer.render(self.setup.scene, self.camera, self.canvas)
            if self.output:
                self.canvas.save(self.output)
        except Exception as e:
            self.render_error = e
            logger.exception("Rendering failed")
        finally:
            self.finished = True

    def update_caption(self):
        done = self.renderer.rows_done
        if self.finished:
            status = f"done in {self.renderer.last_render_seconds:.1f}s"
        else:
            status = f"{100 * done // self.settings.height}%"
        pygame.display.set_caption(f"Ray Tracer: {self.setup.name} [{status}]")

    def run(self):
        self.render_thread.start()
        running = True
        try:
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        if event.key == pygame.K_ESCAPE:
                            running = False
                        elif event.key == pygame.K_s:
                            self.canvas.save(self.output or f"{self.setup.name}.png")

                frame_surface = pygame.surfarray.make_surface(self.canvas.to_surface_array())
                self.screen.blit(frame_surface, (0, 0))
                self.update_caption()
                pygame.display.flip()
                self.clock.tick(30)
        finally:
            pygame.quit()
        return self.render_error

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Monte Carlo path tracer.")
    parser.add_argument("--scene", default="cornell_box", choices=sorted(SCENES),
                        help="Scene to render (default: cornell_box)")
    parser.add_argument("--quality", choices=sorted(QUALITY_LEVELS),
                        help="Quality preset; overrides the scene's sample count")
    parser.add_argument("--width", type=int, default=800, help="Image width in pixels (default: 800)")
    parser.add_argument("--samples", type=int, help="Samples per pixel")
    parser.add_argument("--max-depth", type=int, help="Maximum bounces per path")
    parser.add_argument("--workers", type=int, default=default_workers(),
                        help="Worker count, 0 or 1 renders serially (default: CPU count)")
    parser.add_argument("--backend", choices=BACKENDS, default="process",
                        help="Parallel backend (default: process)")
    parser.add_argument("--seed", type=int, help="Base seed for a reproducible render")
    parser.add_argument("--output", help="PNG file to write when the render finishes")
    parser.add_argument("--headless", action="store_true",
                        help="Render without opening a window (requires --output)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress per row")
    return parser.parse_args(argv)

def make_settings(args, setup) -> RenderSettings:
    overrides = dict(samples_per_pixel=args.samples, max_depth=args.max_depth,
                     workers=args.workers, backend=args.backend, seed=args.seed)
    if args.quality:
        return RenderSettings.for_quality(args.quality, width=args.width,
                                          aspect_ratio=ASPECT_RATIO, **overrides)
    base = RenderSettings(width=args.width, height=max(1, int(args.width / ASPECT_RATIO)),
                          samples_per_pixel=setup.samples_per_pixel)
    return base.with_overrides(**overrides)

def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.headless and not args.output:
        logger.error("--headless needs --output")
        return 2

    # Scene assembly draws random numbers too
    seed(args.seed)
    try:
        setup = build_scene(args.scene)
        settings = make_settings(args, setup)
    except (KeyError, ValueError, FileNotFoundError) as e:
        logger.error("Cannot set up render: %s", e)
        return 1

    if args.headless:
        canvas = Canvas(settings.width, settings.height)
        camera = setup.make_camera(settings.aspect_ratio)
        Renderer(settings).render(setup.scene, camera, canvas)
        canvas.save(args.output)
        return 0

    app = Application(setup, settings, args.output)
    return 1 if app.run() is not None else 0

if __name__ == "__main__":
    sys.exit(main())
