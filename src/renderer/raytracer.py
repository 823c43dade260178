# renderer/raytracer.py
import logging
import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import List, Optional
from camera.camera import Camera
from core.vector import Color
from core.utils import de_nan, random_double, seed
from geometry.hittable import Hittable
from geometry.world import Scene
from renderer.canvas import Canvas
from renderer.integrator import ray_color
from renderer.settings import RenderSettings

logger = logging.getLogger(__name__)

# Rows between progress messages
PROGRESS_INTERVAL = 16

def row_seed(base: Optional[int], j: int) -> Optional[int]:
    if base is None:
        return None
    return base * 1_000_003 + j

def render_row(j: int, world: Hittable, lights: Optional[Hittable], background: Color,
               camera: Camera, settings: RenderSettings) -> List[Color]:
    """
    Returns the un-normalized sample sums of every pixel in row j.
    """
    seed(row_seed(settings.seed, j))
    width = settings.width
    u_span = max(width - 1, 1)
    v_span = max(settings.height - 1, 1)
    sums = []
    for i in range(width):
        pixel_color = Color(0.0, 0.0, 0.0)
        for _ in range(settings.samples_per_pixel):
            u = (i + random_double()) / u_span
            v = (j + random_double()) / v_span
            ray = camera.get_ray(u, v)
            sample = ray_color(ray, background, world, lights, settings.max_depth, settings.t_min)
            pixel_color = pixel_color + de_nan(sample)
        sums.append(pixel_color)
    return sums

# Per-process render state, installed once by the pool initializer
_worker_state = {}

def _init_worker(world, lights, background, camera, settings):
    _worker_state.update(world=world, lights=lights, background=background,
                         camera=camera, settings=settings)

def _render_row_task(j: int):
    state = _worker_state
    return j, render_row(j, state["world"], state["lights"], state["background"],
                         state["camera"], state["settings"])

class Renderer:
    """
    Renders a scene row by row into a Canvas.

    The BVH and materials are built before the first row and only read
    afterwards, so workers share them without locks. Each row is written
    by exactly one worker.
    """
    def __init__(self, settings: RenderSettings):
        self.settings = settings
        self.rows_done = 0
        self.last_render_seconds = 0.0

    def render(self, scene: Scene, camera: Camera, canvas: Canvas,
               world: Optional[Hittable] = None) -> float:
        """
        Fills the canvas and returns the elapsed time in seconds. A prebuilt
        world (usually the scene BVH) may be passed in to skip the build.
        """
        settings = self.settings
        if (canvas.width, canvas.height) != (settings.width, settings.height):
            raise ValueError(
                f"Canvas is {canvas.width}x{canvas.height} but settings ask for "
                f"{settings.width}x{settings.height}")
        if world is None:
            world = scene.build_bvh()

        self.rows_done = 0
        rows = list(range(settings.height - 1, -1, -1))
        logger.info("Rendering %dx%d, %d spp, depth %d, %d worker(s) [%s]",
                    settings.width, settings.height, settings.samples_per_pixel,
                    settings.max_depth, max(settings.workers, 1), settings.backend)
        start = time.perf_counter()

        if settings.workers <= 1:
            for j in rows:
                self._write_row(canvas, j, render_row(j, world, scene.lights, scene.background,
                                                      camera, settings))
        elif settings.backend == "thread":
            self._render_threads(canvas, rows, world, scene, camera)
        else:
            self._render_processes(canvas, rows, world, scene, camera)

        self.last_render_seconds = time.perf_counter() - start
        logger.info("Rendering finished in %.2f seconds", self.last_render_seconds)
        return self.last_render_seconds

    def _render_threads(self, canvas, rows, world, scene, camera):
        settings = self.settings

        def task(j):
            self._write_row(canvas, j, render_row(j, world, scene.lights, scene.background,
                                                  camera, settings))

        with ThreadPoolExecutor(max_workers=settings.workers) as executor:
            futures = [executor.submit(task, j) for j in rows]
            for future in as_completed(futures):
                future.result()

    def _render_processes(self, canvas, rows, world, scene, camera):
        settings = self.settings
        initargs = (world, scene.lights, scene.background, camera, settings)
        with ProcessPoolExecutor(max_workers=settings.workers,
                                 initializer=_init_worker, initargs=initargs) as executor:
            futures = [executor.submit(_render_row_task, j) for j in rows]
            for future in as_completed(futures):
                j, sums = future.result()
                self._write_row(canvas, j, sums)

    def _write_row(self, canvas: Canvas, j: int, sums: List[Color]):
        for i, pixel_color in enumerate(sums):
            canvas.write_pixel(i, j, pixel_color, self.settings.samples_per_pixel)
        self.rows_done += 1
        if self.rows_done % PROGRESS_INTERVAL == 0:
            logger.debug("Rows done: %d/%d", self.rows_done, self.settings.height)
