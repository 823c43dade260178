# renderer/__init__.py
from renderer.canvas import Canvas
from renderer.integrator import ray_color
from renderer.settings import RenderSettings, QUALITY_LEVELS
from renderer.raytracer import Renderer, render_row

__all__ = ["Canvas", "ray_color", "RenderSettings", "QUALITY_LEVELS", "Renderer", "render_row"]
