# renderer/integrator.py
"""
Recursive Monte Carlo radiance estimator.

ray_color() returns one radiance sample along a ray:

    L = Le + f * L(next)                         (specular scatter)
    L = Le + f * s(dir) * L(dir) / p(dir)        (diffuse scatter)

where s is the material's scatter_pdf and p the density of the PDF that
drew `dir`: an even mixture of the material PDF and a light PDF when
lights are registered, otherwise the material PDF alone. Recursion stops
at depth 0 with black.
"""
import math
from typing import Optional
from core.ray import Ray
from core.vector import Color
from geometry.hittable import Hittable
from geometry.world import HittableList
from sampling.pdf import MixturePDF, SurfacePDF

# Parametric start of the valid hit interval, avoids self-intersection
T_MIN = 0.001

BLACK = Color(0.0, 0.0, 0.0)

def has_lights(lights: Optional[Hittable]) -> bool:
    if lights is None:
        return False
    if isinstance(lights, HittableList):
        return len(lights) > 0
    return True

def ray_color(ray: Ray, background: Color, world: Hittable,
              lights: Optional[Hittable], depth: int, t_min: float = T_MIN) -> Color:
    """
    Returns the radiance seen along the ray, following up to `depth` bounces.
    """
    if depth <= 0:
        return BLACK

    rec = world.hit(ray, t_min, math.inf)
    if rec is None:
        return background

    emitted = rec.material.emitted(ray, rec)
    srec = rec.material.scatter(ray, rec)
    if srec is None:
        return emitted

    if srec.is_specular:
        return emitted + srec.attenuation * ray_color(
            srec.specular_ray, background, world, lights, depth - 1, t_min)

    if has_lights(lights):
        pdf = MixturePDF(SurfacePDF(lights, rec.p), srec.pdf)
    else:
        pdf = srec.pdf

    scattered = Ray(rec.p, pdf.generate(), ray.time)
    pdf_val = pdf.value(scattered.direction)
    if not (pdf_val > 0.0) or not math.isfinite(pdf_val):
        # Degenerate sample: no contribution beyond emission
        return emitted

    weight = rec.material.scatter_pdf(ray, rec, scattered) / pdf_val
    if weight == 0.0:
        return emitted

    incoming = ray_color(scattered, background, world, lights, depth - 1, t_min)
    contribution = srec.attenuation * incoming * weight
    if not contribution.is_finite():
        return emitted
    return emitted + contribution
