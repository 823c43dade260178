# materials/material.py
from typing import Optional
from core.ray import Ray
from core.vector import Color
from geometry.hittable import HitRecord
from sampling.pdf import PDF

class ScatterRecord:
    """
    Result of a scatter event. A specular scatter carries the one ray to
    follow; a diffuse scatter carries the PDF to draw a direction from.
    """
    __slots__ = ("is_specular", "attenuation", "specular_ray", "pdf")

    def __init__(self, attenuation: Color, is_specular: bool,
                 specular_ray: Optional[Ray] = None, pdf: Optional[PDF] = None):
        self.attenuation = attenuation
        self.is_specular = is_specular
        self.specular_ray = specular_ray
        self.pdf = pdf

class Material:
    """
    Abstract material class. Materials are immutable once built and may be
    shared by any number of surfaces.
    """
    def emitted(self, ray_in: Ray, rec: HitRecord) -> Color:
        """
        Radiance emitted at the hit point toward the incoming ray.
        """
        return Color(0, 0, 0)

    def scatter(self, ray_in: Ray, rec: HitRecord) -> Optional[ScatterRecord]:
        """
        Returns how the incoming ray continues, or None if it is absorbed.
        """
        return None

    def scatter_pdf(self, ray_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        """
        Density of the material's own scattering toward `scattered`.
        """
        return 1.0
