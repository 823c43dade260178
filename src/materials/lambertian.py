# materials/lambertian.py
import math
from typing import Union
from core.ray import Ray
from core.vector import Color
from geometry.hittable import HitRecord
from materials.material import Material, ScatterRecord
from materials.textures import Texture, as_texture
from sampling.pdf import CosinePDF

class Lambertian(Material):
    """
    Lambertian diffuse material with optional texture support.
    """

    def __init__(self, albedo: Union[Color, Texture]):
        self.albedo = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord) -> ScatterRecord:
        """
        Always scatters; the direction is left to a cosine-weighted PDF
        about the normal.
        """
        return ScatterRecord(
            attenuation=self.albedo.value(rec.u, rec.v, rec.p),
            is_specular=False,
            pdf=CosinePDF(rec.normal),
        )

    def scatter_pdf(self, ray_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        cosine = rec.normal.dot(scattered.direction.normalize())
        return 0.0 if cosine < 0 else cosine / math.pi
