# materials/isotropic.py
from typing import Union
from core.ray import Ray
from core.vector import Color
from core.utils import random_unit_vector
from geometry.hittable import HitRecord
from materials.material import Material, ScatterRecord
from materials.textures import Texture, as_texture

class Isotropic(Material):
    """
    Phase function of a participating medium: scatters uniformly in all
    directions. Marked specular since the medium already sampled the
    free-flight distance; the direction needs no PDF division.
    """
    def __init__(self, albedo: Union[Color, Texture]):
        self.albedo = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord) -> ScatterRecord:
        return ScatterRecord(
            attenuation=self.albedo.value(rec.u, rec.v, rec.p),
            is_specular=True,
            specular_ray=Ray(rec.p, random_unit_vector(), ray_in.time),
        )
