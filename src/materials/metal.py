# materials/metal.py
from typing import Optional, Union
from core.ray import Ray
from core.vector import Color
from core.utils import reflect, random_in_unit_sphere
from geometry.hittable import HitRecord
from materials.material import Material, ScatterRecord
from materials.textures import Texture, as_texture

class Metal(Material):
    """
    Metal material: mirror reflection perturbed by `fuzz` (clamped to 1).
    """
    def __init__(self, albedo: Union[Color, Texture], fuzz: float):
        self.albedo = as_texture(albedo)
        self.fuzz = min(abs(fuzz), 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord) -> Optional[ScatterRecord]:
        reflected = reflect(ray_in.direction.normalize(), rec.normal)
        scattered = Ray(rec.p, reflected + random_in_unit_sphere() * self.fuzz, ray_in.time)

        # Absorb the ray if the fuzz pushed it below the surface
        if scattered.direction.dot(rec.normal) <= 0:
            return None
        return ScatterRecord(
            attenuation=self.albedo.value(rec.u, rec.v, rec.p),
            is_specular=True,
            specular_ray=scattered,
        )
