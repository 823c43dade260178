# materials/dielectric.py
import math
from core.ray import Ray
from core.vector import Color
from core.utils import reflect, refract, schlick, random_double
from geometry.hittable import HitRecord
from materials.material import Material, ScatterRecord

class Dielectric(Material):
    """
    Clear refractive material (glass, water) with index of refraction `ir`.
    """
    def __init__(self, ir: float):
        self.ir = ir

    def refraction_ratio(self, rec: HitRecord) -> float:
        # Entering from outside or leaving from inside
        return 1.0 / self.ir if rec.front_face else self.ir

    @staticmethod
    def cannot_refract(cos_theta: float, refraction_ratio: float) -> bool:
        """
        True when Snell's law has no real solution (total internal reflection).
        """
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
        return refraction_ratio * sin_theta > 1.0

    @staticmethod
    def reflectance(cosine: float, ref_idx: float) -> float:
        return schlick(cosine, ref_idx)

    def scatter(self, ray_in: Ray, rec: HitRecord) -> ScatterRecord:
        attenuation = Color(1.0, 1.0, 1.0)  # Glass doesn't absorb light
        ratio = self.refraction_ratio(rec)

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)

        if self.cannot_refract(cos_theta, ratio) or self.reflectance(cos_theta, ratio) > random_double():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ratio)

        return ScatterRecord(
            attenuation=attenuation,
            is_specular=True,
            specular_ray=Ray(rec.p, direction, ray_in.time),
        )
