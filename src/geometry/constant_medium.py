# geometry/constant_medium.py
import math
from typing import Optional, Union
from core.vector import Vector3, Color
from core.ray import Ray
from core.aabb import AABB
from core.utils import random_double
from geometry.hittable import Hittable, HitRecord
from materials.isotropic import Isotropic
from materials.textures import Texture

class ConstantMedium(Hittable):
    """
    Homogeneous fog or smoke filling a convex boundary.

    A ray entering the boundary travels an exponentially distributed
    free-flight distance (rate = density); if that ends before the ray
    leaves, it is reported as a hit with an isotropic phase function.
    """
    def __init__(self, boundary: Hittable, density: float, albedo: Union[Color, Texture]):
        if density <= 0:
            raise ValueError(f"ConstantMedium density must be positive, got {density}")
        self.boundary = boundary
        self.neg_inv_density = -1.0 / density
        self.phase_function = Isotropic(albedo)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        rec1 = self.boundary.hit(ray, -math.inf, math.inf)
        if rec1 is None:
            return None
        rec2 = self.boundary.hit(ray, rec1.t + 0.0001, math.inf)
        if rec2 is None:
            return None

        t_enter = max(rec1.t, t_min)
        t_exit = min(rec2.t, t_max)
        if t_enter >= t_exit:
            return None
        t_enter = max(t_enter, 0.0)

        ray_length = ray.direction.length()
        distance_inside_boundary = (t_exit - t_enter) * ray_length
        hit_distance = self.neg_inv_density * math.log(1.0 - random_double())
        if hit_distance > distance_inside_boundary or hit_distance <= 0.0:
            return None

        rec = HitRecord()
        rec.t = t_enter + hit_distance / ray_length
        if rec.t <= t_min or rec.t > t_max:
            return None
        rec.p = ray.at(rec.t)
        # Any unit normal will do for an isotropic scatter; face the ray.
        rec.normal = (-ray.direction).normalize()
        rec.front_face = True
        rec.material = self.phase_function
        return rec

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        return self.boundary.bounding_box(time0, time1)
