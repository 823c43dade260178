# geometry/aarect.py
import math
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB
from core.utils import random_double
from geometry.hittable import Hittable, HitRecord

class AARect(Hittable):
    """
    Axis-aligned rectangle lying in the plane `axis == k`, spanning
    [a0, a1] x [b0, b1] over the two remaining axes (in x, y, z order).
    """
    axis = 2

    def __init__(self, a0: float, a1: float, b0: float, b1: float, k: float, material):
        self.a0 = a0
        self.a1 = a1
        self.b0 = b0
        self.b1 = b1
        self.k = k
        self.material = material
        self.a_axis, self.b_axis = [i for i in range(3) if i != self.axis]

    def _point(self, a: float, b: float, k: float) -> Vector3:
        coords = [0.0, 0.0, 0.0]
        coords[self.a_axis] = a
        coords[self.b_axis] = b
        coords[self.axis] = k
        return Vector3(*coords)

    def outward_normal(self) -> Vector3:
        return self._point(0.0, 0.0, 1.0)

    def area(self) -> float:
        return abs((self.a1 - self.a0) * (self.b1 - self.b0))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        d = ray.direction[self.axis]
        if d == 0.0:
            # Parallel to the plane
            return None
        t = (self.k - ray.origin[self.axis]) / d
        if t <= t_min or t > t_max:
            return None

        a = ray.origin[self.a_axis] + t * ray.direction[self.a_axis]
        b = ray.origin[self.b_axis] + t * ray.direction[self.b_axis]
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None

        rec = HitRecord()
        rec.u = (a - self.a0) / (self.a1 - self.a0)
        rec.v = (b - self.b0) / (self.b1 - self.b0)
        rec.t = t
        rec.set_face_normal(ray, self.outward_normal())
        rec.material = self.material
        rec.p = ray.at(t)
        return rec

    def bounding_box(self, time0: float, time1: float) -> AABB:
        # Zero thickness along the fixed axis; pad() widens it.
        return AABB(self._point(self.a0, self.b0, self.k),
                    self._point(self.a1, self.b1, self.k)).pad()

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        rec = self.hit(Ray(origin, direction), 0.001, math.inf)
        if rec is None:
            return 0.0
        distance_squared = rec.t * rec.t * direction.length_squared()
        cosine = abs(direction.dot(rec.normal) / direction.length())
        if cosine == 0.0:
            return 0.0
        return distance_squared / (cosine * self.area())

    def random(self, origin: Vector3) -> Vector3:
        random_point = self._point(random_double(self.a0, self.a1),
                                   random_double(self.b0, self.b1),
                                   self.k)
        return random_point - origin

class XYRect(AARect):
    axis = 2

class XZRect(AARect):
    axis = 1

class YZRect(AARect):
    axis = 0
