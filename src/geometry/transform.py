# geometry/transform.py
import math
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB
from geometry.hittable import Hittable, HitRecord

class Translate(Hittable):
    """
    Moves the wrapped object by `offset`. Rays are moved the other way,
    intersected in object space, and the hit point is moved back.
    """
    def __init__(self, obj: Hittable, offset: Vector3):
        self.obj = obj
        self.offset = offset

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        moved = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.obj.hit(moved, t_min, t_max)
        if rec is None:
            return None
        # Translation keeps the normal and its orientation.
        rec.p = rec.p + self.offset
        return rec

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        box = self.obj.bounding_box(time0, time1)
        if box is None:
            return None
        return AABB(box.minimum + self.offset, box.maximum + self.offset)

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.obj.pdf_value(origin - self.offset, direction)

    def random(self, origin: Vector3) -> Vector3:
        return self.obj.random(origin - self.offset)

class RotateY(Hittable):
    """
    Rotates the wrapped object by `angle` degrees about the Y axis.
    """
    def __init__(self, obj: Hittable, angle: float):
        self.obj = obj
        radians = math.radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)

    @staticmethod
    def _corners(box: AABB):
        for x in (box.minimum.x, box.maximum.x):
            for y in (box.minimum.y, box.maximum.y):
                for z in (box.minimum.z, box.maximum.z):
                    yield Vector3(x, y, z)

    def to_object(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x - self.sin_theta * v.z,
                       v.y,
                       self.sin_theta * v.x + self.cos_theta * v.z)

    def to_world(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x + self.sin_theta * v.z,
                       v.y,
                       -self.sin_theta * v.x + self.cos_theta * v.z)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        rotated = Ray(self.to_object(ray.origin), self.to_object(ray.direction), ray.time)
        rec = self.obj.hit(rotated, t_min, t_max)
        if rec is None:
            return None
        rec.p = self.to_world(rec.p)
        # Rotating ray and normal together keeps front_face valid.
        rec.normal = self.to_world(rec.normal)
        return rec

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        box = self.obj.bounding_box(time0, time1)
        if box is None:
            return None
        # Enclose all eight rotated corners of the child box.
        lo = [math.inf, math.inf, math.inf]
        hi = [-math.inf, -math.inf, -math.inf]
        for corner in self._corners(box):
            rotated = self.to_world(corner)
            for c in range(3):
                lo[c] = min(lo[c], rotated[c])
                hi[c] = max(hi[c], rotated[c])
        return AABB(Vector3(*lo), Vector3(*hi))

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        # Rotation preserves solid angle.
        return self.obj.pdf_value(self.to_object(origin), self.to_object(direction))

    def random(self, origin: Vector3) -> Vector3:
        return self.to_world(self.obj.random(self.to_object(origin)))
