# geometry/world.py
import logging
from typing import Iterable, List, Optional
from core.vector import Vector3, Color
from core.ray import Ray
from core.aabb import AABB
from core.utils import random_int
from geometry.hittable import Hittable, HitRecord
from geometry.bvh import BVHNode

logger = logging.getLogger(__name__)

class HittableList(Hittable):
    """
    A flat list of Hittable objects. hit() returns the closest hit by a
    linear scan; build_bvh() turns the list into a read-only BVH.
    A list of lights is also a sampling target: pdf_value() averages
    the members and random() delegates to one of them.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects is not None else []

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        if not self.objects:
            return None
        output_box = None
        for obj in self.objects:
            box = obj.bounding_box(time0, time1)
            if box is None:
                return None
            output_box = box if output_box is None else AABB.surrounding_box(output_box, box)
        return output_box

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        if not self.objects:
            return 0.0
        weight = 1.0 / len(self.objects)
        return sum(weight * obj.pdf_value(origin, direction) for obj in self.objects)

    def random(self, origin: Vector3) -> Vector3:
        return self.objects[random_int(0, len(self.objects) - 1)].random(origin)

    def build_bvh(self, time0: float = 0.0, time1: float = 1.0):
        return build_bvh(self, time0, time1)

def build_bvh(objects: HittableList, time0: float = 0.0, time1: float = 1.0):
    """
    Finalizes a scene list into a BVH. The list itself is left untouched.
    """
    if len(objects) == 0:
        raise ValueError("Cannot build a BVH over an empty scene.")
    root = BVHNode(list(objects.objects), 0, len(objects), time0, time1)
    logger.debug("Built BVH over %d objects (depth %d)", len(objects), root.depth())
    return root

class Scene:
    """
    Everything the integrator needs: the surfaces, the surfaces worth
    importance sampling, the background radiance and the shutter interval.
    """
    def __init__(self, background: Color = None, time0: float = 0.0, time1: float = 1.0):
        self.objects = HittableList()
        self.lights = HittableList()
        self.background = background if background is not None else Color(0, 0, 0)
        self.time0 = time0
        self.time1 = time1

    def add(self, obj: Hittable) -> Hittable:
        self.objects.add(obj)
        return obj

    def add_light(self, obj: Hittable) -> Hittable:
        """
        Registers obj as an importance-sampling target. It is not added to
        the rendered objects; call add() for that.
        """
        self.lights.add(obj)
        return obj

    def build_bvh(self):
        return build_bvh(self.objects, self.time0, self.time1)
