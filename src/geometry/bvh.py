# geometry/bvh.py
from typing import List, Optional
from core.aabb import AABB
from core.ray import Ray
from core.utils import random_int
from geometry.hittable import Hittable, HitRecord

class BVHNode(Hittable):
    """
    Binary bounding volume hierarchy over a static set of objects.

    Each node picks a random axis, sorts its slice of `objects` by the
    minimum corner of their boxes along that axis and splits at the
    midpoint. Leaves hold one or two objects directly. The tree is never
    mutated after construction.
    """
    def __init__(self, objects: List[Hittable], start: int, end: int,
                 time0: float = 0.0, time1: float = 1.0):
        object_span = end - start
        if object_span <= 0:
            raise ValueError("BVHNode needs at least one object.")

        axis = random_int(0, 2)

        def box_min(obj: Hittable) -> float:
            box = obj.bounding_box(time0, time1)
            if box is None:
                raise ValueError(f"No bounding box for {obj!r} in BVHNode constructor.")
            return box.minimum[axis]

        if object_span == 1:
            self.left = self.right = objects[start]
        elif object_span == 2:
            if box_min(objects[start]) <= box_min(objects[start + 1]):
                self.left = objects[start]
                self.right = objects[start + 1]
            else:
                self.left = objects[start + 1]
                self.right = objects[start]
        else:
            objects[start:end] = sorted(objects[start:end], key=box_min)
            mid = start + object_span // 2
            self.left = BVHNode(objects, start, mid, time0, time1)
            self.right = BVHNode(objects, mid, end, time0, time1)

        box_left = self.left.bounding_box(time0, time1)
        box_right = self.right.bounding_box(time0, time1)
        if box_left is None or box_right is None:
            raise ValueError("No bounding box in BVHNode constructor.")
        self.box = AABB.surrounding_box(box_left, box_right)

    @property
    def is_leaf(self) -> bool:
        return not isinstance(self.left, BVHNode) and not isinstance(self.right, BVHNode)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max)
        if self.right is self.left:
            return hit_left

        # Only a closer hit on the right can replace the left one
        hit_right = self.right.hit(ray, t_min, hit_left.t if hit_left else t_max)
        return hit_right or hit_left

    def bounding_box(self, time0: float, time1: float) -> AABB:
        return self.box

    def depth(self) -> int:
        children = [c for c in (self.left, self.right) if isinstance(c, BVHNode)]
        return 1 + max((c.depth() for c in children), default=0)

