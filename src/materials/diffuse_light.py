# materials/diffuse_light.py
import math
from typing import Union
from core.ray import Ray
from core.vector import Color, Vector3
from geometry.hittable import HitRecord
from materials.material import Material
from materials.textures import Texture, as_texture

class DiffuseLight(Material):
    """
    Emissive material that radiates its texture and never scatters.
    """
    def __init__(self, emit: Union[Color, Texture]):
        self.emit = as_texture(emit)

    def emitted(self, ray_in: Ray, rec: HitRecord) -> Color:
        return self.emit.value(rec.u, rec.v, rec.p)

class SpotLight(DiffuseLight):
    """
    Emissive material that only radiates inside a cone of half-angle
    `cutoff` degrees around `direction`.
    """
    def __init__(self, emit: Union[Color, Texture], direction: Vector3, cutoff: float):
        super().__init__(emit)
        self.direction = direction.normalize()
        self.cutoff = cutoff
        self.cos_cutoff = math.cos(math.radians(cutoff))

    def emitted(self, ray_in: Ray, rec: HitRecord) -> Color:
        # Light leaves the surface opposite to the ray that found it
        outgoing = (-ray_in.direction).normalize()
        if outgoing.dot(self.direction) < self.cos_cutoff:
            return Color(0, 0, 0)
        return self.emit.value(rec.u, rec.v, rec.p)
