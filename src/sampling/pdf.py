# sampling/pdf.py
"""
Direction distributions used for importance sampling.

Every PDF pairs a sampler, generate(), with the density it samples from,
value(). The integrator divides by value() of the direction that
generate() actually produced, so the two must agree exactly for the
estimate to stay unbiased.
"""
import math
from core.vector import Vector3
from core.onb import ONB
from core.utils import random_cosine_direction, random_double

class PDF:
    """
    Abstract probability density over directions (solid-angle measure).
    """
    def value(self, direction: Vector3) -> float:
        raise NotImplementedError("value() must be implemented by subclasses.")

    def generate(self) -> Vector3:
        raise NotImplementedError("generate() must be implemented by subclasses.")

class CosinePDF(PDF):
    """
    Cosine-weighted hemisphere about a normal: density cos(theta)/pi.
    """
    def __init__(self, w: Vector3):
        self.uvw = ONB(w)

    def value(self, direction: Vector3) -> float:
        cosine = direction.normalize().dot(self.uvw.w)
        return cosine / math.pi if cosine > 0 else 0.0

    def generate(self) -> Vector3:
        return self.uvw.local(random_cosine_direction())

class SurfacePDF(PDF):
    """
    Directions from `origin` toward a chosen surface (or list of
    surfaces), as sampled by the surface's own random()/pdf_value().
    """
    def __init__(self, surface, origin: Vector3):
        self.surface = surface
        self.origin = origin

    def value(self, direction: Vector3) -> float:
        return self.surface.pdf_value(self.origin, direction)

    def generate(self) -> Vector3:
        return self.surface.random(self.origin)

class MixturePDF(PDF):
    """
    Even mixture of two PDFs. The weights are fixed at one half each
    regardless of what the components are.
    """
    def __init__(self, p0: PDF, p1: PDF):
        self.p = (p0, p1)

    def value(self, direction: Vector3) -> float:
        return 0.5 * self.p[0].value(direction) + 0.5 * self.p[1].value(direction)

    def generate(self) -> Vector3:
        if random_double() < 0.5:
            return self.p[0].generate()
        return self.p[1].generate()
