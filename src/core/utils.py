# core/utils.py
import math
import random
import threading
from typing import Optional
from core.vector import Vector3

_local = threading.local()

def generator() -> random.Random:
    """
    Returns the calling thread's private random generator.
    """
    rng = getattr(_local, "rng", None)
    if rng is None:
        rng = _local.rng = random.Random()
    return rng

def seed(value: Optional[int]) -> None:
    """
    Reseeds the calling thread's generator.
    """
    generator().seed(value)

def random_double(lo: float = 0.0, hi: float = 1.0) -> float:
    return lo + (hi - lo) * generator().random()

def random_int(lo: int, hi: int) -> int:
    """
    Returns a random integer in [lo, hi].
    """
    return generator().randint(lo, hi)

def random_vector(lo: float = 0.0, hi: float = 1.0) -> Vector3:
    return Vector3(random_double(lo, hi), random_double(lo, hi), random_double(lo, hi))

def random_in_unit_sphere() -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = random_vector(-1, 1)
        if p.length_squared() < 1.0:
            return p

def random_unit_vector() -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    while True:
        p = random_in_unit_sphere()
        # Rejecting tiny samples keeps the normalization well conditioned.
        if p.length_squared() > 1e-12:
            return p.normalize()

def random_in_unit_disk() -> Vector3:
    while True:
        p = Vector3(random_double(-1, 1), random_double(-1, 1), 0.0)
        if p.length_squared() < 1.0:
            return p

def random_cosine_direction() -> Vector3:
    """
    Cosine-weighted direction about +z; density cos(theta)/pi.
    """
    r1 = random_double()
    r2 = random_double()
    phi = 2 * math.pi * r1
    sqrt_r2 = math.sqrt(r2)
    return Vector3(math.cos(phi) * sqrt_r2, math.sin(phi) * sqrt_r2, math.sqrt(1 - r2))

def random_to_sphere(radius: float, distance_squared: float) -> Vector3:
    """
    Uniform direction about +z inside the cone subtended by a sphere of the
    given radius whose center is distance_squared away.
    """
    r1 = random_double()
    r2 = random_double()
    cos_theta_max = math.sqrt(1 - radius * radius / distance_squared)
    z = 1 + r2 * (cos_theta_max - 1)
    phi = 2 * math.pi * r1
    s = math.sqrt(max(0.0, 1 - z * z))
    return Vector3(math.cos(phi) * s, math.sin(phi) * s, z)

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)

def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """
    Refracts the unit vector uv through a surface with unit normal n.
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel

def schlick(cosine: float, ref_idx: float) -> float:
    r0 = (1 - ref_idx) / (1 + ref_idx)
    r0 = r0 * r0
    return r0 + (1 - r0) * math.pow(1 - cosine, 5)

def clamp(x: float, lo: float, hi: float) -> float:
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x

def de_nan(c: Vector3) -> Vector3:
    """
    Replaces every non-finite component with zero.
    """
    if c.is_finite():
        return c
    return Vector3(*(v if math.isfinite(v) else 0.0 for v in c))
