# materials/textures.py
import math
import os
import numpy as np
from numba import njit
from PIL import Image
from core.vector import Vector3, Color
from core.utils import generator

class Texture:
    """Base class for all textures."""
    def value(self, u: float, v: float, p: Vector3) -> Color:
        """Sample the texture at texture coordinates (u, v) and point p."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")

class SolidColor(Texture):
    """A solid color texture."""
    def __init__(self, color: Color):
        self.color = color

    def value(self, u: float, v: float, p: Vector3) -> Color:
        return self.color

def as_texture(value) -> Texture:
    """Wraps a plain color in a SolidColor; textures pass through."""
    if isinstance(value, Texture):
        return value
    if isinstance(value, Vector3):
        return SolidColor(value)
    raise TypeError(f"Expected a Texture or a color, got {type(value).__name__}")

class CheckerTexture(Texture):
    """
    A 3D checker pattern: the sign of sin(scale*x)*sin(scale*y)*sin(scale*z)
    selects between the two textures.
    """
    def __init__(self, even, odd, scale: float = 10.0):
        self.even = as_texture(even)
        self.odd = as_texture(odd)
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> Color:
        sines = math.sin(self.scale * p.x) * math.sin(self.scale * p.y) * math.sin(self.scale * p.z)
        if sines < 0:
            return self.odd.value(u, v, p)
        return self.even.value(u, v, p)

###############################################################################
# Perlin noise
###############################################################################
POINT_COUNT = 256

@njit
def _perlin_noise(x, y, z, ranvec, perm_x, perm_y, perm_z):
    fx = np.floor(x)
    fy = np.floor(y)
    fz = np.floor(z)
    u = x - fx
    v = y - fy
    w = z - fz
    i = int(fx)
    j = int(fy)
    k = int(fz)

    # Hermite smoothing
    uu = u * u * (3.0 - 2.0 * u)
    vv = v * v * (3.0 - 2.0 * v)
    ww = w * w * (3.0 - 2.0 * w)

    accum = 0.0
    for di in range(2):
        for dj in range(2):
            for dk in range(2):
                idx = perm_x[(i + di) & 255] ^ perm_y[(j + dj) & 255] ^ perm_z[(k + dk) & 255]
                gx = ranvec[idx, 0]
                gy = ranvec[idx, 1]
                gz = ranvec[idx, 2]
                weight = (u - di) * gx + (v - dj) * gy + (w - dk) * gz
                accum += ((di * uu + (1 - di) * (1.0 - uu)) *
                          (dj * vv + (1 - dj) * (1.0 - vv)) *
                          (dk * ww + (1 - dk) * (1.0 - ww)) * weight)
    return accum

@njit
def _perlin_turbulence(x, y, z, depth, ranvec, perm_x, perm_y, perm_z):
    accum = 0.0
    weight = 1.0
    for _ in range(depth):
        accum += weight * _perlin_noise(x, y, z, ranvec, perm_x, perm_y, perm_z)
        weight *= 0.5
        x *= 2.0
        y *= 2.0
        z *= 2.0
    return abs(accum)

class Perlin:
    """
    Gradient noise over a 256-entry lattice of random unit vectors.
    """
    def __init__(self, seed=None):
        rng = np.random.default_rng(seed if seed is not None else generator().getrandbits(32))
        vectors = rng.uniform(-1.0, 1.0, size=(POINT_COUNT, 3))
        norms = np.linalg.norm(vectors, axis=1, keepdims=True)
        norms[norms == 0] = 1.0
        self.ranvec = vectors / norms
        self.perm_x = rng.permutation(POINT_COUNT).astype(np.int64)
        self.perm_y = rng.permutation(POINT_COUNT).astype(np.int64)
        self.perm_z = rng.permutation(POINT_COUNT).astype(np.int64)

    def noise(self, p: Vector3) -> float:
        return float(_perlin_noise(float(p.x), float(p.y), float(p.z),
                                   self.ranvec, self.perm_x, self.perm_y, self.perm_z))

    def turbulence(self, p: Vector3, depth: int = 7) -> float:
        return float(_perlin_turbulence(float(p.x), float(p.y), float(p.z), depth,
                                        self.ranvec, self.perm_x, self.perm_y, self.perm_z))

class NoiseTexture(Texture):
    """A marble-like texture: a sine wave along z phase-shifted by turbulence."""
    def __init__(self, scale: float = 1.0, seed=None):
        self.scale = scale
        self.noise = Perlin(seed)

    def value(self, u: float, v: float, p: Vector3) -> Color:
        t = 0.5 * (1 + math.sin(self.scale * p.z + 10 * self.noise.turbulence(p)))
        return Color(t, t, t)

class ImageTexture(Texture):
    """
    A texture from an image file. Missing or unreadable files raise at
    construction; rendering never sees a half-loaded texture.
    """
    def __init__(self, image_path: str):
        if not os.path.exists(image_path):
            raise FileNotFoundError(f"Texture file not found: {image_path}")
        try:
            with Image.open(image_path) as img:
                if img.mode != 'RGB':
                    img = img.convert('RGB')
                # Normalize to [0,1] once; lookups index the array directly
                self.data = np.asarray(img, dtype=np.float64) / 255.0
        except OSError as e:
            raise ValueError(f"Error loading texture {image_path}: {e}") from e
        self.path = image_path
        self.height, self.width = self.data.shape[:2]

    def value(self, u: float, v: float, p: Vector3) -> Color:
        # Clamp to [0,1] and flip V to image row order
        u = min(max(u, 0.0), 1.0)
        v = 1.0 - min(max(v, 0.0), 1.0)

        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        color = self.data[y, x]
        return Color(float(color[0]), float(color[1]), float(color[2]))
