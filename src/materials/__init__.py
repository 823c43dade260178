# materials/__init__.py
from materials.material import Material, ScatterRecord
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.dielectric import Dielectric
from materials.diffuse_light import DiffuseLight, SpotLight
from materials.isotropic import Isotropic
from materials.textures import (
    Texture, SolidColor, CheckerTexture, NoiseTexture, ImageTexture,
)
from materials.texture_loader import load_texture

__all__ = [
    "Material", "ScatterRecord",
    "Lambertian", "Metal", "Dielectric", "DiffuseLight", "SpotLight", "Isotropic",
    "Texture", "SolidColor", "CheckerTexture", "NoiseTexture", "ImageTexture",
    "load_texture",
]
