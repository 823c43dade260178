# materials/texture_loader.py
import logging
import os
from typing import Iterable, Optional
from materials.textures import ImageTexture

logger = logging.getLogger(__name__)

# Directories searched for relative texture paths, after the path itself.
TEXTURE_DIRS_ENV = "RAYTRACER_TEXTURE_PATH"

def resolve_texture_path(image_path: str, search_dirs: Optional[Iterable[str]] = None) -> str:
    """
    Locate an image file, trying the path as given and then each search
    directory (defaults to the os.pathsep-separated RAYTRACER_TEXTURE_PATH).

    Raises:
        FileNotFoundError: If the image file cannot be found anywhere
    """
    if os.path.exists(image_path):
        return image_path
    if search_dirs is None:
        search_dirs = [d for d in os.environ.get(TEXTURE_DIRS_ENV, "").split(os.pathsep) if d]
    for directory in search_dirs:
        candidate = os.path.join(directory, image_path)
        if os.path.exists(candidate):
            return candidate
    raise FileNotFoundError(f"Texture file not found: {image_path}")

def load_texture(image_path: str, search_dirs: Optional[Iterable[str]] = None) -> ImageTexture:
    """
    Load an image file as a texture.

    Args:
        image_path: Path to the image file
        search_dirs: Extra directories to look in for relative paths

    Returns:
        ImageTexture object

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the image format is unsupported
    """
    path = resolve_texture_path(image_path, search_dirs)
    texture = ImageTexture(path)
    logger.debug("Loaded texture %s (%dx%d)", path, texture.width, texture.height)
    return texture

def create_image_material(image_path: str, material_class, **material_params):
    """
    Create a material with an image texture.

    Args:
        image_path: Path to the image file
        material_class: Material class to instantiate (e.g., Lambertian, DiffuseLight)
        **material_params: Additional parameters for the material

    Returns:
        Material instance with the image texture
    """
    texture = load_texture(image_path)
    return material_class(texture, **material_params)
