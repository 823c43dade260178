# camera/__init__.py
from camera.camera import Camera

__all__ = ["Camera"]
