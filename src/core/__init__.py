# core/__init__.py
from core.vector import Vector3, Color
from core.ray import Ray
from core.aabb import AABB
from core.onb import ONB

__all__ = ["Vector3", "Color", "Ray", "AABB", "ONB"]
