# camera/camera.py
import math
from core.vector import Vector3
from core.ray import Ray
from core.utils import random_double, random_in_unit_disk

class Camera:
    def __init__(self, lookfrom: Vector3, lookat: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 10.0, time0: float = 0.0, time1: float = 0.0):
        self.position = lookfrom
        self.lookat = lookat
        self.vup = vup
        self.vfov = vfov  # Vertical field of view in degrees
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture  # Lens aperture for depth of field
        self.focus_dist = focus_dist  # Distance to focus plane
        self.lens_radius = aperture / 2.0
        self.time0 = time0  # Shutter open/close
        self.time1 = time1
        self.update_camera()

    def update_camera(self):
        """Updates the camera's basis vectors and viewport."""
        viewport_height = 2.0 * math.tan(math.radians(self.vfov) / 2)
        viewport_width = self.aspect_ratio * viewport_height

        # Camera looks down -w
        self.w = (self.position - self.lookat).normalize()
        self.u = self.vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        # Scale by focus distance
        self.horizontal = self.u * viewport_width * self.focus_dist
        self.vertical = self.v * viewport_height * self.focus_dist

        self.lower_left_corner = (self.position -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * self.focus_dist)

    def get_ray(self, s: float, t: float) -> Ray:
        """
        Generates a ray through normalized image coordinates (s, t) in
        [0, 1]^2, with depth of field and a random time in the shutter.
        """
        offset = Vector3(0, 0, 0)
        if self.lens_radius > 0:
            rd = random_in_unit_disk() * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y

        ray_origin = self.position + offset
        ray_direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         ray_origin)
        time = self.time0 if self.time1 <= self.time0 else random_double(self.time0, self.time1)
        return Ray(ray_origin, ray_direction, time)
