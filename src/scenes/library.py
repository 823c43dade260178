# scenes/library.py
import logging
from dataclasses import dataclass
from typing import Callable, Dict
from core.vector import Vector3, Color
from core.utils import random_double, random_vector
from camera.camera import Camera
from geometry.world import HittableList, Scene
from geometry.sphere import Sphere, MovingSphere
from geometry.aarect import XYRect, XZRect, YZRect
from geometry.box import Box
from geometry.bvh import BVHNode
from geometry.transform import Translate, RotateY
from geometry.constant_medium import ConstantMedium
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.dielectric import Dielectric
from materials.diffuse_light import DiffuseLight, SpotLight
from materials.textures import CheckerTexture, NoiseTexture
from materials.texture_loader import create_image_material, load_texture

logger = logging.getLogger(__name__)

SKY = Color(0.7, 0.8, 1.0)
BLACK = Color(0.0, 0.0, 0.0)

EARTH_TEXTURE = "earthmap.jpg"

@dataclass
class SceneSetup:
    """
    A populated scene plus where to look at it from and how many samples
    it was tuned for.
    """
    name: str
    scene: Scene
    lookfrom: Vector3
    lookat: Vector3
    vfov: float = 40.0
    aperture: float = 0.0
    focus_dist: float = 10.0
    samples_per_pixel: int = 100
    vup: Vector3 = None

    def make_camera(self, aspect_ratio: float) -> Camera:
        vup = self.vup if self.vup is not None else Vector3(0, 1, 0)
        return Camera(self.lookfrom, self.lookat, vup, self.vfov, aspect_ratio,
                      self.aperture, self.focus_dist, self.scene.time0, self.scene.time1)

SCENES: Dict[str, Callable[[], SceneSetup]] = {}

def register(func: Callable[[], SceneSetup]) -> Callable[[], SceneSetup]:
    SCENES[func.__name__] = func
    return func

def build_scene(name: str) -> SceneSetup:
    """
    Assembles a registered scene by name.

    Raises:
        KeyError: If no scene is registered under that name
    """
    try:
        factory = SCENES[name]
    except KeyError:
        raise KeyError(f"Unknown scene {name!r}, expected one of {sorted(SCENES)}") from None
    setup = factory()
    logger.info("Assembled scene %s: %d objects, %d lights",
                name, len(setup.scene.objects), len(setup.scene.lights))
    return setup

def _checker_ground():
    return Lambertian(CheckerTexture(Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9)))

@register
def random_spheres() -> SceneSetup:
    scene = Scene(background=SKY)
    scene.add(Sphere(Vector3(0, -1000, 0), 1000, _checker_ground()))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = random_double()
            center = Vector3(a + 0.9 * random_double(), 0.2, b + 0.9 * random_double())
            if (center - Vector3(4, 0.2, 0)).length() <= 0.9:
                continue
            if choose_mat < 0.8:
                # diffuse, bouncing during the shutter interval
                albedo = random_vector() * random_vector()
                center2 = center + Vector3(0, random_double(0, 0.5), 0)
                scene.add(MovingSphere(center, center2, 0.0, 1.0, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                scene.add(Sphere(center, 0.2, Metal(random_vector(0.5, 1), random_double(0, 0.5))))
            else:
                scene.add(Sphere(center, 0.2, Dielectric(1.5)))

    scene.add_light(scene.add(Sphere(Vector3(0, 1, 0), 1.0, Dielectric(1.5))))
    scene.add(Sphere(Vector3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    scene.add(Sphere(Vector3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))
    return SceneSetup("random_spheres", scene, Vector3(13, 2, 3), Vector3(0, 0, 0),
                      vfov=20.0, aperture=0.1)

@register
def two_spheres() -> SceneSetup:
    scene = Scene(background=SKY)
    checker = _checker_ground()
    scene.add(Sphere(Vector3(0, -10, 0), 10, checker))
    scene.add(Sphere(Vector3(0, 10, 0), 10, checker))
    return SceneSetup("two_spheres", scene, Vector3(13, 2, 3), Vector3(0, 0, 0), vfov=20.0)

@register
def two_perlin_spheres() -> SceneSetup:
    scene = Scene(background=SKY)
    marble = Lambertian(NoiseTexture(4))
    scene.add(Sphere(Vector3(0, -1000, 0), 1000, marble))
    scene.add(Sphere(Vector3(0, 2, 0), 2, marble))
    return SceneSetup("two_perlin_spheres", scene, Vector3(13, 2, 3), Vector3(0, 0, 0), vfov=20.0)

@register
def earth() -> SceneSetup:
    scene = Scene(background=SKY)
    scene.add(Sphere(Vector3(0, 0, 0), 2, create_image_material(EARTH_TEXTURE, Lambertian)))
    return SceneSetup("earth", scene, Vector3(13, 2, 3), Vector3(0, 0, 0), vfov=20.0)

@register
def simple_light() -> SceneSetup:
    scene = Scene(background=BLACK)
    marble = Lambertian(NoiseTexture(4))
    scene.add(Sphere(Vector3(0, -1000, 0), 1000, marble))
    scene.add(Sphere(Vector3(0, 2, 0), 2, marble))
    light = DiffuseLight(Color(4, 4, 4))
    scene.add_light(scene.add(XYRect(3, 5, 1, 3, -2, light)))
    scene.add_light(scene.add(Sphere(Vector3(0, 7, 0), 2, light)))
    return SceneSetup("simple_light", scene, Vector3(26, 3, 6), Vector3(0, 2, 0),
                      vfov=20.0, samples_per_pixel=400)

def _cornell_walls(scene: Scene):
    red = Lambertian(Color(0.65, 0.05, 0.05))
    white = Lambertian(Color(0.73, 0.73, 0.73))
    green = Lambertian(Color(0.12, 0.45, 0.15))
    scene.add(YZRect(0, 555, 0, 555, 555, green))
    scene.add(YZRect(0, 555, 0, 555, 0, red))
    scene.add(XZRect(0, 555, 0, 555, 0, white))
    scene.add(XZRect(0, 555, 0, 555, 555, white))
    scene.add(XYRect(0, 555, 0, 555, 555, white))
    return white

def _cornell_boxes(tall_material, short_material):
    tall = Box(Vector3(0, 0, 0), Vector3(165, 330, 165), tall_material)
    tall = Translate(RotateY(tall, 15), Vector3(265, 0, 295))
    short = Box(Vector3(0, 0, 0), Vector3(165, 165, 165), short_material)
    short = Translate(RotateY(short, -18), Vector3(130, 0, 65))
    return tall, short

def _cornell_setup(name: str, scene: Scene, samples_per_pixel: int) -> SceneSetup:
    return SceneSetup(name, scene, Vector3(278, 278, -800), Vector3(278, 278, 0),
                      vfov=40.0, samples_per_pixel=samples_per_pixel)

@register
def cornell_box() -> SceneSetup:
    scene = Scene(background=BLACK)
    white = _cornell_walls(scene)
    scene.add_light(scene.add(XZRect(213, 343, 227, 332, 554, DiffuseLight(Color(15, 15, 15)))))
    for box in _cornell_boxes(white, white):
        scene.add(box)
    scene.add_light(scene.add(Sphere(Vector3(190, 255, 190), 90, Dielectric(1.5))))
    return _cornell_setup("cornell_box", scene, 500)

@register
def cornell_smoke() -> SceneSetup:
    scene = Scene(background=BLACK)
    white = _cornell_walls(scene)
    scene.add_light(scene.add(XZRect(113, 443, 127, 432, 554, DiffuseLight(Color(7, 7, 7)))))
    tall, short = _cornell_boxes(white, white)
    scene.add(ConstantMedium(tall, 0.01, Color(0, 0, 0)))
    scene.add(ConstantMedium(short, 0.01, Color(1, 1, 1)))
    return _cornell_setup("cornell_smoke", scene, 200)

@register
def cornell_box_spot() -> SceneSetup:
    scene = Scene(background=BLACK)
    white = _cornell_walls(scene)
    spot = SpotLight(Color(20, 20, 20), Vector3(0, -1, 0), 22.5)
    scene.add_light(scene.add(XZRect(213, 343, 227, 332, 554.99, spot)))
    for box in _cornell_boxes(white, white):
        scene.add(box)
    scene.add_light(scene.add(Sphere(Vector3(190, 255, 190), 90, Dielectric(1.5))))
    return _cornell_setup("cornell_box_spot", scene, 1000)

@register
def cornell_box_light() -> SceneSetup:
    scene = Scene(background=BLACK)
    white = _cornell_walls(scene)
    aluminum = Metal(Color(0.8, 0.85, 0.88), 0.0)
    for box in _cornell_boxes(aluminum, white):
        scene.add(box)
    light = DiffuseLight(Color(3, 1.4, 0.4))
    scene.add_light(scene.add(Sphere(Vector3(190, 195, 190), 30, light)))
    return _cornell_setup("cornell_box_light", scene, 1000)

@register
def final_scene() -> SceneSetup:
    scene = Scene(background=BLACK)

    ground = Lambertian(Color(0.48, 0.83, 0.53))
    boxes_per_side = 20
    boxes = []
    for i in range(boxes_per_side):
        for j in range(boxes_per_side):
            w = 100.0
            x0 = -1000.0 + i * w
            z0 = -1000.0 + j * w
            y1 = random_double(1, 101)
            boxes.append(Box(Vector3(x0, 0.0, z0), Vector3(x0 + w, y1, z0 + w), ground))
    scene.add(BVHNode(boxes, 0, len(boxes), 0.0, 1.0))

    scene.add_light(scene.add(XZRect(123, 423, 147, 412, 554, DiffuseLight(Color(7, 7, 7)))))

    center1 = Vector3(400, 400, 200)
    center2 = center1 + Vector3(30, 0, 0)
    scene.add(MovingSphere(center1, center2, 0.0, 1.0, 50, Lambertian(Color(0.7, 0.3, 0.1))))

    scene.add_light(scene.add(Sphere(Vector3(260, 150, 45), 50, Dielectric(1.5))))
    scene.add(Sphere(Vector3(0, 150, 145), 50, Metal(Color(0.8, 0.8, 0.9), 1.0)))

    boundary = Sphere(Vector3(360, 150, 145), 70, Dielectric(1.5))
    scene.add_light(scene.add(boundary))
    scene.add(ConstantMedium(boundary, 0.2, Color(0.2, 0.4, 0.9)))
    # Thin haze over everything
    scene.add(ConstantMedium(Sphere(Vector3(0, 0, 0), 5000, Dielectric(1.5)), 0.0001, Color(1, 1, 1)))

    scene.add(Sphere(Vector3(400, 200, 400), 100, Lambertian(load_texture(EARTH_TEXTURE))))
    scene.add(Sphere(Vector3(220, 280, 300), 80, Lambertian(NoiseTexture(0.1))))

    white = Lambertian(Color(0.73, 0.73, 0.73))
    cluster = HittableList(Sphere(random_vector(0, 165), 10, white) for _ in range(1000))
    scene.add(Translate(RotateY(cluster.build_bvh(0.0, 1.0), 15), Vector3(-100, 270, 395)))

    return SceneSetup("final_scene", scene, Vector3(478, 278, -600), Vector3(278, 278, 0),
                      vfov=40.0, samples_per_pixel=10000)
