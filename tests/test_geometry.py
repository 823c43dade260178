"""Unit tests for the hittable shapes, transforms and participating media."""

import math

import pytest

from core.aabb import AABB
from core.ray import Ray
from core.vector import Color, Vector3
from geometry.aarect import XYRect, XZRect, YZRect
from geometry.box import Box
from geometry.constant_medium import ConstantMedium
from geometry.sphere import MovingSphere, Sphere, sphere_uv
from geometry.transform import RotateY, Translate
from geometry.world import HittableList
from materials.isotropic import Isotropic
from materials.lambertian import Lambertian

GREY = Lambertian(Color(0.5, 0.5, 0.5))


def assert_vec(actual, expected, abs=1e-9):
    assert actual.x == pytest.approx(expected.x, abs=abs)
    assert actual.y == pytest.approx(expected.y, abs=abs)
    assert actual.z == pytest.approx(expected.z, abs=abs)


class TestSphere:
    """Tests for static sphere intersection and sampling."""

    def test_hit_from_outside(self):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, GREY)
        rec = sphere.hit(Ray(Vector3(0, 0, -5), Vector3(0, 0, 1)), 0.001, math.inf)
        assert rec is not None
        assert rec.t == pytest.approx(4.0)
        assert_vec(rec.p, Vector3(0, 0, -1))
        assert_vec(rec.normal, Vector3(0, 0, -1))
        assert rec.front_face
        assert rec.material is GREY

    def test_hit_from_inside_faces_ray(self):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, GREY)
        rec = sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, 1)), 0.001, math.inf)
        assert rec.t == pytest.approx(1.0)
        assert not rec.front_face
        assert_vec(rec.normal, Vector3(0, 0, -1))

    def test_interval_is_open_below_closed_above(self):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, GREY)
        ray = Ray(Vector3(0, 0, -5), Vector3(0, 0, 1))
        assert sphere.hit(ray, 0.001, 4.0).t == pytest.approx(4.0)
        # The near root sits exactly on t_min, so the far root is reported
        assert sphere.hit(ray, 4.0, math.inf).t == pytest.approx(6.0)
        assert sphere.hit(ray, 0.001, 3.9) is None

    def test_miss(self):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, GREY)
        assert sphere.hit(Ray(Vector3(0, 2, -5), Vector3(0, 0, 1)), 0.001, math.inf) is None

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_degenerate_radius_never_hits(self, radius):
        sphere = Sphere(Vector3(0, 0, 0), radius, GREY)
        assert sphere.hit(Ray(Vector3(0, 0, -5), Vector3(0, 0, 1)), 0.001, math.inf) is None

    def test_zero_direction_never_hits(self):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, GREY)
        assert sphere.hit(Ray(Vector3(0, 0, -5), Vector3(0, 0, 0)), 0.001, math.inf) is None

    def test_bounding_box(self):
        box = Sphere(Vector3(1, 2, 3), 2.0, GREY).bounding_box(0, 1)
        assert box.minimum == Vector3(-1, 0, 1)
        assert box.maximum == Vector3(3, 4, 5)

    def test_uv(self):
        u, v = sphere_uv(Vector3(0, 1, 0))
        assert v == pytest.approx(1.0)
        u, v = sphere_uv(Vector3(0, 0, 1))
        assert (u, v) == pytest.approx((0.25, 0.5))
        u, v = sphere_uv(Vector3(1, 0, 0))
        assert (u, v) == pytest.approx((0.5, 0.5))

    def test_pdf_value_from_outside_is_inverse_solid_angle(self):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, GREY)
        origin = Vector3(0, 0, -4)
        cos_theta_max = math.sqrt(1 - 1 / 16)
        expected = 1 / (2 * math.pi * (1 - cos_theta_max))
        assert sphere.pdf_value(origin, Vector3(0, 0, 1)) == pytest.approx(expected)
        assert sphere.pdf_value(origin, Vector3(0, 0, -1)) == 0.0

    def test_pdf_value_from_inside_is_uniform(self):
        sphere = Sphere(Vector3(0, 0, 0), 2.0, GREY)
        assert sphere.pdf_value(Vector3(0.5, 0, 0), Vector3(0, 1, 0)) == pytest.approx(1 / (4 * math.pi))

    def test_random_directions_stay_in_cone(self):
        sphere = Sphere(Vector3(0, 0, 10), 2.0, GREY)
        origin = Vector3(0, 0, 0)
        cos_theta_max = math.sqrt(1 - 4 / 100)
        for _ in range(500):
            d = sphere.random(origin).normalize()
            assert d.dot(Vector3(0, 0, 1)) >= cos_theta_max - 1e-9

    def test_random_from_inside_is_unit(self):
        sphere = Sphere(Vector3(0, 0, 0), 2.0, GREY)
        for _ in range(50):
            assert sphere.random(Vector3(0, 0, 0)).length() == pytest.approx(1.0)


class TestMovingSphere:
    def test_center_interpolates(self):
        sphere = MovingSphere(Vector3(0, 0, 0), Vector3(10, 0, 0), 0.0, 1.0, 1.0, GREY)
        assert sphere.center(0.0) == Vector3(0, 0, 0)
        assert sphere.center(0.5) == Vector3(5, 0, 0)
        assert sphere.center(1.0) == Vector3(10, 0, 0)

    def test_equal_times_hold_still(self):
        sphere = MovingSphere(Vector3(1, 0, 0), Vector3(10, 0, 0), 0.5, 0.5, 1.0, GREY)
        assert sphere.center(0.9) == Vector3(1, 0, 0)

    def test_hit_uses_ray_time(self):
        sphere = MovingSphere(Vector3(0, 0, 0), Vector3(10, 0, 0), 0.0, 1.0, 1.0, GREY)
        early = Ray(Vector3(10, 0, -5), Vector3(0, 0, 1), time=0.0)
        late = Ray(Vector3(10, 0, -5), Vector3(0, 0, 1), time=1.0)
        assert sphere.hit(early, 0.001, math.inf) is None
        assert sphere.hit(late, 0.001, math.inf) is not None

    def test_bounding_box_covers_both_ends(self):
        box = MovingSphere(Vector3(0, 0, 0), Vector3(10, 0, 0), 0.0, 1.0, 1.0, GREY).bounding_box(0, 1)
        assert box.contains(Vector3(-1, 0, 0)) and box.contains(Vector3(11, 0, 0))


class TestRects:
    """Tests for the axis-aligned rectangles."""

    def test_xy_hit(self):
        rect = XYRect(0, 2, 0, 1, 5, GREY)
        rec = rect.hit(Ray(Vector3(1, 0.5, 0), Vector3(0, 0, 1)), 0.001, math.inf)
        assert rec.t == pytest.approx(5.0)
        assert_vec(rec.p, Vector3(1, 0.5, 5))
        assert (rec.u, rec.v) == pytest.approx((0.5, 0.5))
        assert_vec(rec.normal, Vector3(0, 0, -1))
        assert not rec.front_face

    def test_parallel_ray_misses(self):
        rect = XZRect(0, 1, 0, 1, 0, GREY)
        assert rect.hit(Ray(Vector3(0.5, 0, -1), Vector3(0, 0, 1)), 0.001, math.inf) is None

    def test_outside_bounds_misses(self):
        rect = YZRect(0, 1, 0, 1, 3, GREY)
        assert rect.hit(Ray(Vector3(0, 2, 0.5), Vector3(1, 0, 0)), 0.001, math.inf) is None

    def test_yz_axes(self):
        rect = YZRect(0, 1, 0, 2, 3, GREY)
        rec = rect.hit(Ray(Vector3(0, 0.25, 1.0), Vector3(1, 0, 0)), 0.001, math.inf)
        assert_vec(rec.p, Vector3(3, 0.25, 1.0))
        assert (rec.u, rec.v) == pytest.approx((0.25, 0.5))

    def test_bounding_box_is_padded(self):
        box = XZRect(0, 1, 0, 1, 2, GREY).bounding_box(0, 1)
        assert box.maximum.y > box.minimum.y

    @pytest.mark.parametrize("scale", [1.0, 2.0, 0.1])
    def test_pdf_value_is_distance_squared_over_area(self, scale):
        rect = XZRect(0, 1, 0, 1, 5, GREY)
        pdf = rect.pdf_value(Vector3(0.5, 0, 0.5), Vector3(0, scale, 0))
        assert pdf == pytest.approx(25.0)

    def test_pdf_value_zero_when_missing(self):
        rect = XZRect(0, 1, 0, 1, 5, GREY)
        assert rect.pdf_value(Vector3(0.5, 0, 0.5), Vector3(0, -1, 0)) == 0.0

    @pytest.mark.parametrize("rect", [
        XYRect(-1, 1, 2, 3, 4, GREY),
        XZRect(-1, 1, 2, 3, 4, GREY),
        YZRect(-1, 1, 2, 3, 4, GREY),
    ])
    def test_random_lands_on_rect(self, rect):
        origin = Vector3(0.3, -0.2, 0.1)
        for _ in range(100):
            d = rect.random(origin)
            p = origin + d
            assert p[rect.axis] == pytest.approx(4.0)
            assert -1 <= p[rect.a_axis] <= 1
            assert 2 <= p[rect.b_axis] <= 3
            assert rect.pdf_value(origin, d) > 0.0


class TestBox:
    def test_hit_front_face(self):
        box = Box(Vector3(0, 0, 0), Vector3(1, 1, 1), GREY)
        rec = box.hit(Ray(Vector3(0.5, 0.5, -3), Vector3(0, 0, 1)), 0.001, math.inf)
        assert rec.t == pytest.approx(3.0)
        assert rec.normal.dot(Vector3(0, 0, 1)) < 0

    def test_bounding_box(self):
        box = Box(Vector3(0, 0, 0), Vector3(1, 2, 3), GREY).bounding_box(0, 1)
        assert box.minimum == Vector3(0, 0, 0)
        assert box.maximum == Vector3(1, 2, 3)


class TestTransforms:
    """Tests for Translate and RotateY."""

    def test_translate_moves_hit_point(self):
        moved = Translate(Sphere(Vector3(0, 0, 0), 1.0, GREY), Vector3(10, 0, 0))
        rec = moved.hit(Ray(Vector3(10, 0, -5), Vector3(0, 0, 1)), 0.001, math.inf)
        assert rec.t == pytest.approx(4.0)
        assert_vec(rec.p, Vector3(10, 0, -1))
        assert_vec(rec.normal, Vector3(0, 0, -1))

    def test_translate_keeps_front_face_from_inside(self):
        moved = Translate(Sphere(Vector3(0, 0, 0), 1.0, GREY), Vector3(10, 0, 0))
        rec = moved.hit(Ray(Vector3(10, 0, 0), Vector3(0, 0, 1)), 0.001, math.inf)
        assert not rec.front_face
        assert rec.normal.dot(Vector3(0, 0, 1)) < 0

    def test_translate_bounding_box(self):
        box = Translate(Box(Vector3(0, 0, 0), Vector3(1, 1, 1), GREY), Vector3(1, 2, 3)).bounding_box(0, 1)
        assert box.minimum == Vector3(1, 2, 3)
        assert box.maximum == Vector3(2, 3, 4)

    def test_translate_forwards_pdf(self):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, GREY)
        moved = Translate(sphere, Vector3(10, 0, 0))
        assert moved.pdf_value(Vector3(10, 0, 5), Vector3(0, 0, -1)) == pytest.approx(
            sphere.pdf_value(Vector3(0, 0, 5), Vector3(0, 0, -1)))

    def test_rotate_bounding_box(self):
        rotated = RotateY(Box(Vector3(0, 0, 0), Vector3(1, 1, 1), GREY), 90)
        box = rotated.bounding_box(0, 1)
        assert_vec(box.minimum, Vector3(0, 0, -1))
        assert_vec(box.maximum, Vector3(1, 1, 0))

    def test_rotate_hit(self):
        rotated = RotateY(Box(Vector3(0, 0, 0), Vector3(1, 1, 1), GREY), 90)
        ray = Ray(Vector3(0.5, 0.5, 5), Vector3(0, 0, -1))
        rec = rotated.hit(ray, 0.001, math.inf)
        assert rec.t == pytest.approx(5.0)
        assert_vec(rec.p, Vector3(0.5, 0.5, 0))
        assert_vec(rec.p, ray.at(rec.t))
        assert rec.normal.dot(ray.direction) < 0
        assert rec.normal.length() == pytest.approx(1.0)

    def test_rotate_forwards_pdf_and_random(self):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, GREY)
        rotated = RotateY(sphere, 37)
        origin = Vector3(3, 0, 0)
        assert rotated.pdf_value(origin, Vector3(-1, 0, 0)) == pytest.approx(
            sphere.pdf_value(origin, Vector3(-1, 0, 0)))
        for _ in range(50):
            d = rotated.random(origin)
            assert d.normalize().dot(Vector3(-1, 0, 0)) >= math.sqrt(1 - 1 / 9) - 1e-9


class TestConstantMedium:
    """Tests for the homogeneous volume."""

    @pytest.mark.parametrize("density", [0.0, -1.0])
    def test_density_must_be_positive(self, density):
        with pytest.raises(ValueError):
            ConstantMedium(Sphere(Vector3(0, 0, 0), 1.0, GREY), density, Color(1, 1, 1))

    def test_dense_medium_scatters_at_entry(self):
        medium = ConstantMedium(Sphere(Vector3(0, 0, 0), 1.0, GREY), 1e6, Color(1, 1, 1))
        ray = Ray(Vector3(0, 0, -5), Vector3(0, 0, 1))
        rec = medium.hit(ray, 0.001, math.inf)
        assert 4.0 < rec.t < 4.01
        assert isinstance(rec.material, Isotropic)
        assert rec.front_face
        assert rec.normal.dot(ray.direction) < 0
        assert rec.normal.length() == pytest.approx(1.0)

    def test_thin_medium_lets_ray_through(self):
        medium = ConstantMedium(Sphere(Vector3(0, 0, 0), 1.0, GREY), 1e-9, Color(1, 1, 1))
        assert medium.hit(Ray(Vector3(0, 0, -5), Vector3(0, 0, 1)), 0.001, math.inf) is None

    def test_ray_missing_boundary(self):
        medium = ConstantMedium(Sphere(Vector3(0, 0, 0), 1.0, GREY), 1e6, Color(1, 1, 1))
        assert medium.hit(Ray(Vector3(0, 3, -5), Vector3(0, 0, 1)), 0.001, math.inf) is None

    def test_dense_medium_from_inside(self):
        medium = ConstantMedium(Sphere(Vector3(0, 0, 0), 1.0, GREY), 1e6, Color(1, 1, 1))
        rec = medium.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, 1)), 0.001, math.inf)
        assert 0.001 < rec.t < 0.01

    def test_bounding_box_of_boundary(self):
        medium = ConstantMedium(Box(Vector3(0, 0, 0), Vector3(1, 1, 1), GREY), 0.5, Color(1, 1, 1))
        assert medium.bounding_box(0, 1).maximum == Vector3(1, 1, 1)


class TestHittableList:
    def test_closest_hit_wins(self):
        near = Lambertian(Color(1, 0, 0))
        far = Lambertian(Color(0, 1, 0))
        world = HittableList([
            Sphere(Vector3(0, 0, 10), 1.0, far),
            Sphere(Vector3(0, 0, 5), 1.0, near),
        ])
        rec = world.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, 1)), 0.001, math.inf)
        assert rec.material is near

    def test_bounding_box(self):
        assert HittableList().bounding_box(0, 1) is None
        world = HittableList([
            Sphere(Vector3(0, 0, 0), 1.0, GREY),
            Sphere(Vector3(5, 0, 0), 1.0, GREY),
        ])
        box = world.bounding_box(0, 1)
        assert isinstance(box, AABB)
        assert box.minimum.x == pytest.approx(-1) and box.maximum.x == pytest.approx(6)

    def test_pdf_value_averages_members(self):
        a = XZRect(0, 1, 0, 1, 5, GREY)
        b = XZRect(10, 11, 0, 1, 5, GREY)
        lights = HittableList([a, b])
        origin = Vector3(0.5, 0, 0.5)
        direction = Vector3(0, 1, 0)
        assert lights.pdf_value(origin, direction) == pytest.approx(
            0.5 * a.pdf_value(origin, direction) + 0.5 * b.pdf_value(origin, direction))

    def test_random_picks_every_member(self):
        lights = HittableList([XZRect(0, 1, 0, 1, 5, GREY), XZRect(10, 11, 0, 1, 5, GREY)])
        xs = [lights.random(Vector3(0, 0, 0)).x for _ in range(200)]
        assert any(x < 2 for x in xs) and any(x > 9 for x in xs)
