import math

import pytest

from raycaster.common import AmbientLight, PointLight, Scene
from raycaster.errors import SceneError
from raycaster.geometry import Intersectable, Sphere, closest_hit, intersect
from raycaster.vecmath import vec

ORIGIN = vec([0.0, 0.0, 0.0])


def test_intersect_returns_both_roots():
    sphere = Sphere(center=[0.0, 0.0, 5.0], radius=1.0, color=(255, 255, 255))
    t1, t2 = intersect(sphere, ORIGIN, vec([0.0, 0.0, 1.0]))
    assert sorted((t1, t2)) == pytest.approx([4.0, 6.0])


def test_intersect_miss_is_infinite():
    sphere = Sphere(center=[0.0, 0.0, 5.0], radius=1.0, color=(255, 255, 255))
    t1, t2 = intersect(sphere, ORIGIN, vec([0.0, 1.0, 0.0]))
    assert t1 == math.inf
    assert t2 == math.inf


def test_intersect_non_unit_direction():
    sphere = Sphere(center=[0.0, 0.0, 5.0], radius=1.0, color=(255, 255, 255))
    t1, t2 = intersect(sphere, ORIGIN, vec([0.0, 0.0, 2.0]))
    assert sorted((t1, t2)) == pytest.approx([2.0, 3.0])


def test_zero_direction_is_a_miss():
    sphere = Sphere(center=[0.0, 0.0, 5.0], radius=1.0, color=(255, 255, 255))
    assert intersect(sphere, ORIGIN, vec([0.0, 0.0, 0.0])) == (math.inf, math.inf)


def test_closest_hit_picks_nearest_root():
    far = Sphere(center=[0.0, 0.0, 10.0], radius=1.0, color=(0, 255, 0))
    near = Sphere(center=[0.0, 0.0, 5.0], radius=1.0, color=(255, 0, 0))

    t, sphere = closest_hit([far, near], ORIGIN, vec([0.0, 0.0, 1.0]), 1.0, math.inf)
    assert sphere is near
    assert t == pytest.approx(4.0)


def test_closest_hit_respects_open_interval():
    sphere = Sphere(center=[0.0, 0.0, 5.0], radius=1.0, color=(255, 0, 0))
    direction = vec([0.0, 0.0, 1.0])

    # near root excluded by t_min, far root still valid
    t, hit = closest_hit([sphere], ORIGIN, direction, 4.0, math.inf)
    assert hit is sphere
    assert t == pytest.approx(6.0)

    # both roots outside
    t, hit = closest_hit([sphere], ORIGIN, direction, 1.0, 4.0)
    assert hit is None
    assert t == math.inf


def test_closest_hit_from_inside_sphere():
    sphere = Sphere(center=[0.0, 0.0, 0.0], radius=2.0, color=(255, 0, 0))
    t, hit = closest_hit([sphere], ORIGIN, vec([1.0, 0.0, 0.0]), 0.01, math.inf)
    assert hit is sphere
    assert t == pytest.approx(2.0)


def test_ties_go_to_first_sphere():
    first = Sphere(center=[0.0, 0.0, 5.0], radius=1.0, color=(255, 0, 0))
    second = Sphere(center=[0.0, 0.0, 5.0], radius=1.0, color=(0, 0, 255))

    _, hit = closest_hit([first, second], ORIGIN, vec([0.0, 0.0, 1.0]), 1.0, math.inf)
    assert hit is first

    _, hit = closest_hit([second, first], ORIGIN, vec([0.0, 0.0, 1.0]), 1.0, math.inf)
    assert hit is second


def test_scene_closest_hit_uses_scene_order():
    first = Sphere(center=[0.0, 0.0, 5.0], radius=1.0, color=(255, 0, 0))
    second = Sphere(center=[0.0, 0.0, 5.0], radius=1.0, color=(0, 0, 255))
    scene = Scene(spheres=[first, second])

    _, hit = scene.closest_hit(ORIGIN, vec([0.0, 0.0, 1.0]), 1.0, math.inf)
    assert hit is first


@pytest.mark.parametrize("radius", [0.0, -1.0])
def test_degenerate_sphere_rejected(radius):
    with pytest.raises(SceneError):
        Sphere(center=[0.0, 0.0, 0.0], radius=radius, color=(255, 0, 0))


def test_sphere_normalizes_fields():
    sphere = Sphere(center=(1, 2, 3), radius=1, color=[10.0, 20.0, 30.0])
    assert sphere.center.dtype.kind == "f"
    assert sphere.color == (10, 20, 30)
    assert sphere.specular is None


def test_sphere_intersect_method():
    sphere = Sphere(center=[0.0, 0.0, 5.0], radius=1.0, color=(255, 255, 255))
    direction = vec([0.0, 0.1, 1.0])
    assert sphere.intersect(ORIGIN, direction) == intersect(sphere, ORIGIN, direction)


def test_scene_is_intersectable():
    assert isinstance(Scene(), Intersectable)


def test_negative_light_intensity_rejected():
    with pytest.raises(SceneError):
        AmbientLight(intensity=-0.1)
    with pytest.raises(SceneError):
        PointLight(intensity=-1.0, position=[0.0, 0.0, 0.0])


def test_total_intensity():
    scene = Scene(lights=[AmbientLight(intensity=0.25), PointLight(intensity=0.5, position=[1.0, 2.0, 3.0])])
    assert scene.total_intensity() == pytest.approx(0.75)
    assert isinstance(scene.lights, tuple)


def test_minus_one_specular_means_matte():
    sphere = Sphere(center=[0.0, 0.0, 0.0], radius=1.0, color=(255, 0, 0), specular=-1)
    assert sphere.specular is None


@pytest.mark.parametrize("specular", [-0.5, -2, -1000])
def test_other_negative_specular_rejected(specular):
    with pytest.raises(SceneError):
        Sphere(center=[0.0, 0.0, 0.0], radius=1.0, color=(255, 0, 0), specular=specular)
