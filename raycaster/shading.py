from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from raycaster.common import AmbientLight, DirectionalLight, PointLight, Scene
from raycaster.vecmath import Vec3, add, dot, length, scale, subtract

BACKGROUND_COLOR = (0, 0, 0)

# Shadow rays start slightly off the surface so it does not shadow itself
SHADOW_EPSILON = 0.01


def compute_lighting(
    scene: Scene,
    point: Vec3,
    normal: Vec3,
    view: Vec3,
    specular: Optional[float],
    clip_point_shadows: bool = False,
) -> float:
    """
    Sum the light intensity reaching `point` from every light in the scene.

    Parameters:
        - point: surface point being shaded.
        - normal: surface normal at `point`. Need not be unit length.
        - view: vector from `point` back towards the viewer.
        - specular: specular exponent, or None for a matte surface.
        - clip_point_shadows: end point light shadow rays at the light. When
          False, a sphere behind a point light still casts a shadow.
    """
    intensity = 0.0
    for light in scene.lights:
        match light:
            case AmbientLight():
                intensity += light.intensity
                continue
            case PointLight():
                to_light = subtract(light.position, point)
                shadow_t_max = 1.0 if clip_point_shadows else float("inf")
            case DirectionalLight():
                to_light = light.direction
                shadow_t_max = float("inf")
            case _:
                raise TypeError(f"unknown light type {type(light).__name__}")

        _, blocker = scene.closest_hit(point, to_light, SHADOW_EPSILON, shadow_t_max)
        if blocker is not None:
            continue

        # diffuse
        n_dot_l = dot(normal, to_light)
        norms = length(normal) * length(to_light)
        if n_dot_l >= 0 and norms > 0:
            intensity += light.intensity * n_dot_l / norms

        # specular
        if specular is not None:
            reflected = subtract(scale(2 * n_dot_l, normal), to_light)
            r_dot_v = dot(reflected, view)
            norms = length(reflected) * length(view)
            if r_dot_v >= 0 and norms > 0:
                intensity += light.intensity * (r_dot_v / norms) ** specular

    return intensity


def shade(color: Tuple[int, int, int], intensity: float) -> NDArray[np.uint8]:
    return np.clip(np.rint(intensity * np.asarray(color, dtype=np.float64)), 0, 255).astype(np.uint8)


def trace_ray(
    scene: Scene,
    ray_origin: Vec3,
    ray_dir: Vec3,
    t_min: float,
    t_max: float,
    clip_point_shadows: bool = False,
) -> NDArray[np.uint8]:
    closest_t, sphere = scene.closest_hit(ray_origin, ray_dir, t_min, t_max)
    if sphere is None:
        return np.array(BACKGROUND_COLOR, dtype=np.uint8)

    point = add(ray_origin, scale(closest_t, ray_dir))
    normal = subtract(point, sphere.center)
    normal_length = length(normal)
    if normal_length > 0:
        normal = scale(1 / normal_length, normal)

    lighting = compute_lighting(
        scene,
        point,
        normal,
        scale(-1, ray_dir),
        sphere.specular,
        clip_point_shadows,
    )
    return shade(sphere.color, lighting)
