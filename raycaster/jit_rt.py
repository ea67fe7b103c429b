from typing import Tuple

import numba
import numpy as np
from loguru import logger
from numpy.typing import NDArray

from raycaster.app import T_MIN, App
from raycaster.common import AmbientLight, DirectionalLight, PointLight, Scene
from raycaster.shading import SHADOW_EPSILON

# Light rows are (kind, intensity, x, y, z)
AMBIENT = 0
POINT = 1
DIRECTIONAL = 2

# Sphere rows are (cx, cy, cz, radius, r, g, b, specular)
NO_SPECULAR = -1.0


@numba.njit
def add(vec1, vec2):
    return vec1[0] + vec2[0], vec1[1] + vec2[1], vec1[2] + vec2[2]


@numba.njit
def sub(vec1, vec2):
    return vec1[0] - vec2[0], vec1[1] - vec2[1], vec1[2] - vec2[2]


@numba.njit
def mul_scalar(vec, x):
    return x * vec[0], x * vec[1], x * vec[2]


@numba.njit
def dot(vec1, vec2):
    return vec1[0] * vec2[0] + vec1[1] * vec2[1] + vec1[2] * vec2[2]


@numba.njit
def length(vec):
    return dot(vec, vec) ** 0.5


@numba.njit
def mat_vec(m, vec):
    return (
        vec[0] * m[0, 0] + vec[1] * m[0, 1] + vec[2] * m[0, 2],
        vec[0] * m[1, 0] + vec[1] * m[1, 1] + vec[2] * m[1, 2],
        vec[0] * m[2, 0] + vec[1] * m[2, 1] + vec[2] * m[2, 2],
    )


@numba.njit
def to_channel(value):
    return int(min(max(np.rint(value), 0.0), 255.0))


@numba.njit
def intersect(spheres, k, ray_origin, ray_dir):
    center = (spheres[k, 0], spheres[k, 1], spheres[k, 2])
    radius = spheres[k, 3]

    oc = sub(ray_origin, center)

    a = dot(ray_dir, ray_dir)
    b = 2 * dot(oc, ray_dir)
    c = dot(oc, oc) - radius * radius

    discriminant = b * b - 4 * a * c

    if discriminant < 0 or a == 0:
        return np.inf, np.inf

    sqrt_d = discriminant ** 0.5
    return (-b + sqrt_d) / (2 * a), (-b - sqrt_d) / (2 * a)


@numba.njit
def closest_hit(spheres, ray_origin, ray_dir, t_min, t_max):
    closest_t = np.inf
    nearest = -1
    for k in range(spheres.shape[0]):
        t1, t2 = intersect(spheres, k, ray_origin, ray_dir)
        if t1 > t_min and t1 < t_max and t1 < closest_t:
            closest_t = t1
            nearest = k
        if t2 > t_min and t2 < t_max and t2 < closest_t:
            closest_t = t2
            nearest = k

    return closest_t, nearest


@numba.njit
def compute_lighting(spheres, lights, point, normal, view, specular, clip_point_shadows):
    intensity = 0.0
    for k in range(lights.shape[0]):
        kind = int(lights[k, 0])
        light_intensity = lights[k, 1]
        if kind == AMBIENT:
            intensity += light_intensity
            continue

        vector = (lights[k, 2], lights[k, 3], lights[k, 4])
        if kind == POINT:
            to_light = sub(vector, point)
            shadow_t_max = 1.0 if clip_point_shadows else np.inf
        else:
            to_light = vector
            shadow_t_max = np.inf

        _, blocker = closest_hit(spheres, point, to_light, SHADOW_EPSILON, shadow_t_max)
        if blocker >= 0:
            continue

        n_dot_l = dot(normal, to_light)
        norms = length(normal) * length(to_light)
        if n_dot_l >= 0 and norms > 0:
            intensity += light_intensity * n_dot_l / norms

        if specular != NO_SPECULAR:
            reflected = sub(mul_scalar(normal, 2 * n_dot_l), to_light)
            r_dot_v = dot(reflected, view)
            norms = length(reflected) * length(view)
            if r_dot_v >= 0 and norms > 0:
                intensity += light_intensity * (r_dot_v / norms) ** specular

    return intensity


@numba.njit
def trace_ray(spheres, lights, ray_origin, ray_dir, t_min, t_max, clip_point_shadows):
    closest_t, nearest = closest_hit(spheres, ray_origin, ray_dir, t_min, t_max)
    if nearest < 0:
        return 0.0, 0.0, 0.0

    point = add(ray_origin, mul_scalar(ray_dir, closest_t))
    normal = sub(point, (spheres[nearest, 0], spheres[nearest, 1], spheres[nearest, 2]))
    normal_length = length(normal)
    if normal_length > 0:
        normal = mul_scalar(normal, 1 / normal_length)

    lighting = compute_lighting(
        spheres,
        lights,
        point,
        normal,
        mul_scalar(ray_dir, -1.0),
        spheres[nearest, 7],
        clip_point_shadows,
    )
    return (
        lighting * spheres[nearest, 4],
        lighting * spheres[nearest, 5],
        lighting * spheres[nearest, 6],
    )


@numba.njit
def render_frame(
    image,
    spheres,
    lights,
    camera_origin,
    rotation,
    viewport_size,
    viewport_distance,
    clip_point_shadows,
):
    height, width, _ = image.shape
    half_w = width // 2
    half_h = height // 2

    for x in range(-half_w, width - half_w):
        for y in range(-half_h, height - half_h):
            view_dir = (
                x * viewport_size / width,
                y * viewport_size / height,
                viewport_distance,
            )
            ray_dir = mat_vec(rotation, view_dir)
            r, g, b = trace_ray(spheres, lights, camera_origin, ray_dir, T_MIN, np.inf, clip_point_shadows)

            row = height - half_h - 1 - y
            col = x + half_w
            image[row, col, 0] = to_channel(r)
            image[row, col, 1] = to_channel(g)
            image[row, col, 2] = to_channel(b)
            image[row, col, 3] = 255


def scene_to_arrays(scene: Scene) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    spheres = np.zeros((len(scene.spheres), 8), dtype=np.float64)
    for k, s in enumerate(scene.spheres):
        specular = NO_SPECULAR if s.specular is None else s.specular
        spheres[k] = (*s.center, s.radius, *s.color, specular)

    lights = np.zeros((len(scene.lights), 5), dtype=np.float64)
    for k, light in enumerate(scene.lights):
        match light:
            case AmbientLight():
                lights[k] = (AMBIENT, light.intensity, 0.0, 0.0, 0.0)
            case PointLight():
                lights[k] = (POINT, light.intensity, *light.position)
            case DirectionalLight():
                lights[k] = (DIRECTIONAL, light.intensity, *light.direction)
            case _:
                raise TypeError(f"unknown light type {type(light).__name__}")

    return spheres, lights


class JitApp(App):
    def run(self):
        if not render_frame.signatures:
            logger.warning("JIT cache miss, compiling the render kernel on first call")

        spheres, lights = scene_to_arrays(self.scene)
        render_frame(
            self.image,
            spheres,
            lights,
            tuple(float(c) for c in self.camera.origin),
            np.ascontiguousarray(self.camera.rotation, dtype=np.float64),
            float(self.settings.viewport_size),
            float(self.settings.viewport_distance),
            bool(self.settings.clip_point_shadows),
        )
