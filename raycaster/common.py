from dataclasses import dataclass
from typing import Optional, Tuple, Union

from loguru import logger

from raycaster.errors import SceneError
from raycaster.geometry import Sphere, closest_hit
from raycaster.vecmath import Vec3, vec


@dataclass
class Settings:
    width: int = 640
    height: int = 640
    viewport_size: float = 1.0
    viewport_distance: float = 1.0
    camera_position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    move_step: float = 0.1
    # Stop point light shadow rays at the light itself instead of at infinity
    clip_point_shadows: bool = False

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image size must be positive, got {self.width}x{self.height}")
        if self.viewport_size <= 0 or self.viewport_distance <= 0:
            raise ValueError("viewport size and distance must be positive")


def _check_intensity(intensity: float):
    if intensity < 0:
        raise SceneError(f"light intensity must not be negative, got {intensity}")


@dataclass(frozen=True)
class AmbientLight:
    intensity: float

    def __post_init__(self):
        _check_intensity(self.intensity)


@dataclass(frozen=True, eq=False)
class PointLight:
    intensity: float
    position: Vec3

    def __post_init__(self):
        _check_intensity(self.intensity)
        object.__setattr__(self, "position", vec(self.position))


@dataclass(frozen=True, eq=False)
class DirectionalLight:
    intensity: float
    # Not normalized: its length scales the diffuse and specular terms
    direction: Vec3

    def __post_init__(self):
        _check_intensity(self.intensity)
        object.__setattr__(self, "direction", vec(self.direction))


Light = Union[AmbientLight, PointLight, DirectionalLight]


@dataclass(frozen=True)
class Scene:
    spheres: Tuple[Sphere, ...] = ()
    lights: Tuple[Light, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "spheres", tuple(self.spheres))
        object.__setattr__(self, "lights", tuple(self.lights))

        total = self.total_intensity()
        if total > 1.0 + 1e-9:
            logger.warning(f"Light intensities sum to {total:.2f}, colors will saturate")

    def total_intensity(self) -> float:
        return sum(light.intensity for light in self.lights)

    def closest_hit(
        self,
        ray_origin: Vec3,
        ray_dir: Vec3,
        t_min: float,
        t_max: float,
    ) -> Tuple[float, Optional[Sphere]]:
        # Brute force: every ray is tested against every sphere
        return closest_hit(self.spheres, ray_origin, ray_dir, t_min, t_max)


def default_scene() -> Scene:
    sphere_red = Sphere(
        center=[0.0, -1.0, 3.0],
        radius=1.0,
        color=(255, 0, 0),
        specular=500,
    )
    sphere_blue = Sphere(
        center=[2.0, 0.0, 4.0],
        radius=1.0,
        color=(0, 0, 255),
        specular=500,
    )
    sphere_green = Sphere(
        center=[-2.0, 0.0, 4.0],
        radius=1.0,
        color=(0, 255, 0),
        specular=10,
    )
    sphere_floor = Sphere(
        center=[0.0, -5001.0, 0.0],
        radius=5000.0,
        color=(255, 255, 0),
        specular=1000,
    )

    return Scene(
        spheres=(
            sphere_red,
            sphere_blue,
            sphere_green,
            sphere_floor,
        ),
        lights=(
            AmbientLight(intensity=0.2),
            PointLight(intensity=0.6, position=[2.0, 1.0, 0.0]),
            DirectionalLight(intensity=0.2, direction=[1.0, 4.0, 4.0]),
        ),
    )
