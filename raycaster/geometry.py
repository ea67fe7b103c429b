from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Tuple, runtime_checkable

from raycaster.errors import SceneError
from raycaster.vecmath import Vec3, dot, subtract, vec


@dataclass(frozen=True, eq=False)
class Sphere:
    center: Vec3
    radius: float
    color: Tuple[int, int, int]
    # None (or -1) means the surface is matte (no specular highlight)
    specular: Optional[float] = None

    def __post_init__(self):
        if not self.radius > 0:
            raise SceneError(f"sphere radius must be positive, got {self.radius}")
        if self.specular == -1:
            object.__setattr__(self, "specular", None)
        elif self.specular is not None and self.specular < 0:
            raise SceneError(f"specular exponent must not be negative, got {self.specular}")
        object.__setattr__(self, "center", vec(self.center))
        object.__setattr__(self, "color", tuple(int(c) for c in self.color))

    def intersect(self, ray_origin: Vec3, ray_dir: Vec3) -> Tuple[float, float]:
        return intersect(self, ray_origin, ray_dir)


@runtime_checkable
class Intersectable(Protocol):
    def closest_hit(
        self,
        ray_origin: Vec3,
        ray_dir: Vec3,
        t_min: float,
        t_max: float,
    ) -> Tuple[float, Optional[Sphere]]:
        ...


def intersect(sphere: Sphere, ray_origin: Vec3, ray_dir: Vec3) -> Tuple[float, float]:
    """
    Solve |O + tD - C|^2 = r^2 for t.

    Returns both roots, or (inf, inf) when the ray misses the sphere. The roots
    are not sorted: t1 is the plus-root, which is the larger one only when
    D.D is positive.
    """
    oc = subtract(ray_origin, sphere.center)

    a = dot(ray_dir, ray_dir)
    b = 2 * dot(oc, ray_dir)
    c = dot(oc, oc) - sphere.radius * sphere.radius

    discriminant = b * b - 4 * a * c

    if discriminant < 0 or a == 0:
        return float("inf"), float("inf")

    sqrt_d = discriminant ** 0.5
    t1 = (-b + sqrt_d) / (2 * a)
    t2 = (-b - sqrt_d) / (2 * a)

    return t1, t2


def closest_hit(
    spheres: Sequence[Sphere],
    ray_origin: Vec3,
    ray_dir: Vec3,
    t_min: float,
    t_max: float,
) -> Tuple[float, Optional[Sphere]]:
    closest_t = float("inf")
    closest_sphere: Optional[Sphere] = None
    for sphere in spheres:
        t1, t2 = intersect(sphere, ray_origin, ray_dir)
        # strict < keeps the earlier sphere on exact ties
        if t_min < t1 < t_max and t1 < closest_t:
            closest_t = t1
            closest_sphere = sphere
        if t_min < t2 < t_max and t2 < closest_t:
            closest_t = t2
            closest_sphere = sphere

    return closest_t, closest_sphere
