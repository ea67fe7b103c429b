"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from raycaster.common import AmbientLight, PointLight, Scene, Settings  # noqa: E402
from raycaster.geometry import Sphere  # noqa: E402


@pytest.fixture
def red_sphere():
    return Sphere(center=[0.0, -1.0, 3.0], radius=1.0, color=(255, 0, 0))


@pytest.fixture
def ambient_scene(red_sphere):
    """One red sphere lit by a 0.2 ambient light only."""
    return Scene(spheres=(red_sphere,), lights=(AmbientLight(intensity=0.2),))


@pytest.fixture
def point_lit_scene():
    """Empty scene with an ambient light and a point light on the +z axis."""
    return Scene(
        spheres=(),
        lights=(
            AmbientLight(intensity=0.2),
            PointLight(intensity=0.6, position=[0.0, 0.0, 5.0]),
        ),
    )


@pytest.fixture
def small_settings():
    return Settings(width=6, height=6)
