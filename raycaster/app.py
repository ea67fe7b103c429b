import threading
import time
from typing import Optional, Protocol

import numpy as np
from loguru import logger
from numpy.typing import NDArray

from raycaster.camera import Camera
from raycaster.common import Scene, Settings, default_scene

# Rays start at the viewport so nothing between the eye and it is drawn
T_MIN = 1.0


class Surface(Protocol):
    def present(self, buffer: NDArray[np.uint8]):
        ...


class NullSurface:
    """Surface that keeps a copy of the last presented frame and never displays it."""

    def __init__(self):
        self.frames_presented = 0
        self.last_frame: Optional[NDArray[np.uint8]] = None

    def present(self, buffer: NDArray[np.uint8]):
        self.frames_presented += 1
        self.last_frame = buffer.copy()


class App:
    def __init__(self, settings: Settings, scene: Optional[Scene] = None, surface: Optional[Surface] = None):
        self.settings = settings
        self.scene = scene if scene is not None else default_scene()
        self.surface: Surface = surface if surface is not None else NullSurface()

        self.camera = Camera(position=settings.camera_position)

        # RGBA, row-major, top-left origin
        self.image = np.zeros(
            (settings.height, settings.width, 4),
            dtype=np.uint8,
        )

        self._render_lock = threading.Lock()

    def run(self):
        """Sweep every pixel once and fill `self.image`."""
        raise NotImplementedError

    def render(self) -> NDArray[np.uint8]:
        # Passes never overlap, so the buffer is written exactly once per pass
        with self._render_lock:
            start = time.perf_counter()
            self.run()
            elapsed = time.perf_counter() - start
            logger.info(
                f"Rendered {self.settings.width}x{self.settings.height} "
                f"with {type(self).__name__} in {elapsed:.3f}s"
            )
            self.surface.present(self.image)
        return self.image

    def set_scene(self, scene: Scene):
        with self._render_lock:
            self.scene = scene

    def view_direction(self, x: int, y: int):
        """Map a centered pixel coordinate to a view-space ray direction."""
        return np.array([
            x * self.settings.viewport_size / self.settings.width,
            y * self.settings.viewport_size / self.settings.height,
            self.settings.viewport_distance,
        ])

    def pixel_index(self, x: int, y: int):
        """Buffer (row, column) of a centered pixel coordinate, y pointing up."""
        height, width = self.settings.height, self.settings.width
        return height - height // 2 - 1 - y, x + width // 2

    def x_range(self) -> range:
        width = self.settings.width
        return range(-(width // 2), width - width // 2)

    def y_range(self) -> range:
        height = self.settings.height
        return range(-(height // 2), height - height // 2)

    # Camera commands, each followed by one full render pass

    def set_yaw(self, degrees: float):
        with self._render_lock:
            self.camera.set_yaw(degrees)
        return self.render()

    def set_pitch(self, degrees: float):
        with self._render_lock:
            self.camera.set_pitch(degrees)
        return self.render()

    def set_roll(self, degrees: float):
        with self._render_lock:
            self.camera.set_roll(degrees)
        return self.render()

    def move_forward(self, step: Optional[float] = None):
        with self._render_lock:
            self.camera.move_forward(self.settings.move_step if step is None else step)
        return self.render()

    def move_backward(self, step: Optional[float] = None):
        with self._render_lock:
            self.camera.move_backward(self.settings.move_step if step is None else step)
        return self.render()

    def move_left(self, step: Optional[float] = None):
        with self._render_lock:
            self.camera.move_left(self.settings.move_step if step is None else step)
        return self.render()

    def move_right(self, step: Optional[float] = None):
        with self._render_lock:
            self.camera.move_right(self.settings.move_step if step is None else step)
        return self.render()
