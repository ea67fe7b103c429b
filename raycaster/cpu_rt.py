import numpy as np
from numpy.typing import NDArray

from raycaster.app import T_MIN, App
from raycaster.shading import trace_ray
from raycaster.vecmath import matrix_vector_multiply


def get_pixel_color(app: App, x: int, y: int) -> NDArray[np.uint8]:
    ray_dir = matrix_vector_multiply(app.camera.rotation, app.view_direction(x, y))

    return trace_ray(
        app.scene,
        app.camera.origin,
        ray_dir,
        T_MIN,
        float("inf"),
        app.settings.clip_point_shadows,
    )


class CpuApp(App):
    def run(self):
        for x in self.x_range():
            for y in self.y_range():
                row, col = self.pixel_index(x, y)
                self.image[row, col, :3] = get_pixel_color(self, x, y)
                self.image[row, col, 3] = 255
