from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
from loguru import logger
from matplotlib.widgets import Button, Slider
from numpy.typing import NDArray

from raycaster.app import App


class MatplotlibSurface:
    """Shows every presented frame in a matplotlib figure."""

    def __init__(self, figure: Optional[plt.Figure] = None):
        self.figure = figure if figure is not None else plt.figure(figsize=(6, 7))
        self.axes = self.figure.add_axes([0.05, 0.3, 0.9, 0.65])
        self.axes.set_axis_off()
        self.artist = None
        self.frames_presented = 0

    def present(self, buffer: NDArray[np.uint8]):
        if self.artist is None:
            self.artist = self.axes.imshow(buffer)
        else:
            self.artist.set_data(buffer)
        self.frames_presented += 1
        self.figure.canvas.draw_idle()


class Controls:
    """Sliders for yaw/pitch/roll and buttons that move the camera."""

    def __init__(self, app: App, figure: plt.Figure):
        self.app = app

        self.yaw = Slider(figure.add_axes([0.2, 0.20, 0.6, 0.03]), "Yaw", -180, 180,
                          valinit=app.camera.yaw, valstep=1)
        self.pitch = Slider(figure.add_axes([0.2, 0.15, 0.6, 0.03]), "Pitch", -180, 180,
                            valinit=app.camera.pitch, valstep=1)
        self.roll = Slider(figure.add_axes([0.2, 0.10, 0.6, 0.03]), "Roll", -180, 180,
                           valinit=app.camera.roll, valstep=1)

        self.yaw.on_changed(app.set_yaw)
        self.pitch.on_changed(app.set_pitch)
        self.roll.on_changed(app.set_roll)

        self.forward = Button(figure.add_axes([0.05, 0.02, 0.2, 0.05]), "Forward")
        self.backward = Button(figure.add_axes([0.27, 0.02, 0.2, 0.05]), "Backward")
        self.left = Button(figure.add_axes([0.51, 0.02, 0.2, 0.05]), "Left")
        self.right = Button(figure.add_axes([0.75, 0.02, 0.2, 0.05]), "Right")

        self.forward.on_clicked(self.on_forward)
        self.backward.on_clicked(self.on_backward)
        self.left.on_clicked(self.on_left)
        self.right.on_clicked(self.on_right)

    def on_forward(self, event):
        self.app.move_forward()

    def on_backward(self, event):
        self.app.move_backward()

    def on_left(self, event):
        self.app.move_left()

    def on_right(self, event):
        self.app.move_right()


def run_interactive(app: App, surface: MatplotlibSurface):
    controls = Controls(app, surface.figure)
    app.render()
    logger.info("Interactive viewer ready, close the window to exit")
    plt.show(block=True)
    return controls
