import math

import numpy as np
from loguru import logger

from raycaster.vecmath import Mat3, Vec3, add, matrix_multiply, vec


def degrees_to_radians(degrees: float) -> float:
    return degrees * (math.pi / 180)


def rotation_matrix(yaw: float, pitch: float, roll: float) -> Mat3:
    """
    Build the camera rotation Rz(yaw) . (Ry(pitch) . Rx(roll)).

    Angles are in degrees. The result is always rebuilt from the three angles,
    so the same angles give a bit-identical matrix.
    """
    yaw_rad = degrees_to_radians(yaw)
    pitch_rad = degrees_to_radians(pitch)
    roll_rad = degrees_to_radians(roll)

    rz = np.array([
        [math.cos(yaw_rad), -math.sin(yaw_rad), 0.0],
        [math.sin(yaw_rad), math.cos(yaw_rad), 0.0],
        [0.0, 0.0, 1.0],
    ])
    ry = np.array([
        [math.cos(pitch_rad), 0.0, math.sin(pitch_rad)],
        [0.0, 1.0, 0.0],
        [-math.sin(pitch_rad), 0.0, math.cos(pitch_rad)],
    ])
    rx = np.array([
        [1.0, 0.0, 0.0],
        [0.0, math.cos(roll_rad), -math.sin(roll_rad)],
        [0.0, math.sin(roll_rad), math.cos(roll_rad)],
    ])

    return matrix_multiply(rz, matrix_multiply(ry, rx))


class Camera:
    def __init__(self, position=(0.0, 0.0, 0.0), yaw: float = 0.0, pitch: float = 0.0, roll: float = 0.0):
        self.origin: Vec3 = vec(position)
        self.yaw = yaw
        self.pitch = pitch
        self.roll = roll
        self.rotation: Mat3 = rotation_matrix(yaw, pitch, roll)

    def set_orientation(self, yaw: float, pitch: float, roll: float):
        self.yaw = float(yaw)
        self.pitch = float(pitch)
        self.roll = float(roll)
        self.rotation = rotation_matrix(self.yaw, self.pitch, self.roll)
        logger.debug(f"Camera orientation yaw={self.yaw} pitch={self.pitch} roll={self.roll}")

    def set_yaw(self, degrees: float):
        self.set_orientation(degrees, self.pitch, self.roll)

    def set_pitch(self, degrees: float):
        self.set_orientation(self.yaw, degrees, self.roll)

    def set_roll(self, degrees: float):
        self.set_orientation(self.yaw, self.pitch, degrees)

    def translate(self, delta):
        self.origin = add(self.origin, vec(delta))
        logger.debug(f"Camera moved to {self.origin.tolist()}")

    # Movement is along the world axes, not the view direction
    def move_forward(self, step: float):
        self.translate((0.0, 0.0, step))

    def move_backward(self, step: float):
        self.translate((0.0, 0.0, -step))

    def move_left(self, step: float):
        self.translate((-step, 0.0, 0.0))

    def move_right(self, step: float):
        self.translate((step, 0.0, 0.0))
