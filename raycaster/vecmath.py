import numpy as np
from numpy.typing import NDArray

Vec3 = NDArray[np.float64]
Mat3 = NDArray[np.float64]


def vec(values) -> Vec3:
    return np.array(values, dtype=np.float64)


def add(u: Vec3, v: Vec3) -> Vec3:
    return u + v


def subtract(u: Vec3, v: Vec3) -> Vec3:
    return u - v


def scale(k: float, v: Vec3) -> Vec3:
    return k * v


def dot(u: Vec3, v: Vec3) -> float:
    return float(u[0] * v[0] + u[1] * v[1] + u[2] * v[2])


def length(v: Vec3) -> float:
    """Euclidean norm. Zero for the zero vector, so callers must check before dividing by it."""
    return dot(v, v) ** 0.5


def matrix_vector_multiply(m: Mat3, v: Vec3) -> Vec3:
    result = np.zeros(3, dtype=np.float64)
    for i in range(3):
        for j in range(3):
            result[i] += v[j] * m[i][j]

    return result


def matrix_multiply(m1: Mat3, m2: Mat3) -> Mat3:
    result = np.zeros((3, 3), dtype=np.float64)
    for i in range(3):
        for j in range(3):
            for k in range(3):
                result[i][j] += m1[i][k] * m2[k][j]

    return result
