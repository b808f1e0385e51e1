# rep_coach/geometry.py

import numpy as np

from .errors import IndeterminateGeometry

# Rays shorter than this (normalized units) have no usable direction
MIN_RAY_LENGTH = 1e-6


def _xy(p):
    return np.array([p[0], p[1]], dtype=float)


def angle_at_vertex(a, b, c) -> float:
    """
    Returns the angle (in degrees, 0..180) at point b formed by points a-b-c.
    Only x and y are used. Raises IndeterminateGeometry when b coincides
    with a or c.
    """
    a, b, c = _xy(a), _xy(b), _xy(c)

    v1 = a - b
    v2 = c - b

    n1 = np.linalg.norm(v1)
    n2 = np.linalg.norm(v2)
    if n1 < MIN_RAY_LENGTH or n2 < MIN_RAY_LENGTH:
        raise IndeterminateGeometry("zero-length ray at vertex")

    cosang = np.dot(v1, v2) / (n1 * n2)
    cosang = np.clip(cosang, -1.0, 1.0)
    return float(np.degrees(np.arccos(cosang)))


def torso_lean_angle(shoulder, hip) -> float:
    """
    Absolute angle of the hip->shoulder vector measured from the +y axis.
    Image y points down, so an upright torso reads ~180 and a horizontal one ~90.
    """
    dx = float(shoulder[0]) - float(hip[0])
    dy = float(shoulder[1]) - float(hip[1])
    if np.hypot(dx, dy) < MIN_RAY_LENGTH:
        raise IndeterminateGeometry("shoulder and hip coincide")
    return float(abs(np.degrees(np.arctan2(dx, dy))))
