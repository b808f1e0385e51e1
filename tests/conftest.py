import math

import pytest

from rep_coach.landmarks import Landmark, NUM_LANDMARKS, SHOULDER, ELBOW, WRIST, HIP, KNEE, ANKLE

LIMB = 0.2


def _bend(vertex, toward, angle_deg):
    """Point LIMB away from `vertex`, rotated angle_deg from the vertex->toward ray."""
    dx, dy = toward[0] - vertex[0], toward[1] - vertex[1]
    base = math.atan2(dy, dx)
    a = base + math.radians(angle_deg)
    return (vertex[0] + LIMB * math.cos(a), vertex[1] + LIMB * math.sin(a))


def build_frame(points):
    frame = [Landmark(0.5, 0.5, 0.0, 0.9) for _ in range(NUM_LANDMARKS)]
    for idx, (x, y) in points.items():
        frame[idx] = Landmark(x, y, 0.0, 0.9)
    return frame


@pytest.fixture
def make_frame():
    return build_frame


@pytest.fixture
def squat_frame():
    def _make(knee_angle, back_straight=True):
        knee = (0.5, 0.7)
        hip = (0.5, 0.5)
        ankle = _bend(knee, hip, knee_angle)
        # upright torso sits straight above the hip; otherwise lean it flat
        shoulder = (0.5, 0.3) if back_straight else (0.3, 0.45)
        return build_frame({SHOULDER: shoulder, HIP: hip, KNEE: knee, ANKLE: ankle})
    return _make


@pytest.fixture
def pushup_frame():
    def _make(elbow_angle, chest_dropped=True):
        shoulder = (0.4, 0.6)
        hip = (0.7, 0.45) if chest_dropped else (0.7, 0.6)
        elbow = (0.4, 0.75)
        wrist = _bend(elbow, shoulder, elbow_angle)
        return build_frame({SHOULDER: shoulder, ELBOW: elbow, WRIST: wrist, HIP: hip})
    return _make


@pytest.fixture
def plank_frame():
    def _make(shoulder=(0.3, 0.5), hip=(0.5, 0.5), ankle=(0.7, 0.5)):
        return build_frame({SHOULDER: shoulder, HIP: hip, ANKLE: ankle})
    return _make
