# rep_coach/classifier.py

import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any

from .errors import IndeterminateGeometry, InvalidSquatProfile
from .geometry import angle_at_vertex, torso_lean_angle
from .landmarks import (
    ExerciseKind,
    LandmarkFrame,
    SHOULDER,
    ELBOW,
    WRIST,
    HIP,
    KNEE,
    ANKLE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameVerdict:
    primary_angle: Optional[float]
    secondary_angle: Optional[float] = None
    form_ok: bool = False
    in_position: bool = False
    indeterminate: bool = False


# ----------------- Per-exercise thresholds -----------------
SQUAT_PROFILES: Dict[str, Dict[str, Any]] = {
    "band": {
        # proper depth is a band, not an open-ended "below X"
        "knee_min": 80.0,
        "knee_max": 120.0,
        "knee_max_inclusive": True,
        "check_back": True,
        "back_min": 150.0,
        "standing_angle": 150.0,
    },
    "simple": {
        "knee_min": None,
        "knee_max": 90.0,
        "knee_max_inclusive": False,     # strictly below 90
        "check_back": False,
        "back_min": None,
        "standing_angle": 150.0,
    },
}

DEFAULT_SQUAT_PROFILE = "band"

EXERCISE_CONFIG: Dict[ExerciseKind, Dict[str, Any]] = {
    ExerciseKind.SQUAT: {
        "joints": (SHOULDER, HIP, KNEE, ANKLE),
    },
    ExerciseKind.PUSHUP: {
        "joints": (SHOULDER, ELBOW, WRIST, HIP),
        "elbow_down_angle": 90.0,
        # shoulder must sit this far below the hip (normalized y)
        "shoulder_drop": 0.1,
        "rep_cooldown_s": 1.0,
    },
    ExerciseKind.PLANK: {
        "joints": (SHOULDER, HIP, ANKLE),
        "body_min": 160.0,
        "body_max": 190.0,
        "y_tolerance": 0.1,
    },
}


def get_squat_profile(name: Optional[str]) -> Dict[str, Any]:
    if name is None:
        name = DEFAULT_SQUAT_PROFILE
    if name not in SQUAT_PROFILES:
        raise InvalidSquatProfile(name)
    return SQUAT_PROFILES[name]


def required_joints(kind: ExerciseKind):
    return EXERCISE_CONFIG[kind]["joints"]


# -------------------------------------------------------------
# Policies
# -------------------------------------------------------------

def classify_squat(landmarks: LandmarkFrame, profile: Optional[str] = None) -> FrameVerdict:
    cfg = get_squat_profile(profile)
    shoulder = landmarks[SHOULDER]
    hip = landmarks[HIP]
    knee = landmarks[KNEE]
    ankle = landmarks[ANKLE]

    try:
        knee_angle = angle_at_vertex(hip, knee, ankle)
    except IndeterminateGeometry:
        logger.debug("squat: knee angle indeterminate")
        return FrameVerdict(primary_angle=None, indeterminate=True)

    if cfg["knee_max_inclusive"]:
        knee_ok = knee_angle <= cfg["knee_max"]
    else:
        knee_ok = knee_angle < cfg["knee_max"]
    if cfg["knee_min"] is not None:
        knee_ok = knee_ok and knee_angle >= cfg["knee_min"]

    if not cfg["check_back"]:
        return FrameVerdict(
            primary_angle=knee_angle,
            form_ok=knee_ok,
            in_position=knee_ok,
        )

    try:
        back_angle = torso_lean_angle(shoulder, hip)
    except IndeterminateGeometry:
        logger.debug("squat: torso angle indeterminate")
        return FrameVerdict(primary_angle=knee_angle, indeterminate=True)

    proper = knee_ok and back_angle >= cfg["back_min"]
    return FrameVerdict(
        primary_angle=knee_angle,
        secondary_angle=back_angle,
        form_ok=proper,
        in_position=proper,
    )


def classify_pushup(landmarks: LandmarkFrame) -> FrameVerdict:
    cfg = EXERCISE_CONFIG[ExerciseKind.PUSHUP]
    shoulder = landmarks[SHOULDER]
    elbow = landmarks[ELBOW]
    wrist = landmarks[WRIST]
    hip = landmarks[HIP]

    try:
        elbow_angle = angle_at_vertex(shoulder, elbow, wrist)
    except IndeterminateGeometry:
        logger.debug("pushup: elbow angle indeterminate")
        return FrameVerdict(primary_angle=None, indeterminate=True)

    # lying flat also bends the elbow, so require the chest to be dropped
    is_down = (
        elbow_angle < cfg["elbow_down_angle"]
        and (shoulder.y - hip.y) > cfg["shoulder_drop"]
    )
    return FrameVerdict(primary_angle=elbow_angle, form_ok=is_down, in_position=is_down)


def classify_plank(landmarks: LandmarkFrame) -> FrameVerdict:
    cfg = EXERCISE_CONFIG[ExerciseKind.PLANK]
    shoulder = landmarks[SHOULDER]
    hip = landmarks[HIP]
    ankle = landmarks[ANKLE]

    try:
        angle = angle_at_vertex(shoulder, hip, ankle)
    except IndeterminateGeometry:
        logger.debug("plank: body angle indeterminate")
        return FrameVerdict(primary_angle=None, indeterminate=True)

    tol = cfg["y_tolerance"]
    is_good_angle = cfg["body_min"] < angle < cfg["body_max"]
    y_diffs_ok = abs(shoulder.y - hip.y) < tol and abs(hip.y - ankle.y) < tol
    not_standing = shoulder.y >= hip.y

    return FrameVerdict(
        primary_angle=angle,
        form_ok=is_good_angle and y_diffs_ok and not_standing,
        in_position=False,
    )
