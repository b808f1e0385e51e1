# rep_coach/landmarks.py

from enum import Enum
from typing import NamedTuple, Optional, Sequence

from .errors import InvalidExerciseKind, MissingLandmarks

NUM_LANDMARKS = 33

# MediaPipe pose topology ids (right side of the body)
SHOULDER = 12
ELBOW = 14
WRIST = 16
HIP = 24
KNEE = 26
ANKLE = 28


class Landmark(NamedTuple):
    x: float
    y: float
    z: float = 0.0
    visibility: float = 1.0


LandmarkFrame = Sequence[Landmark]


class ExerciseKind(str, Enum):
    SQUAT = "squat"
    PUSHUP = "pushup"
    PLANK = "plank"

    @classmethod
    def parse(cls, selector) -> "ExerciseKind":
        if isinstance(selector, cls):
            return selector
        if isinstance(selector, str):
            key = selector.strip().lower().replace("-", "").replace("_", "")
            for kind in cls:
                if kind.value == key:
                    return kind
        raise InvalidExerciseKind(selector)


def validate_frame(frame: Optional[LandmarkFrame], required: Sequence[int]) -> LandmarkFrame:
    """
    Returns the frame if it carries every joint in `required`,
    otherwise raises MissingLandmarks (no pose, or a truncated list).
    """
    if frame is None:
        raise MissingLandmarks("no pose detected")
    if required and len(frame) <= max(required):
        raise MissingLandmarks(
            f"frame has {len(frame)} landmarks, need index {max(required)}"
        )
    return [to_landmark(p) for p in frame]


def to_landmark(p) -> Landmark:
    """Accepts a Landmark, an (x, y[, z[, visibility]]) tuple, or any object with x/y attributes."""
    if isinstance(p, Landmark):
        return p
    if hasattr(p, "x") and hasattr(p, "y"):
        return Landmark(
            float(p.x),
            float(p.y),
            float(getattr(p, "z", 0.0)),
            float(getattr(p, "visibility", 1.0)),
        )
    return Landmark(*(float(v) for v in p))
