# rep_coach/__init__.py

from .landmarks import Landmark, ExerciseKind
from .classifier import FrameVerdict
from .rep_logic import (
    ExerciseState,
    Phase,
    RepCounted,
    FormCorrected,
    FormBroken,
    FormReset,
)
from .session import SessionController, FrameResult
from .errors import (
    RepCoachError,
    IndeterminateGeometry,
    MissingLandmarks,
    InvalidExerciseKind,
    InvalidSquatProfile,
)

__all__ = [
    "Landmark",
    "ExerciseKind",
    "FrameVerdict",
    "ExerciseState",
    "Phase",
    "RepCounted",
    "FormCorrected",
    "FormBroken",
    "FormReset",
    "SessionController",
    "FrameResult",
    "RepCoachError",
    "IndeterminateGeometry",
    "MissingLandmarks",
    "InvalidExerciseKind",
    "InvalidSquatProfile",
]
