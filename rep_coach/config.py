# rep_coach/config.py

import os
from dataclasses import dataclass

import dotenv

from .classifier import DEFAULT_SQUAT_PROFILE, get_squat_profile
from .landmarks import ExerciseKind

dotenv.load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _squat_profile(name: str) -> str:
    name = name.strip().lower()
    # raises InvalidSquatProfile for names not in SQUAT_PROFILES
    get_squat_profile(name)
    return name


@dataclass(frozen=True)
class Settings:
    exercise: ExerciseKind = ExerciseKind.SQUAT
    squat_profile: str = DEFAULT_SQUAT_PROFILE
    camera_index: int = 0
    voice_enabled: bool = True
    tts_rate: int = 165
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Reads REP_COACH_* variables (a .env file in the cwd is honoured)."""
    return Settings(
        exercise=ExerciseKind.parse(os.getenv("REP_COACH_EXERCISE", "squat")),
        squat_profile=_squat_profile(os.getenv("REP_COACH_SQUAT_PROFILE", DEFAULT_SQUAT_PROFILE)),
        camera_index=int(os.getenv("REP_COACH_CAMERA_INDEX", "0")),
        voice_enabled=_env_bool("REP_COACH_VOICE", True),
        tts_rate=int(os.getenv("REP_COACH_TTS_RATE", "165")),
        log_level=os.getenv("REP_COACH_LOG_LEVEL", "INFO").upper(),
    )
