# rep_coach/backend/models.py
from pydantic import BaseModel
from typing import List, Optional


class LandmarkIn(BaseModel):
    x: float
    y: float
    z: float = 0.0
    visibility: float = 1.0


class FrameRequest(BaseModel):
    landmarks: Optional[List[LandmarkIn]] = None   # null = no pose detected
    timestamp: Optional[float] = None              # monotonic seconds, client clock; send on every frame or never


class ExerciseRequest(BaseModel):
    exercise: str   # "squat", "pushup", "plank"


class VerdictOut(BaseModel):
    primary_angle: Optional[float]
    secondary_angle: Optional[float] = None
    form_ok: bool
    in_position: bool
    indeterminate: bool = False


class EventOut(BaseModel):
    type: str                        # rep_counted, form_corrected, form_broken, form_reset
    count: Optional[int] = None
    exercise: Optional[str] = None


class FrameResponse(BaseModel):
    exercise: str
    rep_count: int
    verdict: Optional[VerdictOut] = None
    events: List[EventOut] = []


class SessionResponse(BaseModel):
    exercise: str
    rep_count: int
    phase: str
    clock: Optional[str] = None      # "client" or "server" once a frame has arrived
    events: List[EventOut] = []
