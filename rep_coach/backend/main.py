# rep_coach/backend/main.py
import logging
import threading
import time

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from rep_coach.config import load_settings
from rep_coach.errors import InvalidExerciseKind
from rep_coach.landmarks import Landmark
from rep_coach.rep_logic import RepCounted, FormCorrected, FormBroken, FormReset
from rep_coach.session import SessionController

from .models import (
    EventOut,
    ExerciseRequest,
    FrameRequest,
    FrameResponse,
    SessionResponse,
    VerdictOut,
)

logger = logging.getLogger(__name__)

settings = load_settings()

app = FastAPI(title="Rep Coach Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # browser client runs pose estimation locally
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# single-user demo: one live session per process
session = SessionController(settings.exercise, squat_profile=settings.squat_profile)

# Cooldowns compare timestamps within one session, so a session runs either on
# client timestamps or on the server clock, never a mix. The choice is made by
# the first frame after startup or a reset and cleared again on reset.
CLIENT_CLOCK = "client"
SERVER_CLOCK = "server"

session_lock = threading.Lock()
clock_source = None


def event_out(event) -> EventOut:
    if isinstance(event, RepCounted):
        return EventOut(type="rep_counted", count=event.count)
    if isinstance(event, FormCorrected):
        return EventOut(type="form_corrected", exercise=event.exercise.value)
    if isinstance(event, FormBroken):
        return EventOut(type="form_broken", exercise=event.exercise.value)
    if isinstance(event, FormReset):
        return EventOut(type="form_reset")
    raise TypeError(f"unknown event {event!r}")


def session_response(events=()) -> SessionResponse:
    kind, state = session.snapshot()
    return SessionResponse(
        exercise=kind.value,
        rep_count=state.rep_count,
        phase=state.phase.value,
        clock=clock_source,
        events=[event_out(e) for e in events],
    )


def _clear_clock(events):
    global clock_source
    if any(isinstance(e, FormReset) for e in events):
        clock_source = None


@app.get("/")
def health_check():
    return {"status": "ok", "exercise": session.kind.value}


@app.get("/session", response_model=SessionResponse)
def get_session():
    return session_response()


@app.post("/session/exercise", response_model=SessionResponse)
def select_exercise(req: ExerciseRequest):
    with session_lock:
        try:
            events = session.select_exercise(req.exercise)
        except InvalidExerciseKind as e:
            raise HTTPException(status_code=400, detail=str(e))
        _clear_clock(events)
        return session_response(events)


@app.post("/session/reset", response_model=SessionResponse)
def reset_session():
    with session_lock:
        events = session.reset()
        _clear_clock(events)
        return session_response(events)


@app.post("/session/frame", response_model=FrameResponse)
def process_frame(req: FrameRequest):
    global clock_source

    frame = None
    if req.landmarks:
        frame = [Landmark(p.x, p.y, p.z, p.visibility) for p in req.landmarks]

    source = CLIENT_CLOCK if req.timestamp is not None else SERVER_CLOCK

    with session_lock:
        if clock_source is not None and source != clock_source:
            logger.warning("rejected %s-clock frame in a %s-clock session", source, clock_source)
            raise HTTPException(
                status_code=409,
                detail=(
                    f"session uses the {clock_source} clock; "
                    f"{'omit' if clock_source == SERVER_CLOCK else 'send'} 'timestamp' "
                    "or reset the session"
                ),
            )
        clock_source = source

        now = req.timestamp if source == CLIENT_CLOCK else time.monotonic()
        result = session.process_frame(frame, now)
        kind = session.kind

    verdict = None
    if result.verdict is not None:
        v = result.verdict
        verdict = VerdictOut(
            primary_angle=v.primary_angle,
            secondary_angle=v.secondary_angle,
            form_ok=v.form_ok,
            in_position=v.in_position,
            indeterminate=v.indeterminate,
        )

    return FrameResponse(
        exercise=kind.value,
        rep_count=result.rep_count,
        verdict=verdict,
        events=[event_out(e) for e in result.events],
    )
