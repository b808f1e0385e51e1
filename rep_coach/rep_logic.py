# rep_coach/rep_logic.py

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, List, Tuple

from .classifier import (
    FrameVerdict,
    EXERCISE_CONFIG,
    classify_squat,
    classify_pushup,
    classify_plank,
    get_squat_profile,
    required_joints,
)
from .landmarks import ExerciseKind, LandmarkFrame

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    IN_POSITION = "in_position"


@dataclass(frozen=True)
class ExerciseState:
    rep_count: int = 0
    phase: Phase = Phase.IDLE
    rep_locked: bool = False            # squat: already counted this descent
    last_rep_time: Optional[float] = None   # monotonic seconds
    form_ok: bool = False               # last reported form verdict


# ----------------- Events -----------------

@dataclass(frozen=True)
class RepCounted:
    count: int


@dataclass(frozen=True)
class FormCorrected:
    exercise: ExerciseKind


@dataclass(frozen=True)
class FormBroken:
    exercise: ExerciseKind


@dataclass(frozen=True)
class FormReset:
    pass


Event = object
Transition = Tuple[ExerciseState, List[Event]]


def reset_state() -> Transition:
    return ExerciseState(), [FormReset()]


# -------------------------------------------------------------
# Policies: one classifier + transition per exercise
# -------------------------------------------------------------

class ExercisePolicy:
    kind: ExerciseKind
    # emit FormCorrected / FormBroken on form_ok edges
    tracks_form = False

    @property
    def required_joints(self):
        return required_joints(self.kind)

    def classify(self, landmarks: LandmarkFrame) -> FrameVerdict:
        raise NotImplementedError

    def count(self, state: ExerciseState, verdict: FrameVerdict, now: float) -> Transition:
        raise NotImplementedError

    def step(self, state: ExerciseState, verdict: FrameVerdict, now: float) -> Transition:
        """
        Pure transition: (state, verdict, now) -> (new state, events).
        Rep events come first, then any form-edge event.
        """
        new_state, events = self.count(state, verdict, now)

        if self.tracks_form and verdict.form_ok != state.form_ok:
            if verdict.form_ok:
                events.append(FormCorrected(self.kind))
            else:
                events.append(FormBroken(self.kind))
        new_state = replace(new_state, form_ok=verdict.form_ok)

        return new_state, events


class SquatPolicy(ExercisePolicy):
    """
    Counts on the falling edge of the proper-squat pose.

    The lock set by a count is only released once the knee opens past the
    standing angle, so jitter around the band edge cannot count twice.
    """
    kind = ExerciseKind.SQUAT
    tracks_form = True

    def __init__(self, profile: Optional[str] = None):
        self.profile = profile
        self.standing_angle = get_squat_profile(profile)["standing_angle"]

    def classify(self, landmarks: LandmarkFrame) -> FrameVerdict:
        return classify_squat(landmarks, self.profile)

    def count(self, state, verdict, now):
        events: List[Event] = []
        rep_count = state.rep_count
        rep_locked = state.rep_locked

        if verdict.in_position:
            phase = Phase.IN_POSITION
        else:
            if state.phase is Phase.IN_POSITION and not rep_locked:
                rep_count += 1
                rep_locked = True
                events.append(RepCounted(rep_count))
                logger.info("squat rep %d", rep_count)
            phase = Phase.IDLE

        knee_angle = verdict.primary_angle
        if knee_angle is not None and knee_angle > self.standing_angle:
            rep_locked = False

        return replace(state, rep_count=rep_count, phase=phase, rep_locked=rep_locked), events


class PushUpPolicy(ExercisePolicy):
    """
    Counts when leaving the "down" pose, at most once per cooldown.
    A dip that ends inside the cooldown is dropped, not deferred.
    """
    kind = ExerciseKind.PUSHUP

    def __init__(self, cooldown_s: Optional[float] = None):
        if cooldown_s is None:
            cooldown_s = EXERCISE_CONFIG[ExerciseKind.PUSHUP]["rep_cooldown_s"]
        self.cooldown_s = cooldown_s

    def classify(self, landmarks: LandmarkFrame) -> FrameVerdict:
        return classify_pushup(landmarks)

    def count(self, state, verdict, now):
        if verdict.in_position:
            return replace(state, phase=Phase.IN_POSITION), []

        if state.phase is not Phase.IN_POSITION:
            return state, []

        if state.last_rep_time is not None and now - state.last_rep_time <= self.cooldown_s:
            logger.debug("pushup: dip inside cooldown (%.2fs), ignored", now - state.last_rep_time)
            return replace(state, phase=Phase.IDLE), []

        rep_count = state.rep_count + 1
        logger.info("pushup rep %d", rep_count)
        new_state = replace(state, rep_count=rep_count, phase=Phase.IDLE, last_rep_time=now)
        return new_state, [RepCounted(rep_count)]


class PlankPolicy(ExercisePolicy):
    """Hold exercise: form verdict only, nothing is counted."""
    kind = ExerciseKind.PLANK
    tracks_form = True

    def classify(self, landmarks: LandmarkFrame) -> FrameVerdict:
        return classify_plank(landmarks)

    def count(self, state, verdict, now):
        return state, []


def make_policy(kind: ExerciseKind, squat_profile: Optional[str] = None) -> ExercisePolicy:
    if kind is ExerciseKind.SQUAT:
        return SquatPolicy(squat_profile)
    if kind is ExerciseKind.PUSHUP:
        return PushUpPolicy()
    return PlankPolicy()
