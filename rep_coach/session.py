# rep_coach/session.py

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Optional, List

from .classifier import FrameVerdict, get_squat_profile
from .errors import MissingLandmarks
from .landmarks import ExerciseKind, LandmarkFrame, validate_frame
from .rep_logic import ExerciseState, ExercisePolicy, make_policy, reset_state

logger = logging.getLogger(__name__)


@dataclass
class FrameResult:
    verdict: Optional[FrameVerdict]     # None when the frame was skipped
    events: List[object] = field(default_factory=list)
    rep_count: int = 0


class SessionController:
    """
    Holds the selected exercise and its live ExerciseState.

    Frames are processed one at a time to completion; callers turn the
    returned events into speech or UI updates themselves. Every entry point
    takes the same lock, so a reset or exercise switch never lands in the
    middle of a frame even when callers run on several threads.
    """

    def __init__(self, exercise=ExerciseKind.SQUAT, squat_profile: Optional[str] = None):
        # fail early on a bad profile name
        get_squat_profile(squat_profile)
        self.squat_profile = squat_profile
        self.kind = ExerciseKind.parse(exercise)
        self.policy: ExercisePolicy = make_policy(self.kind, squat_profile)
        self.state = ExerciseState()
        self._lock = threading.RLock()

    @property
    def rep_count(self) -> int:
        with self._lock:
            return self.state.rep_count

    def snapshot(self):
        """(kind, state) read together under the lock."""
        with self._lock:
            return self.kind, self.state

    def select_exercise(self, exercise) -> List[object]:
        """
        Switch exercise. Raises InvalidExerciseKind for an unknown selector,
        leaving the current exercise untouched. Re-selecting the active
        exercise does nothing.
        """
        kind = ExerciseKind.parse(exercise)
        with self._lock:
            if kind is self.kind:
                return []

            logger.info("exercise changed: %s -> %s", self.kind.value, kind.value)
            self.kind = kind
            self.policy = make_policy(kind, self.squat_profile)
            return self.reset()

    def reset(self) -> List[object]:
        with self._lock:
            self.state, events = reset_state()
            logger.info("reps reset (%s)", self.kind.value)
            return events

    def process_frame(self, landmarks: Optional[LandmarkFrame], now: Optional[float] = None) -> FrameResult:
        if now is None:
            now = time.monotonic()

        with self._lock:
            try:
                landmarks = validate_frame(landmarks, self.policy.required_joints)
            except MissingLandmarks as e:
                logger.debug("frame skipped: %s", e)
                return FrameResult(verdict=None, events=[], rep_count=self.state.rep_count)

            verdict = self.policy.classify(landmarks)
            self.state, events = self.policy.step(self.state, verdict, now)
            logger.debug("%s verdict=%s state=%s", self.kind.value, verdict, self.state)

            return FrameResult(verdict=verdict, events=events, rep_count=self.state.rep_count)
