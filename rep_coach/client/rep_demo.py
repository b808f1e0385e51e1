# rep_coach/client/rep_demo.py

import logging
import time

import cv2

from rep_coach.config import load_settings
from rep_coach.errors import InvalidExerciseKind
from rep_coach.landmarks import ExerciseKind
from rep_coach.rep_logic import RepCounted
from rep_coach.session import SessionController
from rep_coach.client.overlay import draw_overlay
from rep_coach.client.pose_utils import PoseEstimator
from rep_coach.client.voice import VoiceNotifier

logger = logging.getLogger(__name__)

WINDOW_NAME = "Rep Coach"

# ---------- Exercise options ----------
EXERCISE_OPTIONS = {
    "1": ExerciseKind.SQUAT,
    "2": ExerciseKind.PUSHUP,
    "3": ExerciseKind.PLANK,
}


def choose_exercise(default: ExerciseKind) -> ExerciseKind:
    print("Select exercise to track:")
    print("  1. Squat")
    print("  2. Pushup")
    print("  3. Plank")
    choice = input(f"Enter 1, 2, or 3 [{default.value}]: ").strip()
    if not choice:
        return default
    if choice in EXERCISE_OPTIONS:
        return EXERCISE_OPTIONS[choice]
    try:
        return ExerciseKind.parse(choice)
    except InvalidExerciseKind:
        print(f"Unknown choice {choice!r}, using {default.value}")
        return default


def handle_key(key: int, session: SessionController):
    """Applies a keypress; returns the events it produced, or None to quit."""
    if key == ord('q'):
        return None
    if key == ord('r'):
        return session.reset()
    option = EXERCISE_OPTIONS.get(chr(key)) if 0 <= key < 256 else None
    if option is not None:
        return session.select_exercise(option)
    return []


def main():
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # 1) Choose exercise
    exercise = choose_exercise(settings.exercise)
    session = SessionController(exercise, squat_profile=settings.squat_profile)
    print(f"\nYou selected: {exercise.value}\n")

    # 2) Start camera
    cap = cv2.VideoCapture(settings.camera_index)
    if not cap.isOpened():
        logger.error("Could not open camera %d", settings.camera_index)
        return 1

    # 3) Pose estimator + background voice
    pose_estimator = PoseEstimator()
    voice = VoiceNotifier(rate=settings.tts_rate, enabled=settings.voice_enabled).start()

    try:
        while True:
            ret, frame = cap.read()
            if not ret:
                break

            landmark_frame, pose_landmarks = pose_estimator.process(frame)
            result = session.process_frame(landmark_frame, time.monotonic())

            for event in result.events:
                if isinstance(event, RepCounted):
                    logger.info("=== REP COMPLETED (%s, rep=%d) ===", session.kind.value, event.count)
            voice.notify(result.events)

            display_frame = draw_overlay(frame.copy(), session.kind, result, pose_landmarks)
            cv2.imshow(WINDOW_NAME, display_frame)

            events = handle_key(cv2.waitKey(1) & 0xFF, session)
            if events is None:
                break
            voice.notify(events)
    finally:
        cap.release()
        pose_estimator.close()
        cv2.destroyAllWindows()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
