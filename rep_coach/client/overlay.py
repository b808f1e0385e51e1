# rep_coach/client/overlay.py

import cv2
import mediapipe as mp

from rep_coach.landmarks import ExerciseKind

# MediaPipe drawing helpers
mp_drawing = mp.solutions.drawing_utils
mp_pose = mp.solutions.pose

# BGR
YELLOW = (0, 255, 255)
GREEN = (0, 200, 0)
RED = (0, 0, 255)
BLUE = (255, 0, 0)

FONT = cv2.FONT_HERSHEY_SIMPLEX
LINE_HEIGHT = 30


def _fmt_angle(angle):
    if angle is None:
        return "--"
    return f"{round(angle)} deg"


def overlay_lines(kind: ExerciseKind, result):
    """
    Text lines (text, BGR color) for the latest FrameResult.
    Kept separate from drawing so the layout can be checked without a frame.
    """
    verdict = result.verdict
    reps = ("Reps: %d" % result.rep_count, BLUE)

    if verdict is None:
        lines = [("No pose detected", RED)]
        if kind is not ExerciseKind.PLANK:
            lines.append(reps)
        return lines

    if kind is ExerciseKind.SQUAT:
        lines = [(f"Knee: {_fmt_angle(verdict.primary_angle)}", YELLOW)]
        if verdict.secondary_angle is not None:
            lines.append((f"Back: {_fmt_angle(verdict.secondary_angle)}", YELLOW))
        if verdict.form_ok:
            lines.append(("Proper Squat!", GREEN))
        else:
            lines.append(("Fix Form!", RED))
        lines.append(reps)
        return lines

    if kind is ExerciseKind.PUSHUP:
        color = GREEN if verdict.in_position else RED
        return [
            (f"Elbow Angle: {_fmt_angle(verdict.primary_angle)}", color),
            ("Down!" if verdict.in_position else "Push up!", color),
            reps,
        ]

    return [
        (f"Body Angle: {_fmt_angle(verdict.primary_angle)}", RED),
        ("Nice plank!", GREEN) if verdict.form_ok else ("Adjust posture!", RED),
    ]


def draw_overlay(image, kind: ExerciseKind, result, pose_landmarks=None):
    """Draws the skeleton (if given) and the verdict text onto `image` in place."""
    if pose_landmarks is not None:
        mp_drawing.draw_landmarks(
            image,
            pose_landmarks,
            mp_pose.POSE_CONNECTIONS,
            landmark_drawing_spec=mp_drawing.DrawingSpec(
                color=RED, thickness=2, circle_radius=2
            ),
            connection_drawing_spec=mp_drawing.DrawingSpec(
                color=(0, 255, 0), thickness=4
            ),
        )

    cv2.putText(image, f"Exercise: {kind.value}", (10, LINE_HEIGHT),
                FONT, 0.7, (200, 255, 200), 2)

    for i, (text, color) in enumerate(overlay_lines(kind, result), start=2):
        cv2.putText(image, text, (10, i * LINE_HEIGHT), FONT, 0.7, color, 2)

    return image
