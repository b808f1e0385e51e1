# rep_coach/client/pose_utils.py

import os
os.environ['TF_CPP_MIN_LOG_LEVEL'] = '3'

import cv2
import mediapipe as mp

from rep_coach.landmarks import Landmark

mp_pose = mp.solutions.pose


def to_landmark_frame(pose_landmarks):
    """MediaPipe NormalizedLandmarkList -> list of 33 Landmarks (normalized coords)."""
    return [
        Landmark(float(p.x), float(p.y), float(p.z), float(p.visibility))
        for p in pose_landmarks.landmark
    ]


class PoseEstimator:
    def __init__(self):
        self.pose = mp_pose.Pose(
            static_image_mode=False,
            model_complexity=1,
            smooth_landmarks=True,
            enable_segmentation=False,
            min_detection_confidence=0.5,
            min_tracking_confidence=0.5,
        )

    def process(self, frame_bgr):
        """
        Input: BGR frame from OpenCV.
        Output:
          - landmark frame: 33 Landmarks, or None if no pose was detected
          - landmarks: pose_landmarks (for drawing), or None if not detected
        """
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.pose.process(rgb)

        if not results.pose_landmarks:
            return None, None

        return to_landmark_frame(results.pose_landmarks), results.pose_landmarks

    def close(self):
        self.pose.close()
