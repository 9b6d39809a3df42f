"""
Landmark frame type shared by the tracker, the pipeline and the mock source.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

import cv2
import numpy as np

HAND_LANDMARK_COUNT = 21


@dataclass
class HandLandmarks:
    """
    Hand landmarks for a single tracked hand.

    Attributes:
        landmarks: List of 21 (x, y, z) tuples, x/y normalized 0-1
        handedness: 'Left' or 'Right'
        confidence: Detection confidence 0-1
    """
    landmarks: List[Tuple[float, float, float]]
    handedness: str = "Unknown"
    confidence: float = 0.0

    INDEX_TIP = 8

    @property
    def is_complete(self) -> bool:
        """True when the frame converts to 21 numeric (x, y, z) points."""
        return as_points(self.landmarks) is not None

    @property
    def index_tip(self) -> Tuple[float, float, float]:
        return self.landmarks[self.INDEX_TIP]


def as_points(landmarks) -> Optional[np.ndarray]:
    """
    Raw landmarks as a (21, 3) float array, or None when the frame is malformed
    (missing, wrong length, ragged or non-numeric).
    """
    try:
        pts = np.asarray(landmarks, dtype=np.float64)
    except (TypeError, ValueError):
        return None
    if pts.shape != (HAND_LANDMARK_COUNT, 3):
        return None
    return pts


def default_landmarks() -> List[Tuple[float, float, float]]:
    """Placeholder frame published while no hand is tracked."""
    return [(0.5, 0.5, 0.0)] * HAND_LANDMARK_COUNT


# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]


def draw_landmarks(frame: np.ndarray, landmarks: HandLandmarks) -> None:
    """Draw the hand skeleton onto a BGR frame in place."""
    h, w = frame.shape[:2]
    for x, y, _ in landmarks.landmarks:
        cv2.circle(frame, (int(x * w), int(y * h)), 5, (0, 255, 0), -1)

    for start_idx, end_idx in HAND_CONNECTIONS:
        start = landmarks.landmarks[start_idx]
        end = landmarks.landmarks[end_idx]
        start_pos = (int(start[0] * w), int(start[1] * h))
        end_pos = (int(end[0] * w), int(end[1] * h))
        cv2.line(frame, start_pos, end_pos, (0, 255, 0), 2)
