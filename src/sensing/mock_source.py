"""
Synthetic hand source for running AirScope without a camera.

Poses are canonical right hands in tracker space (y grows downward, z around
zero like MediaPipe) and are translated so the index fingertip lands on the
requested point. ``MockHandSource`` plays a scripted timeline with the same
interface as ``HandTracker``.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .gesture_classifier import Gesture
from .landmarks import HandLandmarks, draw_landmarks

_WRIST_AND_BASES = {
    0: (0.50, 0.80),
    1: (0.44, 0.77),
    2: (0.40, 0.72),
    5: (0.44, 0.62),
    9: (0.49, 0.60),
    13: (0.54, 0.61),
    17: (0.58, 0.63),
}

_THUMB_OPEN = {3: (0.35, 0.66), 4: (0.30, 0.60)}
_THUMB_TUCKED = {3: (0.42, 0.75), 4: (0.44, 0.74)}

_FINGERS_EXTENDED = {
    6: (0.435, 0.55), 7: (0.428, 0.47), 8: (0.42, 0.40),
    10: (0.49, 0.52), 11: (0.49, 0.44), 12: (0.49, 0.37),
    14: (0.547, 0.54), 15: (0.553, 0.46), 16: (0.56, 0.39),
    18: (0.593, 0.57), 19: (0.607, 0.51), 20: (0.62, 0.45),
}

_FINGERS_CURLED = {
    6: (0.43, 0.57), 7: (0.44, 0.62), 8: (0.45, 0.66),
    10: (0.48, 0.55), 11: (0.485, 0.60), 12: (0.49, 0.64),
    14: (0.535, 0.56), 15: (0.53, 0.61), 16: (0.53, 0.65),
    18: (0.58, 0.59), 19: (0.575, 0.63), 20: (0.57, 0.67),
}

_PINCH_CONTACT = {
    3: (0.37, 0.60), 4: (0.405, 0.52),
    6: (0.43, 0.55), 7: (0.415, 0.51), 8: (0.40, 0.50),
}

INDEX_JOINTS = (6, 7, 8)
PINKY_JOINTS = (18, 19, 20)


def _compose(*parts: Dict[int, Tuple[float, float]]) -> np.ndarray:
    merged: Dict[int, Tuple[float, float]] = {}
    for part in parts:
        merged.update(part)
    pts = np.zeros((21, 3))
    for idx, (x, y) in merged.items():
        pts[idx, 0] = x
        pts[idx, 1] = y
    return pts


def _pointing() -> np.ndarray:
    pts = _compose(_WRIST_AND_BASES, _THUMB_TUCKED, _FINGERS_CURLED)
    for idx in INDEX_JOINTS:
        pts[idx, :2] = _FINGERS_EXTENDED[idx]
    return pts


POSES: Dict[Gesture, np.ndarray] = {
    Gesture.OPEN: _compose(_WRIST_AND_BASES, _THUMB_OPEN, _FINGERS_EXTENDED),
    Gesture.FIST: _compose(_WRIST_AND_BASES, _THUMB_TUCKED, _FINGERS_CURLED),
    Gesture.PINCH: _compose(_WRIST_AND_BASES, _THUMB_OPEN, _FINGERS_EXTENDED, _PINCH_CONTACT),
    # Index pointing, everything else tucked: none of the three gestures
    Gesture.NONE: _pointing(),
}


def pose_points(gesture: Gesture) -> np.ndarray:
    """Copy of the canonical (21, 3) pose for a gesture."""
    return POSES[gesture].copy()


def place_pose(points: np.ndarray, index_tip: Optional[Tuple[float, float]] = None) -> np.ndarray:
    """
    Translate a pose so its index fingertip sits on ``index_tip``.

    Near the border the whole hand is shifted back inside [0, 1] so no joint
    gets clamped; the fingertip then stops short of the requested point.
    """
    pts = points.copy()
    if index_tip is not None:
        pts[:, 0] += index_tip[0] - pts[8, 0]
        pts[:, 1] += index_tip[1] - pts[8, 1]
        low = pts[:, :2].min(axis=0)
        high = pts[:, :2].max(axis=0)
        pts[:, :2] += np.clip(-low, 0.0, None) - np.clip(high - 1.0, 0.0, None)
    return pts


def synthesize_hand(
    gesture: Gesture,
    index_tip: Optional[Tuple[float, float]] = None,
    confidence: float = 0.95,
) -> HandLandmarks:
    """Build a landmark frame showing ``gesture`` with the index tip at ``index_tip``."""
    pts = place_pose(pose_points(gesture), index_tip)
    return HandLandmarks(
        landmarks=[tuple(p) for p in pts.tolist()],
        handedness="Right",
        confidence=confidence,
    )


@dataclass
class MockStep:
    """One segment of a scripted timeline. ``gesture=None`` means no hand."""
    gesture: Optional[Gesture]
    duration: float                           # Seconds
    start: Tuple[float, float] = (0.5, 0.5)   # Index tip, tracker space
    end: Optional[Tuple[float, float]] = None


DEMO_SCRIPT: List[MockStep] = [
    MockStep(Gesture.NONE, 1.0),
    MockStep(Gesture.FIST, 1.5, (0.35, 0.45), (0.65, 0.50)),   # Drag to spin
    MockStep(None, 1.0),                                       # Coast (hand out of frame)
    MockStep(Gesture.OPEN, 0.5),                               # Explode
    MockStep(Gesture.OPEN, 1.0, (0.5, 0.5), (0.08, 0.5)),      # Edge pan
    MockStep(Gesture.NONE, 0.5),
    MockStep(Gesture.PINCH, 0.4, (0.45, 0.40)),                # Raycast
    MockStep(Gesture.NONE, 0.5),
    MockStep(Gesture.FIST, 0.4),                               # Implode
    MockStep(None, 0.5),                                       # Hand lost
]


class MockHandSource:
    """
    Plays a gesture script one frame per ``get_landmarks`` call.

    Mirrors the ``HandTracker`` interface so the worker and the debug view can
    use either.
    """

    def __init__(self, script: Optional[Sequence[MockStep]] = None, fps: int = 20, loop: bool = True):
        self._script = list(script or DEMO_SCRIPT)
        self._dt = 1.0 / max(1, fps)
        self._loop = loop
        self._is_running = False
        self._frame_count = 0
        self._elapsed = 0.0

    def start(self) -> bool:
        self._is_running = True
        self._frame_count = 0
        self._elapsed = 0.0
        return True

    def stop(self) -> None:
        self._is_running = False

    @property
    def total_duration(self) -> float:
        return sum(step.duration for step in self._script)

    def sample(self, t: float) -> Optional[HandLandmarks]:
        """Landmarks at script time ``t`` (seconds)."""
        total = self.total_duration
        if total <= 0:
            return None
        if self._loop:
            t = t % total
        elif t >= total:
            return None

        for step in self._script:
            if t < step.duration:
                if step.gesture is None:
                    return None
                end = step.end or step.start
                k = t / step.duration if step.duration > 0 else 1.0
                tip = (
                    step.start[0] + (end[0] - step.start[0]) * k,
                    step.start[1] + (end[1] - step.start[1]) * k,
                )
                return synthesize_hand(step.gesture, tip)
            t -= step.duration
        return None

    def get_landmarks(self) -> Optional[HandLandmarks]:
        if not self._is_running:
            return None
        landmarks = self.sample(self._elapsed)
        self._elapsed += self._dt
        self._frame_count += 1
        return landmarks

    def get_frame_with_landmarks(
        self,
        landmarks: Optional[HandLandmarks] = None,
        black_background: bool = True,
        size: Tuple[int, int] = (480, 640),
    ) -> np.ndarray:
        """Black canvas with the synthetic skeleton, mirrored like the camera view."""
        frame = np.zeros((size[0], size[1], 3), dtype=np.uint8)
        if landmarks is not None:
            draw_landmarks(frame, landmarks)
        return frame[:, ::-1].copy()

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def frame_count(self) -> int:
        return self._frame_count
