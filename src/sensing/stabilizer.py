"""
Temporal stabilization of raw per-frame gestures.
"""
from collections import Counter, deque
from typing import Deque, Optional

from .config import StabilizerConfig
from .gesture_classifier import Gesture

# Leaving these requires a confirmed OPEN streak
CRITICAL_GESTURES = (Gesture.FIST, Gesture.PINCH)


class TemporalStabilizer:
    """
    Turns the flickery raw gesture stream into the published gesture.

    Three stages run on every frame:
    1. Transition guard: OPEN straight out of FIST/PINCH is held back as NONE
       until it has been seen ``open_confirm_frames`` times in a row.
    2. Majority vote over a sliding window; ties keep the published label.
    3. Hold debounce: the voted label must repeat ``hold_frames`` times before
       it replaces the published one.
    """

    def __init__(self, config: Optional[StabilizerConfig] = None):
        self._config = config or StabilizerConfig()
        self._history: Deque[Gesture] = deque(maxlen=max(1, self._config.vote_window))
        self._published = Gesture.NONE
        self._candidate = Gesture.NONE
        self._candidate_frames = 0
        self._open_streak = 0

    @property
    def published(self) -> Gesture:
        return self._published

    def stabilize(self, raw: Gesture) -> Gesture:
        """Feed one raw gesture and return the published gesture."""
        guarded = self._apply_transition_guard(raw)
        voted = self._vote(guarded)
        return self._commit(voted)

    def _apply_transition_guard(self, raw: Gesture) -> Gesture:
        if raw == Gesture.OPEN:
            self._open_streak += 1
        else:
            self._open_streak = 0

        if (
            self._published in CRITICAL_GESTURES
            and raw == Gesture.OPEN
            and self._open_streak < self._config.open_confirm_frames
        ):
            return Gesture.NONE
        return raw

    def _vote(self, gesture: Gesture) -> Gesture:
        self._history.append(gesture)
        counts = Counter(self._history)
        best = max(counts.values())
        if counts.get(self._published, 0) == best:
            return self._published
        # First label (in window order) reaching the top count
        for label in self._history:
            if counts[label] == best:
                return label
        return self._published

    def _commit(self, voted: Gesture) -> Gesture:
        if voted != self._candidate:
            self._candidate = voted
            self._candidate_frames = 1
        else:
            self._candidate_frames += 1

        if (
            self._candidate != self._published
            and self._candidate_frames >= self._config.hold_frames
        ):
            self._published = self._candidate
        return self._published

    def reset(self) -> None:
        """Back to initial state: empty window, published NONE."""
        self._history.clear()
        self._open_streak = 0
        self._published = Gesture.NONE
        self._candidate = Gesture.NONE
        self._candidate_frames = 0
