"""
Gesture classification from smoothed hand landmarks.
Detects open hand, fist and pinch with per-state hysteresis.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

import numpy as np

from . import features
from .config import ClassifierConfig


class Gesture(Enum):
    """Gesture vocabulary shared by the pipeline and the interaction layer."""
    NONE = auto()
    OPEN = auto()
    FIST = auto()
    PINCH = auto()


@dataclass
class GestureFeatures:
    """Per-frame measurements behind the last classification (debug overlay)."""
    pinch_distance: float = 0.0
    pinch_ratio: float = 0.0
    thumb_distance: float = 0.0
    open_count: int = 0
    open_y_count: int = 0
    fist_count: int = 0
    fist_y_count: int = 0
    extended_fingers: int = 0
    curled_fingers: int = 0


class GestureClassifier:
    """
    Classifies one smoothed frame into a raw gesture.

    The only memory is the previously published gesture passed in by the
    caller: it selects the looser "exit" thresholds for the state the hand is
    already in, so OPEN and FIST are sticky near their decision boundaries.

    Decision order (first match wins): PINCH, OPEN, FIST, NONE.
    """

    def __init__(self, config: Optional[ClassifierConfig] = None):
        self._config = config or ClassifierConfig()
        self.last_features = GestureFeatures()

    def classify(self, points: np.ndarray, previous: Gesture = Gesture.NONE) -> Gesture:
        """
        Args:
            points: (21, 3) landmark array, coordinates clamped to [0, 1]
            previous: Currently published gesture (hysteresis bias)

        Returns:
            Raw gesture for this frame.
        """
        cfg = self._config
        open_sticky = previous == Gesture.OPEN
        fist_sticky = previous == Gesture.FIST

        pinch_dist = features.pinch_distance(points)
        ratio = features.pinch_ratio(points)
        if cfg.dynamic_pinch:
            pinch_matched = ratio < cfg.pinch_ratio_threshold
        else:
            pinch_matched = pinch_dist < cfg.pinch_threshold

        deltas = features.extension_deltas(points)
        gaps = features.vertical_gaps(points)
        thumb_dist = features.thumb_distance(points)

        # Enter-threshold counts corroborate the hysteresis counts below
        extended = int(np.sum(deltas > cfg.open_enter_extension))
        curled = int(np.sum(deltas < cfg.fist_enter_curl))

        if open_sticky:
            open_delta, open_gap = cfg.open_exit_extension, cfg.open_exit_y_gap
            open_required, thumb_open = cfg.open_exit_count, cfg.thumb_extended_exit
        else:
            open_delta, open_gap = cfg.open_enter_extension, cfg.open_enter_y_gap
            open_required, thumb_open = cfg.open_enter_count, cfg.thumb_extended_enter

        if fist_sticky:
            fist_delta, fist_gap = cfg.fist_exit_curl, cfg.fist_exit_y_gap_abs
            fist_required, thumb_fist = cfg.fist_exit_count, cfg.thumb_curled_exit
        else:
            fist_delta, fist_gap = cfg.fist_enter_curl, cfg.fist_enter_y_gap_abs
            fist_required, thumb_fist = cfg.fist_enter_count, cfg.thumb_curled_enter

        open_count = int(np.sum(deltas > open_delta))
        open_y_count = int(np.sum(gaps < open_gap))
        fist_count = int(np.sum(deltas < fist_delta))
        fist_y_count = int(np.sum(np.abs(gaps) < fist_gap))

        self.last_features = GestureFeatures(
            pinch_distance=pinch_dist,
            pinch_ratio=ratio,
            thumb_distance=thumb_dist,
            open_count=open_count,
            open_y_count=open_y_count,
            fist_count=fist_count,
            fist_y_count=fist_y_count,
            extended_fingers=extended,
            curled_fingers=curled,
        )

        # A closing fist sweeps the thumb past the index tip; only accept a
        # pinch from a hand that is, or just was, open
        pinch_ready = (
            previous in (Gesture.PINCH, Gesture.OPEN)
            or open_y_count >= cfg.pinch_open_baseline_count
        )
        if pinch_matched and pinch_ready:
            return Gesture.PINCH

        if (
            open_count >= open_required
            and open_y_count >= open_required
            and thumb_dist > thumb_open
            and extended >= cfg.min_extended_fingers
        ):
            return Gesture.OPEN

        if (
            fist_count >= fist_required
            and fist_y_count >= fist_required
            and thumb_dist < thumb_fist
            and curled >= cfg.min_curled_fingers
        ):
            return Gesture.FIST

        return Gesture.NONE
