"""
Per-frame gesture pipeline: smooth -> classify -> stabilize.
"""
from dataclasses import dataclass, field
from typing import Optional

from .config import Config
from .features import normalize_points
from .gesture_classifier import Gesture, GestureClassifier, GestureFeatures
from .landmarks import HandLandmarks, as_points, default_landmarks
from .smoother import AdaptiveSmoother
from .stabilizer import TemporalStabilizer


@dataclass
class PipelineResult:
    """Published hand state for one frame."""
    gesture: Gesture
    raw_gesture: Gesture = Gesture.NONE
    landmarks: HandLandmarks = field(
        default_factory=lambda: HandLandmarks(landmarks=default_landmarks())
    )
    confidence: float = 0.0
    tracked: bool = False
    alpha: float = 0.0
    features: Optional[GestureFeatures] = None


class GesturePipeline:
    """
    Owns the smoother, classifier and stabilizer for a single hand.

    ``process`` is called once per tracker result. A missing or malformed
    frame resets every stage and publishes NONE straight away.
    """

    def __init__(self, config: Optional[Config] = None):
        config = config or Config()
        self._input_config = config.input
        self._detection_floor = config.mediapipe.min_detection_confidence
        self.smoother = AdaptiveSmoother(config.smoothing)
        self.classifier = GestureClassifier(config.classifier)
        self.stabilizer = TemporalStabilizer(config.stabilizer)

    @property
    def published(self) -> Gesture:
        return self.stabilizer.published

    def process(self, hand: Optional[HandLandmarks]) -> PipelineResult:
        raw_points = as_points(hand.landmarks) if hand is not None else None
        if raw_points is None:
            self.reset()
            return PipelineResult(gesture=Gesture.NONE, alpha=self.smoother.last_alpha)

        points = normalize_points(raw_points, flip_y=self._input_config.flip_y)
        smoothed = self.smoother.smooth(points)
        raw = self.classifier.classify(smoothed, self.stabilizer.published)
        published = self.stabilizer.stabilize(raw)

        confidence = hand.confidence
        if confidence is None:
            confidence = self._detection_floor
        confidence = max(0.0, min(1.0, float(confidence)))

        return PipelineResult(
            gesture=published,
            raw_gesture=raw,
            landmarks=HandLandmarks(
                landmarks=[tuple(p) for p in smoothed.tolist()],
                handedness=hand.handedness,
                confidence=confidence,
            ),
            confidence=confidence,
            tracked=True,
            alpha=self.smoother.last_alpha,
            features=self.classifier.last_features,
        )

    def reset(self) -> None:
        """Clear filter and vote state; published gesture returns to NONE."""
        self.smoother.reset()
        self.stabilizer.reset()
