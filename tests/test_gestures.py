import pytest
from sensing.config import ClassifierConfig
from sensing.gesture_classifier import GestureClassifier, Gesture
from sensing.mock_source import PINKY_JOINTS, pose_points


@pytest.fixture
def classifier():
    return GestureClassifier(ClassifierConfig())


@pytest.mark.parametrize("gesture", [Gesture.OPEN, Gesture.FIST, Gesture.PINCH, Gesture.NONE])
def test_canonical_poses(classifier, gesture):
    assert classifier.classify(pose_points(gesture), Gesture.NONE) == gesture


def three_finger_hand():
    """Open hand with the pinky curled: between the OPEN enter and exit thresholds."""
    pts = pose_points(Gesture.OPEN)
    curled = pose_points(Gesture.FIST)
    for idx in PINKY_JOINTS:
        pts[idx] = curled[idx]
    return pts


def test_open_hysteresis_keeps_open(classifier):
    assert classifier.classify(three_finger_hand(), Gesture.OPEN) == Gesture.OPEN


def test_open_hysteresis_does_not_enter(classifier):
    assert classifier.classify(three_finger_hand(), Gesture.NONE) == Gesture.NONE


def closing_fist_with_thumb_on_index():
    pts = pose_points(Gesture.FIST)
    pts[4] = pts[8]
    return pts


def test_closing_fist_does_not_pinch(classifier):
    pts = closing_fist_with_thumb_on_index()
    assert classifier.classify(pts, Gesture.FIST) != Gesture.PINCH


def test_pinch_from_open_hand_is_ready(classifier):
    pts = closing_fist_with_thumb_on_index()
    assert classifier.classify(pts, Gesture.OPEN) == Gesture.PINCH
    assert classifier.classify(pts, Gesture.PINCH) == Gesture.PINCH


def test_pinch_wins_over_open(classifier):
    # Pinch pose keeps the other fingers extended
    assert classifier.classify(pose_points(Gesture.PINCH), Gesture.OPEN) == Gesture.PINCH


def test_static_pinch_threshold():
    classifier = GestureClassifier(ClassifierConfig(dynamic_pinch=False))
    assert classifier.classify(pose_points(Gesture.PINCH), Gesture.NONE) == Gesture.PINCH
    assert classifier.classify(pose_points(Gesture.OPEN), Gesture.NONE) == Gesture.OPEN


def test_pinch_survives_smaller_hand(classifier):
    pts = pose_points(Gesture.PINCH)
    wrist = pts[0].copy()
    small = wrist + (pts - wrist) * 0.5
    assert classifier.classify(small, Gesture.OPEN) == Gesture.PINCH


def test_last_features_recorded(classifier):
    classifier.classify(pose_points(Gesture.OPEN), Gesture.NONE)
    f = classifier.last_features
    assert f.extended_fingers == 4
    assert f.open_y_count == 4
    assert f.pinch_ratio > 1.0
