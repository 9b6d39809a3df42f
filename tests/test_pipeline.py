import pytest
from sensing.config import Config
from sensing.gesture_classifier import Gesture
from sensing.landmarks import HandLandmarks
from sensing.pipeline import GesturePipeline


@pytest.fixture
def pipeline(config):
    return GesturePipeline(config)


def run(pipeline, frames):
    result = None
    for frame in frames:
        result = pipeline.process(frame)
    return result


def test_no_hand_publishes_none(pipeline):
    result = pipeline.process(None)

    assert result.gesture == Gesture.NONE
    assert result.tracked is False
    assert result.landmarks.index_tip == (0.5, 0.5, 0.0)


def test_steady_fist_is_published(pipeline, hand):
    result = run(pipeline, [hand(Gesture.FIST)] * 5)

    assert result.gesture == Gesture.FIST
    assert result.raw_gesture == Gesture.FIST
    assert result.tracked is True
    assert len(result.landmarks.landmarks) == 21


def test_loss_of_track_resets_immediately(pipeline, hand):
    run(pipeline, [hand(Gesture.FIST)] * 5)

    result = pipeline.process(None)
    assert result.gesture == Gesture.NONE
    assert pipeline.published == Gesture.NONE
    assert not pipeline.smoother.is_seeded


def test_malformed_frame_treated_as_lost(pipeline, hand):
    run(pipeline, [hand(Gesture.FIST)] * 5)

    broken = HandLandmarks(landmarks=[(0.5, 0.5, 0.0)] * 20)
    assert pipeline.process(broken).gesture == Gesture.NONE
    assert pipeline.published == Gesture.NONE


def test_confidence_clamped(pipeline, hand):
    assert pipeline.process(hand(Gesture.OPEN, confidence=1.7)).confidence == 1.0
    assert pipeline.process(hand(Gesture.OPEN, confidence=-0.2)).confidence == 0.0


def test_missing_confidence_uses_detection_floor(pipeline, hand):
    frame = hand(Gesture.OPEN)
    frame.confidence = None
    assert pipeline.process(frame).confidence == pytest.approx(0.6)


def test_open_then_fist_converges(pipeline, hand):
    assert run(pipeline, [hand(Gesture.OPEN)] * 10).gesture == Gesture.OPEN
    assert run(pipeline, [hand(Gesture.FIST)] * 40).gesture == Gesture.FIST


def test_landmarks_follow_smoothing(pipeline, hand):
    pipeline.process(hand(Gesture.OPEN, (0.4, 0.5)))
    result = pipeline.process(hand(Gesture.OPEN, (0.6, 0.5)))

    assert 0.4 < result.landmarks.index_tip[0] < 0.6
    assert result.alpha == pytest.approx(0.5)


def test_flip_y_inverts_cursor(hand):
    config = Config()
    config.input.flip_y = True
    pipeline = GesturePipeline(config)

    result = pipeline.process(hand(Gesture.OPEN, (0.5, 0.3)))
    assert result.landmarks.index_tip[1] == pytest.approx(0.7)


@pytest.mark.parametrize("landmarks", [
    [(0.5, 0.5, 0.0)] * 20 + [0.5],           # Scalar in place of a point
    [(0.5, "x", 0.0)] * 21,                   # Non-numeric coordinate
    [(0.5, 0.5)] * 21,                        # Missing z
    None,
])
def test_malformed_landmarks_publish_none(pipeline, hand, landmarks):
    run(pipeline, [hand(Gesture.FIST)] * 5)

    result = pipeline.process(HandLandmarks(landmarks=landmarks))
    assert result.gesture == Gesture.NONE
    assert result.tracked is False
    assert pipeline.published == Gesture.NONE


def test_missing_coordinate_is_zeroed(pipeline):
    frame = HandLandmarks(landmarks=[(0.5, None, 0.0)] * 21, confidence=0.9)
    result = pipeline.process(frame)
    assert result.tracked is True
    assert result.landmarks.index_tip[1] == 0.0
