import pytest
from sensing.config import Config
from sensing.gesture_classifier import Gesture
from sensing.mock_source import MockHandSource, MockStep, synthesize_hand
from interaction.worker import create_source


def test_synthesized_index_tip_placement():
    hand = synthesize_hand(Gesture.FIST, (0.3, 0.6))
    assert hand.index_tip[:2] == pytest.approx((0.3, 0.6))
    assert hand.is_complete


def test_script_interpolates_and_drops_hand():
    source = MockHandSource([
        MockStep(Gesture.FIST, 1.0, (0.2, 0.5), (0.6, 0.5)),
        MockStep(None, 1.0),
    ], fps=10, loop=False)

    assert source.total_duration == pytest.approx(2.0)
    assert source.sample(0.5).index_tip[0] == pytest.approx(0.4)
    assert source.sample(1.5) is None
    assert source.sample(2.5) is None


def test_looping_wraps_time():
    source = MockHandSource([MockStep(Gesture.OPEN, 1.0, (0.2, 0.5), (0.6, 0.5))])
    assert source.sample(1.25).index_tip[0] == pytest.approx(0.3)


def test_get_landmarks_advances_frames():
    source = MockHandSource(fps=20)
    assert source.get_landmarks() is None  # Not started

    source.start()
    for _ in range(3):
        source.get_landmarks()
    assert source.frame_count == 3
    source.stop()
    assert not source.is_running


def test_preview_frame_shape():
    source = MockHandSource()
    frame = source.get_frame_with_landmarks(synthesize_hand(Gesture.OPEN), size=(120, 160))
    assert frame.shape == (120, 160, 3)
    assert frame.any()


def test_create_source_mock_mode():
    config = Config()
    config.input.mode = "mock"
    config.input.mock_fps = 15
    assert isinstance(create_source(config), MockHandSource)


def test_pose_near_border_stays_in_frame():
    import numpy as np
    from sensing.gesture_classifier import GestureClassifier
    from sensing.mock_source import place_pose, pose_points

    pts = place_pose(pose_points(Gesture.OPEN), (0.08, 0.5))
    assert pts[:, :2].min() >= 0.0
    assert pts[:, :2].max() <= 1.0
    # Shifted as a whole, not squashed
    np.testing.assert_allclose(pts - pts[8], pose_points(Gesture.OPEN) - pose_points(Gesture.OPEN)[8])
    assert GestureClassifier().classify(pts, Gesture.NONE) == Gesture.OPEN
