import pytest
from sensing.config import StabilizerConfig
from sensing.gesture_classifier import Gesture
from sensing.stabilizer import TemporalStabilizer

F, O, N, P = Gesture.FIST, Gesture.OPEN, Gesture.NONE, Gesture.PINCH


def feed(stabilizer, sequence):
    return [stabilizer.stabilize(g) for g in sequence]


def test_starts_at_none():
    assert TemporalStabilizer().published == Gesture.NONE


def test_fist_to_open_needs_confirmation():
    stabilizer = TemporalStabilizer(StabilizerConfig(vote_window=3))
    assert feed(stabilizer, [F, F, O, O, O]) == [F, F, F, F, O]


def test_single_frame_flicker_rejected():
    stabilizer = TemporalStabilizer()
    out = feed(stabilizer, [F, F, F, F, F, N, F, F])
    assert all(g == F for g in out)


def test_lone_open_after_pinch_is_suppressed():
    stabilizer = TemporalStabilizer(StabilizerConfig(vote_window=1))
    feed(stabilizer, [P])
    assert stabilizer.stabilize(O) == N
    assert stabilizer.stabilize(O) == O


def test_open_from_none_is_not_guarded():
    stabilizer = TemporalStabilizer(StabilizerConfig(vote_window=1))
    assert stabilizer.stabilize(O) == O


def test_tie_keeps_published():
    stabilizer = TemporalStabilizer(StabilizerConfig(vote_window=4))
    feed(stabilizer, [F, F])
    assert feed(stabilizer, [N, N]) == [F, F]
    assert stabilizer.stabilize(N) == N


def test_hold_frames_delay_commit():
    stabilizer = TemporalStabilizer(StabilizerConfig(vote_window=1, hold_frames=3))
    assert feed(stabilizer, [F, F, F]) == [N, N, F]


def test_reset_returns_to_none():
    stabilizer = TemporalStabilizer()
    feed(stabilizer, [F, F, F])
    stabilizer.reset()
    assert stabilizer.published == N
    # Window is empty again: one frame is enough to publish
    assert stabilizer.stabilize(P) == P
