import math

import numpy as np
import pytest
from sensing import features
from sensing.gesture_classifier import Gesture
from sensing.mock_source import pose_points


def test_normalize_clamps_and_shifts_depth():
    raw = [(0.5, 0.5, 0.0)] * 20 + [(1.4, -0.2, -0.1)]
    pts = features.normalize_points(raw)

    assert pts.shape == (21, 3)
    assert pts[0, 2] == pytest.approx(0.5)
    assert tuple(pts[20]) == pytest.approx((1.0, 0.0, 0.4))


def test_normalize_replaces_nan():
    raw = [(math.nan, 0.5, 0.0)] * 21
    pts = features.normalize_points(raw)
    assert not np.isnan(pts).any()


def test_normalize_flip_y():
    raw = [(0.5, 0.2, 0.0)] * 21
    assert features.normalize_points(raw, flip_y=True)[0, 1] == pytest.approx(0.8)


def test_open_hand_measurements():
    pts = pose_points(Gesture.OPEN)
    assert np.all(features.extension_deltas(pts) > 0.035)
    assert np.all(features.vertical_gaps(pts) < -0.065)
    assert features.thumb_distance(pts) > 0.05


def test_pinch_ratio_is_scale_invariant():
    pts = pose_points(Gesture.PINCH)
    wrist = pts[features.WRIST].copy()
    half = wrist + (pts - wrist) * 0.5

    assert features.pinch_ratio(half) == pytest.approx(features.pinch_ratio(pts))
    assert features.pinch_distance(half) == pytest.approx(features.pinch_distance(pts) / 2)


def test_hand_scale_never_zero():
    pts = np.zeros((21, 3))
    assert features.hand_scale(pts) > 0
    assert features.pinch_ratio(pts) == 0.0
