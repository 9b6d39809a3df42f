import pytest

from sensing.config import Config
from sensing.gesture_classifier import Gesture
from sensing.mock_source import synthesize_hand


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def hand():
    """Factory for synthetic landmark frames: hand(Gesture.FIST, (x, y))."""
    def _make(gesture=Gesture.OPEN, index_tip=(0.5, 0.5), confidence=0.95):
        return synthesize_hand(gesture, index_tip, confidence)
    return _make


def mirrored(x, y):
    """Tracker-space index tip that lands the (mirrored) cursor on (x, y)."""
    return (1.0 - x, y)
