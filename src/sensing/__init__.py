"""
AirScope Sensing Module

Landmark smoothing, gesture classification and temporal stabilization.
The MediaPipe tracker lives in ``sensing.hand_tracker`` and is imported on
demand.
"""
from .config import Config, load_config
from .landmarks import HandLandmarks
from .gesture_classifier import GestureClassifier, Gesture
from .pipeline import GesturePipeline, PipelineResult

__all__ = [
    'Config',
    'load_config',
    'HandLandmarks',
    'GestureClassifier',
    'Gesture',
    'GesturePipeline',
    'PipelineResult',
]
