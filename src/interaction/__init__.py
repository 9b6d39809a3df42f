"""
AirScope Interaction Module

Three-mode interaction state machine, rotation momentum and intent dispatch.
"""
from .hsm import InteractionHSM, InteractionMode, FrameOutput, PanVector
from .intents import Explode, Implode, RaycastAt, ResetFocus, Focus
from .dispatcher import IntentDispatcher
from .session import ExplorerSession
from .snapping import snap_cursor

__all__ = [
    'InteractionHSM',
    'InteractionMode',
    'FrameOutput',
    'PanVector',
    'Explode',
    'Implode',
    'RaycastAt',
    'ResetFocus',
    'Focus',
    'IntentDispatcher',
    'ExplorerSession',
    'snap_cursor',
]
