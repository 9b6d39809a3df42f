"""
Discrete actions emitted by the interaction state machine.

The HSM never animates or picks meshes itself; each ``update`` returns the
intents the renderer should carry out for that frame.
"""
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Explode:
    """Spread the model's parts apart (WHOLE -> SCATTERED)."""


@dataclass(frozen=True)
class Implode:
    """Recombine the parts (SCATTERED -> WHOLE)."""


@dataclass(frozen=True)
class RaycastAt:
    """Pick the part under the cursor, in normalized device coordinates."""
    ndc_x: float
    ndc_y: float


@dataclass(frozen=True)
class ResetFocus:
    """Leave the close-up view (FOCUSED -> SCATTERED)."""


@dataclass(frozen=True)
class Focus:
    """Zoom onto the selected part (SCATTERED -> FOCUSED)."""
    part_id: str


Intent = Union[Explode, Implode, RaycastAt, ResetFocus, Focus]
