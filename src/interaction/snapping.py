"""
Magnetic cursor snap for SCATTERED mode.
"""
import math
from typing import Iterable, Tuple


def snap_cursor(
    ndc: Tuple[float, float],
    centers: Iterable[Tuple[float, float, float]],
    radius: float = 0.15,
) -> Tuple[Tuple[float, float], bool]:
    """
    Snap the cursor onto the nearest projected part center.

    Args:
        ndc: Cursor in normalized device coordinates
        centers: Part centers already projected to NDC as (x, y, z); z >= 1
                 lies beyond the far plane and is ignored
        radius: Snap radius in NDC units

    Returns:
        (snapped ndc, whether a snap happened)
    """
    best = None
    best_dist = radius
    for cx, cy, cz in centers:
        if cz >= 1.0:
            continue
        dist = math.hypot(cx - ndc[0], cy - ndc[1])
        if dist < best_dist:
            best_dist = dist
            best = (cx, cy)

    if best is None:
        return ndc, False
    return best, True
