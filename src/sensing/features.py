"""
Geometric features over a 21-point landmark frame.

All helpers take an (21, 3) float array and are free of state. Points are
clamped to [0, 1] by the caller (see ``normalize_points``) so none of these
can produce NaN.
"""
import numpy as np

WRIST = 0
THUMB_MCP = 2
THUMB_TIP = 4
INDEX_MCP = 5
INDEX_TIP = 8

# (tip, base) for index, middle, ring, pinky
FINGER_TIPS = np.array([8, 12, 16, 20])
FINGER_BASES = np.array([5, 9, 13, 17])

HAND_SCALE_EPSILON = 1e-6


def normalize_points(landmarks, flip_y: bool = False) -> np.ndarray:
    """
    Copy raw tracker landmarks into a clamped (21, 3) array.

    MediaPipe z is roughly centred on zero, so it is shifted by 0.5 before
    clamping to keep every coordinate in [0, 1].
    """
    pts = np.array(landmarks, dtype=np.float64).reshape(-1, 3)
    pts = np.nan_to_num(pts, nan=0.0, posinf=1.0, neginf=0.0)
    pts[:, 2] = pts[:, 2] + 0.5
    if flip_y:
        pts[:, 1] = 1.0 - pts[:, 1]
    return np.clip(pts, 0.0, 1.0)


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """3D Euclidean distance between two points."""
    return float(np.linalg.norm(a - b))


def hand_scale(points: np.ndarray) -> float:
    """Wrist to index base, floored so it can be used as a denominator."""
    return max(distance(points[WRIST], points[INDEX_MCP]), HAND_SCALE_EPSILON)


def pinch_distance(points: np.ndarray) -> float:
    return distance(points[THUMB_TIP], points[INDEX_TIP])


def pinch_ratio(points: np.ndarray) -> float:
    """Thumb-index gap relative to hand size (scale invariant)."""
    return pinch_distance(points) / hand_scale(points)


def extension_deltas(points: np.ndarray) -> np.ndarray:
    """
    Per-finger ``dist(tip, wrist) - dist(base, wrist)``.

    Positive for an extended finger, negative for a curled one.
    """
    wrist = points[WRIST]
    tip_dist = np.linalg.norm(points[FINGER_TIPS] - wrist, axis=1)
    base_dist = np.linalg.norm(points[FINGER_BASES] - wrist, axis=1)
    return tip_dist - base_dist


def vertical_gaps(points: np.ndarray) -> np.ndarray:
    """Per-finger ``tip.y - base.y`` (negative when the tip is above the base)."""
    return points[FINGER_TIPS, 1] - points[FINGER_BASES, 1]


def thumb_distance(points: np.ndarray) -> float:
    return distance(points[THUMB_TIP], points[THUMB_MCP])
