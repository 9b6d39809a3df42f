"""
Damped angular velocity and quaternion accumulation.
"""
import math
from typing import Optional

import numpy as np

IDENTITY = np.array([1.0, 0.0, 0.0, 0.0])  # (w, x, y, z)


def quat_from_axis_angle(axis, angle: float) -> np.ndarray:
    axis = np.asarray(axis, dtype=np.float64)
    half = angle / 2.0
    return np.concatenate(([math.cos(half)], axis * math.sin(half)))


def quat_multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Hamilton product ``a * b``."""
    aw, ax, ay, az = a
    bw, bx, by, bz = b
    return np.array([
        aw * bw - ax * bx - ay * by - az * bz,
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
    ])


def apply_damping(velocity: float, friction: float = 0.92, stop_threshold: float = 0.001) -> float:
    """One frame of friction; snaps to exactly zero below the threshold."""
    next_velocity = velocity * friction
    if abs(next_velocity) < stop_threshold:
        return 0.0
    return next_velocity


class DampedAxisPair:
    """
    Pitch/yaw angular velocity (radians per frame) driving one orientation.

    Used twice by the HSM: once for the whole model's pivot and once for the
    focused part.
    """

    X_AXIS = (1.0, 0.0, 0.0)
    Y_AXIS = (0.0, 1.0, 0.0)

    def __init__(self, damping: float = 0.92, stop_threshold: float = 0.001,
                 epsilon: float = 0.0001):
        self.damping = damping
        self.stop_threshold = stop_threshold
        self.epsilon = epsilon
        self.pitch = 0.0   # About X, driven by vertical cursor motion
        self.yaw = 0.0     # About Y, driven by horizontal cursor motion
        self.orientation = IDENTITY.copy()

    @property
    def is_moving(self) -> bool:
        return abs(self.pitch) > self.epsilon or abs(self.yaw) > self.epsilon

    def set_velocity(self, yaw: float, pitch: float) -> None:
        self.yaw = yaw
        self.pitch = pitch

    def stop(self) -> None:
        self.yaw = 0.0
        self.pitch = 0.0

    def damp(self) -> None:
        self.yaw = apply_damping(self.yaw, self.damping, self.stop_threshold)
        self.pitch = apply_damping(self.pitch, self.damping, self.stop_threshold)

    def integrate(self) -> Optional[np.ndarray]:
        """
        Pre-multiply this frame's rotation onto the orientation.

        Returns the incremental quaternion, or None when the pair is at rest.
        """
        if not self.is_moving:
            return None
        q_yaw = quat_from_axis_angle(self.Y_AXIS, self.yaw)
        q_pitch = quat_from_axis_angle(self.X_AXIS, self.pitch)
        delta = quat_multiply(q_yaw, q_pitch)
        q = quat_multiply(delta, self.orientation)
        self.orientation = q / np.linalg.norm(q)
        return delta

    def reset_orientation(self) -> None:
        self.orientation = IDENTITY.copy()
