"""
Adaptive exponential smoothing for landmark frames.
"""
from typing import Optional

import numpy as np

from .config import SmoothingConfig
from .features import INDEX_TIP


class AdaptiveSmoother:
    """
    Exponential filter over whole landmark frames.

    The blend weight follows the speed of the index fingertip: a still hand is
    smoothed heavily to hide tracker noise during fine selection, a fast hand
    gets a high alpha so the cursor does not lag.
    """

    def __init__(self, config: Optional[SmoothingConfig] = None):
        """
        Args:
            config: Smoothing parameters (defaults if None)
        """
        self._config = config or SmoothingConfig()
        self._last_raw: Optional[np.ndarray] = None
        self._last_smoothed: Optional[np.ndarray] = None
        self.last_alpha: float = self._config.smoothing_alpha

    @property
    def is_seeded(self) -> bool:
        return self._last_smoothed is not None

    def compute_alpha(self, current: np.ndarray) -> float:
        """Map index-tip velocity onto [min_alpha, max_alpha]."""
        cfg = self._config
        if not cfg.adaptive or self._last_raw is None:
            return cfg.smoothing_alpha

        v = float(np.linalg.norm(current[INDEX_TIP] - self._last_raw[INDEX_TIP]))
        t = (v - cfg.velocity_low) / max(1e-6, cfg.velocity_high - cfg.velocity_low)
        t = max(0.0, min(1.0, t))
        return cfg.min_alpha + (cfg.max_alpha - cfg.min_alpha) * t

    def smooth(self, current: np.ndarray) -> np.ndarray:
        """
        Filter one (21, 3) frame.

        The first frame after construction or reset seeds the filter and is
        returned unchanged. The returned array is a copy the caller may keep.
        """
        if self._last_smoothed is None:
            self._last_raw = current.copy()
            self._last_smoothed = current.copy()
            return current.copy()

        alpha = self.compute_alpha(current)
        self.last_alpha = alpha
        smoothed = alpha * current + (1.0 - alpha) * self._last_smoothed

        self._last_raw = current.copy()
        self._last_smoothed = smoothed
        return smoothed.copy()

    def reset(self) -> None:
        """Drop all history; the next frame re-seeds the filter."""
        self._last_raw = None
        self._last_smoothed = None
        self.last_alpha = self._config.smoothing_alpha
