"""
Interaction state machine for the 3D explorer.

Consumes the published gesture and the index fingertip every frame and
decides when the model explodes, recombines, gets picked or focused, and how
cursor motion turns into rotation momentum.
"""
import logging
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

from sensing.config import InteractionConfig
from sensing.gesture_classifier import Gesture

from .intents import Explode, Focus, Implode, Intent, RaycastAt, ResetFocus
from .momentum import DampedAxisPair
from .snapping import snap_cursor

logger = logging.getLogger(__name__)


class InteractionMode(Enum):
    """Top-level interaction phase."""
    WHOLE = auto()       # Model assembled, drag to spin
    SCATTERED = auto()   # Parts exploded, hover/pan and pick
    FOCUSED = auto()     # Close-up on one part, pinch to turn it


@dataclass(frozen=True)
class PanVector:
    """Edge-pan direction (unit, screen space) and how far past the deadzone."""
    x: float
    y: float
    intensity: float


@dataclass
class FrameOutput:
    """Everything the renderer needs from one ``update`` call."""
    mode: InteractionMode
    cursor: Tuple[float, float]
    pan: Optional[PanVector] = None
    effective_gesture: Gesture = Gesture.NONE
    intents: List[Intent] = field(default_factory=list)


@dataclass
class EdgeGuard:
    """Anti-jitter state for WHOLE-mode drags near the frame border."""
    locked: bool = False
    reentry_frames: int = 0
    cooldown_frames: int = 0

    def reset(self) -> None:
        self.locked = False
        self.reentry_frames = 0
        self.cooldown_frames = 0


def cursor_to_ndc(cursor: Tuple[float, float]) -> Tuple[float, float]:
    """Screen-space [0, 1] cursor to normalized device coordinates."""
    return (cursor[0] * 2.0 - 1.0, -(cursor[1] * 2.0) + 1.0)


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


class InteractionHSM:
    """
    Three-mode machine: WHOLE, SCATTERED, FOCUSED.

    Call ``update`` once per render tick with the published gesture, then
    ``apply_momentum``. Actions on mode edges come back as intents in the
    returned ``FrameOutput``; the caller executes them.

    Edge latches (``pinch_fired``, ``fist_action_fired``, ``open_fired``) stay
    set for one continuous occurrence of their gesture so each occurrence fires
    its action exactly once.
    """

    def __init__(self, config: Optional[InteractionConfig] = None):
        self._config = config or InteractionConfig()
        cfg = self._config

        self.mode = InteractionMode.WHOLE
        self.global_motion = DampedAxisPair(cfg.damping, cfg.stop_threshold, cfg.rotation_epsilon)
        self.local_motion = DampedAxisPair(cfg.damping, cfg.stop_threshold, cfg.rotation_epsilon)

        self.is_dragging = False
        self.pinch_fired = False
        self.fist_action_fired = False
        self.open_fired = False
        self.fist_hold_start: Optional[float] = None
        self.escalated = False
        self.guard = EdgeGuard()
        self.selected_part: Optional[str] = None

        self._anchor: Optional[Tuple[float, float]] = None

    # ------------------------------------------------------------------
    # Per-frame entry points
    # ------------------------------------------------------------------

    def update(self, gesture: Gesture, index_tip: Tuple[float, float], now: float) -> FrameOutput:
        """
        Advance the machine by one frame.

        Args:
            gesture: Published gesture from the pipeline
            index_tip: Index fingertip (x, y) in tracker space; x is mirrored here
            now: Timestamp in seconds (perf_counter scale)
        """
        cursor = (1.0 - _clamp01(index_tip[0]), _clamp01(index_tip[1]))
        intents: List[Intent] = []
        edge_panning = False

        if gesture == Gesture.FIST:
            self._on_fist(cursor, now, intents)
        elif gesture == Gesture.OPEN:
            self._on_open(intents)
            edge_panning = self.mode == InteractionMode.SCATTERED
        elif gesture == Gesture.PINCH:
            self._on_pinch(cursor, intents)
        else:
            self._release()
            edge_panning = self.mode == InteractionMode.SCATTERED

        pan = self._edge_pan(cursor) if edge_panning else None

        effective = gesture
        if self.mode == InteractionMode.WHOLE and self.escalated and gesture == Gesture.FIST:
            effective = Gesture.PINCH

        return FrameOutput(
            mode=self.mode,
            cursor=cursor,
            pan=pan,
            effective_gesture=effective,
            intents=intents,
        )

    def apply_momentum(self) -> None:
        """Damp idle velocities and accumulate both orientations."""
        global_driven = self.is_dragging or (
            self.mode == InteractionMode.WHOLE and self.pinch_fired
        )
        if not global_driven:
            self.global_motion.damp()
        self.global_motion.integrate()

        local_driven = self.mode == InteractionMode.FOCUSED and self.pinch_fired
        if not local_driven:
            self.local_motion.damp()
        if self.mode == InteractionMode.FOCUSED:
            self.local_motion.integrate()

    # ------------------------------------------------------------------
    # External control
    # ------------------------------------------------------------------

    def set_mode(self, mode: InteractionMode) -> None:
        """Force a mode. Entering FOCUSED starts the part from identity, at rest."""
        if mode != self.mode:
            logger.debug("mode %s -> %s (external)", self.mode.name, mode.name)
        self.mode = mode
        self._anchor = None
        if mode == InteractionMode.FOCUSED:
            self.local_motion.reset_orientation()
            self.local_motion.stop()

    def select(self, part_id: str) -> None:
        """Record the part the renderer picked; an OPEN edge in SCATTERED focuses it."""
        self.selected_part = part_id

    def clear_selection(self) -> None:
        """Forget the picked part (renderer raycast missed, or the model recombined)."""
        self.selected_part = None

    def snap(self, ndc: Tuple[float, float], centers) -> Tuple[Tuple[float, float], bool]:
        """Magnetic snap of an NDC cursor onto projected part centers (SCATTERED hover)."""
        return snap_cursor(ndc, centers, self._config.snap_radius)

    def reset(self) -> None:
        """Back to WHOLE at rest, keeping only the global orientation."""
        self.set_mode(InteractionMode.WHOLE)
        self.global_motion.stop()
        self.local_motion.stop()
        self.local_motion.reset_orientation()
        self._release()
        self.clear_selection()

    # ------------------------------------------------------------------
    # Gesture handlers
    # ------------------------------------------------------------------

    def _on_fist(self, cursor: Tuple[float, float], now: float, intents: List[Intent]) -> None:
        cfg = self._config
        self.pinch_fired = False
        self.open_fired = False

        if self.mode == InteractionMode.WHOLE:
            if self.fist_hold_start is None:
                self.fist_hold_start = now
            if now - self.fist_hold_start >= cfg.escalation_hold:
                self.escalated = True
        else:
            self.fist_hold_start = None
            self.escalated = False

        if not self.fist_action_fired:
            self.fist_action_fired = True
            if self.mode == InteractionMode.FOCUSED:
                self._transition(InteractionMode.SCATTERED, intents, ResetFocus())
                self.is_dragging = False
            elif self.mode == InteractionMode.SCATTERED:
                self._transition(InteractionMode.WHOLE, intents, Implode())
                self.is_dragging = False
                self.clear_selection()
            else:
                self._anchor = cursor
                self.is_dragging = True
                self.global_motion.stop()
                self.guard.reset()
        elif self.mode == InteractionMode.WHOLE and self.is_dragging:
            sensitivity = cfg.escalated_sensitivity if self.escalated else cfg.fist_sensitivity
            self._consume_whole_rotation(cursor, sensitivity)

    def _on_open(self, intents: List[Intent]) -> None:
        self.is_dragging = False
        self.pinch_fired = False
        self.fist_action_fired = False
        self.fist_hold_start = None
        self.escalated = False
        self.guard.reset()

        rising = not self.open_fired
        self.open_fired = True

        if self.mode == InteractionMode.WHOLE:
            self._transition(InteractionMode.SCATTERED, intents, Explode())
        elif rising and self.mode == InteractionMode.SCATTERED and self.selected_part:
            intents.append(Focus(self.selected_part))
            self.set_mode(InteractionMode.FOCUSED)

    def _on_pinch(self, cursor: Tuple[float, float], intents: List[Intent]) -> None:
        cfg = self._config
        self.is_dragging = False
        self.fist_action_fired = False
        self.open_fired = False
        self.fist_hold_start = None
        self.escalated = False

        rising = not self.pinch_fired
        self.pinch_fired = True

        if self.mode == InteractionMode.SCATTERED:
            if rising:
                ndc_x, ndc_y = cursor_to_ndc(cursor)
                intents.append(RaycastAt(ndc_x, ndc_y))
        elif self.mode == InteractionMode.WHOLE:
            if rising:
                self._anchor = cursor
                self.global_motion.stop()
                self.guard.reset()
            else:
                self._consume_whole_rotation(cursor, cfg.escalated_sensitivity)
        else:
            if rising or self._anchor is None:
                self._anchor = cursor
                self.local_motion.stop()
            else:
                dx = cursor[0] - self._anchor[0]
                dy = cursor[1] - self._anchor[1]
                self.local_motion.set_velocity(
                    yaw=dx * math.pi * cfg.focus_sensitivity,
                    pitch=dy * math.pi * cfg.focus_sensitivity,
                )
                self._anchor = cursor

    def _release(self) -> None:
        self.is_dragging = False
        self.pinch_fired = False
        self.fist_action_fired = False
        self.open_fired = False
        self.fist_hold_start = None
        self.escalated = False
        self.guard.reset()

    def _transition(self, mode: InteractionMode, intents: List[Intent], intent: Intent) -> None:
        logger.debug("mode %s -> %s (%s)", self.mode.name, mode.name, type(intent).__name__)
        intents.append(intent)
        self.mode = mode

    # ------------------------------------------------------------------
    # Cursor mapping
    # ------------------------------------------------------------------

    def _consume_whole_rotation(self, cursor: Tuple[float, float], sensitivity: float) -> None:
        """Turn a drag step into global velocity unless the sample looks unreliable."""
        cfg = self._config
        guard = self.guard
        x, y = cursor
        edge = cfg.edge_guard_ratio

        if x < edge or x > 1.0 - edge or y < edge or y > 1.0 - edge:
            guard.locked = True
            guard.reentry_frames = 0
            guard.cooldown_frames = cfg.edge_cooldown_frames
            self._anchor = cursor
            self.global_motion.stop()
            return

        if guard.locked:
            guard.reentry_frames += 1
            self._anchor = cursor
            if guard.reentry_frames >= cfg.reentry_frames_required:
                guard.locked = False
                guard.reentry_frames = 0
            return

        if guard.cooldown_frames > 0:
            guard.cooldown_frames -= 1
            self._anchor = cursor
            return

        if self._anchor is None:
            self._anchor = cursor
            return

        dx = x - self._anchor[0]
        dy = y - self._anchor[1]

        # Tracking glitch: drop the jump instead of snapping the model
        if abs(dx) > cfg.delta_clamp or abs(dy) > cfg.delta_clamp:
            self._anchor = cursor
            guard.cooldown_frames = cfg.glitch_cooldown_frames
            return

        self.global_motion.set_velocity(
            yaw=dx * math.pi * sensitivity,
            pitch=dy * math.pi * sensitivity,
        )
        self._anchor = cursor

    def _edge_pan(self, cursor: Tuple[float, float]) -> Optional[PanVector]:
        cfg = self._config
        dx = cursor[0] - 0.5
        dy = cursor[1] - 0.5
        dist = math.hypot(dx, dy)
        if dist <= cfg.pan_deadzone:
            return None

        dir_x = dx / dist
        dir_y = dy / dist
        overflow = dist - cfg.pan_deadzone
        self.global_motion.set_velocity(
            yaw=dir_x * overflow * cfg.pan_speed,
            pitch=dir_y * overflow * cfg.pan_speed,
        )
        return PanVector(dir_x, dir_y, overflow)
