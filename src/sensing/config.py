"""
Config loader for AirScope.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 1
    min_detection_confidence: float = 0.6
    min_tracking_confidence: float = 0.6


@dataclass
class InputConfig:
    mode: str = "webcam"      # "webcam" or "mock"
    flip_y: bool = False      # Invert y before processing (upside-down cameras)
    mock_fps: int = 20        # Sample rate of the synthetic hand source


@dataclass
class SmoothingConfig:
    smoothing_alpha: float = 0.2   # Fixed EMA weight when adaptive is off
    adaptive: bool = True
    min_alpha: float = 0.16        # Near-still hand: heavy smoothing
    max_alpha: float = 0.5         # Fast hand: low latency
    velocity_low: float = 0.003    # Index-tip speed (per frame) mapped to min_alpha
    velocity_high: float = 0.03    # Index-tip speed mapped to max_alpha


@dataclass
class ClassifierConfig:
    # Pinch (thumb tip to index tip)
    pinch_threshold: float = 0.055        # Raw distance, used when dynamic_pinch is off
    dynamic_pinch: bool = True            # Normalize by wrist -> index base
    pinch_ratio_threshold: float = 0.34
    pinch_open_baseline_count: int = 2    # Fingers that must look open before a fresh pinch

    # Open hand (enter / exit)
    open_enter_extension: float = 0.035
    open_exit_extension: float = 0.02
    open_enter_y_gap: float = -0.065
    open_exit_y_gap: float = -0.045
    open_enter_count: int = 4
    open_exit_count: int = 3
    min_extended_fingers: int = 3

    # Fist (enter / exit)
    fist_enter_curl: float = -0.01
    fist_exit_curl: float = -0.004
    fist_enter_y_gap_abs: float = 0.065
    fist_exit_y_gap_abs: float = 0.08
    fist_enter_count: int = 4
    fist_exit_count: int = 3
    min_curled_fingers: int = 2

    # Thumb (tip to MCP distance)
    thumb_extended_enter: float = 0.05
    thumb_extended_exit: float = 0.04
    thumb_curled_enter: float = 0.065
    thumb_curled_exit: float = 0.075


@dataclass
class StabilizerConfig:
    vote_window: int = 5
    open_confirm_frames: int = 2   # OPEN streak needed to leave FIST/PINCH
    hold_frames: int = 1


@dataclass
class InteractionConfig:
    # Long-press escalation of FIST drag in WHOLE mode
    escalation_hold: float = 1.0           # Seconds
    fist_sensitivity: float = 1.5
    escalated_sensitivity: float = 1.9
    focus_sensitivity: float = 1.5

    # WHOLE drag edge guard
    edge_guard_ratio: float = 0.05
    reentry_frames_required: int = 3
    edge_cooldown_frames: int = 2
    glitch_cooldown_frames: int = 1
    delta_clamp: float = 0.03

    # Edge pan (SCATTERED)
    pan_deadzone: float = 0.35
    pan_speed: float = 0.15

    # Momentum
    damping: float = 0.92
    stop_threshold: float = 0.001
    rotation_epsilon: float = 0.0001

    # Magnetic cursor snap (NDC units)
    snap_radius: float = 0.15


@dataclass
class UIConfig:
    debug_overlay: bool = False


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    input: InputConfig = field(default_factory=InputConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    stabilizer: StabilizerConfig = field(default_factory=StabilizerConfig)
    interaction: InteractionConfig = field(default_factory=InteractionConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        input=_dict_to_dataclass(InputConfig, data.get('input')),
        smoothing=_dict_to_dataclass(SmoothingConfig, data.get('smoothing')),
        classifier=_dict_to_dataclass(ClassifierConfig, data.get('classifier')),
        stabilizer=_dict_to_dataclass(StabilizerConfig, data.get('stabilizer')),
        interaction=_dict_to_dataclass(InteractionConfig, data.get('interaction')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    )
