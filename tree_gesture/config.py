"""
Configuration management for the gesture tree control pipeline.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    flip_horizontal: bool


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    model_complexity: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class GestureConfig:
    """Open palm / fist dead-band and rotation landmark."""
    open_threshold: float
    fist_threshold: float
    rotation_landmark: int


@dataclass
class SmoothingConfig:
    """Per-channel exponential smoothing coefficients."""
    foliage: float
    ornaments: float
    gifts: float
    photos: float


@dataclass
class LoopConfig:
    """Control loop cadence."""
    tick_hz: float


@dataclass
class DisplayConfig:
    """Status preview window settings."""
    show_preview: bool
    window_name: str
    width: int
    height: int


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    gesture: GestureConfig
    smoothing: SmoothingConfig
    loop: LoopConfig
    display: DisplayConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings

    Raises:
        FileNotFoundError: If the config file does not exist
        ValueError: If a value is outside its allowed range
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    cfg = _dict_to_config(data)
    validate_config(cfg)
    return cfg


def validate_config(cfg: Cfg) -> None:
    """Reject settings that would break the control pipeline's guarantees."""
    gesture = cfg.gesture
    if not 0.0 < gesture.fist_threshold < gesture.open_threshold:
        raise ValueError(
            f"gesture thresholds must satisfy 0 < fist ({gesture.fist_threshold}) "
            f"< open ({gesture.open_threshold})"
        )
    if not 0 <= gesture.rotation_landmark < 21:
        raise ValueError(f"rotation_landmark out of range: {gesture.rotation_landmark}")

    for name in ("foliage", "ornaments", "gifts", "photos"):
        k = getattr(cfg.smoothing, name)
        if not 0.0 < k < 1.0:
            raise ValueError(f"smoothing.{name} must be in (0, 1), got {k}")

    if cfg.loop.tick_hz <= 0:
        raise ValueError(f"loop.tick_hz must be positive, got {cfg.loop.tick_hz}")


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        flip_horizontal=camera_data.get('flip_horizontal', False)
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        model_complexity=mp_data['model_complexity'],
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    gesture_data = data['gesture']
    gesture = GestureConfig(
        open_threshold=float(gesture_data['open_threshold']),
        fist_threshold=float(gesture_data['fist_threshold']),
        rotation_landmark=gesture_data['rotation_landmark']
    )

    smoothing_data = data['smoothing']
    smoothing = SmoothingConfig(
        foliage=float(smoothing_data['foliage']),
        ornaments=float(smoothing_data['ornaments']),
        gifts=float(smoothing_data['gifts']),
        photos=float(smoothing_data['photos'])
    )

    loop = LoopConfig(tick_hz=float(data['loop']['tick_hz']))

    display_data = data['display']
    display = DisplayConfig(
        show_preview=display_data['show_preview'],
        window_name=display_data['window_name'],
        width=display_data['width'],
        height=display_data['height']
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        gesture=gesture,
        smoothing=smoothing,
        loop=loop,
        display=display
    )
