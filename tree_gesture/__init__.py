"""
Gesture Tree Control

A Python service that reads webcam frames, detects hand landmarks using MediaPipe,
and turns open palm / fist gestures into smoothed progress values that drive
an interactive 3D tree between its FORMED and CHAOS states.
"""

__version__ = "0.1.0"

from .types import (
    ControlSnapshot,
    GestureRegime,
    HandPose,
    PoseSourceProto,
    ProgressVector,
    SnapshotSinkProto,
    StatusLabel,
)
from .config import load_config, Cfg
from .gestures import GestureClassifier, RotationMapper, classify_spread, offset_from_x
from .progress import ProgressFilterBank
from .pose_source import CameraPoseSource, NullPoseSource, PoseSourceUnavailable
from .control_loop import ControlLoop, status_for_target
from .renderer_mock import MockRenderer

__all__ = [
    "ControlSnapshot",
    "GestureRegime",
    "HandPose",
    "PoseSourceProto",
    "ProgressVector",
    "SnapshotSinkProto",
    "StatusLabel",
    "load_config",
    "Cfg",
    "GestureClassifier",
    "RotationMapper",
    "classify_spread",
    "offset_from_x",
    "ProgressFilterBank",
    "CameraPoseSource",
    "NullPoseSource",
    "PoseSourceUnavailable",
    "ControlLoop",
    "status_for_target",
    "MockRenderer",
]
