"""
Type definitions for the gesture-driven tree control pipeline.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence, runtime_checkable


# 21 normalized landmarks, each at least (x, y) in [0..1]
HandPose = Sequence[Sequence[float]]

PoseCallback = Callable[[Optional[HandPose]], None]


class GestureRegime(Enum):
    """Hand shape implied by a single classification."""
    OPEN = "open"
    FIST = "fist"
    AMBIGUOUS = "ambiguous"


class StatusLabel(Enum):
    """Tree state derived from the progress target."""
    FORMED = "FORMED"
    TRANSITIONING = "TRANSITIONING"
    CHAOS = "CHAOS"

    @property
    def description(self) -> str:
        return _STATUS_TEXT[self]


_STATUS_TEXT = {
    StatusLabel.FORMED: "State: FORMED (Tree)",
    StatusLabel.TRANSITIONING: "State: TRANSITIONING...",
    StatusLabel.CHAOS: "State: CHAOS (Unleashed)",
}


@dataclass(frozen=True)
class ProgressVector:
    """Smoothed progress of each part of the tree."""
    foliage: float
    ornaments: float
    gifts: float
    photos: float


@dataclass(frozen=True)
class ControlSnapshot:
    """Read-only view of the control state published once per tick."""
    tick: int
    progress_target: float
    progress: ProgressVector
    rotation_offset: float  # [-1..1], hand x relative to frame center
    hand_active: bool
    status: StatusLabel


@runtime_checkable
class PoseSourceProto(Protocol):
    """Push-based feed of optional hand poses."""

    def start(self) -> None:
        """Begin delivering samples. Raises PoseSourceUnavailable on failure."""
        ...

    def stop(self) -> None:
        """Stop delivering samples. Must be safe to call more than once."""
        ...

    def on_sample(self, callback: Optional[PoseCallback]) -> None:
        """Register the sample callback, or unsubscribe with None."""
        ...


@runtime_checkable
class SnapshotSinkProto(Protocol):
    """Consumer of published control snapshots (renderer, status display)."""

    def render(self, snapshot: ControlSnapshot) -> None:
        ...
