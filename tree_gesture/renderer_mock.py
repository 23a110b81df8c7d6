"""
Mock renderer implementation for running the control loop without a display.
"""
from collections import deque
from typing import Deque, Optional

from .types import ControlSnapshot, StatusLabel

# About ten seconds of history at 60 ticks per second
DEFAULT_HISTORY = 600


class MockRenderer:
    """Mock renderer that keeps recent snapshots and prints state changes."""

    def __init__(self, verbose: bool = True, history: int = DEFAULT_HISTORY):
        """Initialize the mock renderer."""
        self.verbose = verbose
        self.frames: Deque[ControlSnapshot] = deque(maxlen=history)
        self.frame_count = 0
        self.last_status: Optional[StatusLabel] = None
        self.last_hand_active: Optional[bool] = None

    def render(self, snapshot: ControlSnapshot) -> None:
        """Record the snapshot; print when the status or hand presence changes."""
        self.frames.append(snapshot)
        self.frame_count += 1

        if snapshot.status != self.last_status or snapshot.hand_active != self.last_hand_active:
            self.last_status = snapshot.status
            self.last_hand_active = snapshot.hand_active
            if self.verbose:
                p = snapshot.progress
                print(f"[MockRenderer] tick={snapshot.tick} {snapshot.status.description} "
                      f"hand={'yes' if snapshot.hand_active else 'no'} "
                      f"target={snapshot.progress_target:.2f} "
                      f"foliage={p.foliage:.2f} ornaments={p.ornaments:.2f} "
                      f"gifts={p.gifts:.2f} photos={p.photos:.2f} "
                      f"rotation={snapshot.rotation_offset:+.2f}")

    def reset(self) -> None:
        """Forget recorded snapshots, for testing."""
        self.frames.clear()
        self.frame_count = 0
        self.last_status = None
        self.last_hand_active = None
