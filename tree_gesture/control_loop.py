"""
Control loop that owns the tree's progress state.

Pose samples and manual override requests may arrive from any thread. They are
parked in a small inbox and applied by whichever thread calls tick(), so all
control state has a single writer. Every tick advances the smoothing filters
and publishes an immutable snapshot to the subscribed sinks.
"""
import asyncio
import logging
import math
import threading
from typing import Any, List, Optional, Set, Tuple

from .config import Cfg
from .gestures import GestureClassifier, RotationMapper
from .pose_source import NullPoseSource, PoseSourceUnavailable
from .progress import ProgressFilterBank
from .types import (
    ControlSnapshot,
    HandPose,
    PoseSourceProto,
    SnapshotSinkProto,
    StatusLabel,
)

logger = logging.getLogger(__name__)

DEFAULT_TICK_HZ = 60.0

POSE = "pose"
TARGET = "target"

_EMPTY = object()


def status_for_target(target: float) -> StatusLabel:
    """Derive the tree state from the progress target (strict bounds)."""
    if target < 0.1:
        return StatusLabel.FORMED
    if target > 0.9:
        return StatusLabel.CHAOS
    return StatusLabel.TRANSITIONING


class ControlInbox:
    """
    Latest-value slots for pose samples and override requests.

    Each slot keeps only its most recent value; older pending values are
    dropped. drain() returns the pending events in arrival order so a later
    override beats an earlier pose and vice versa.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._seq = 0
        self._slots = {POSE: (_EMPTY, 0), TARGET: (_EMPTY, 0)}
        self.dropped_poses = 0

    def put_pose(self, landmarks: Optional[HandPose]) -> None:
        self._put(POSE, landmarks)

    def put_target(self, value: float) -> None:
        self._put(TARGET, value)

    def _put(self, kind: str, value: Any) -> None:
        with self._lock:
            if kind == POSE and self._slots[POSE][0] is not _EMPTY:
                self.dropped_poses += 1
            self._seq += 1
            self._slots[kind] = (value, self._seq)

    def drain(self) -> List[Tuple[str, Any]]:
        """Take every pending event, oldest first."""
        with self._lock:
            pending = [(seq, kind, value)
                       for kind, (value, seq) in self._slots.items()
                       if value is not _EMPTY]
            self._slots = {POSE: (_EMPTY, 0), TARGET: (_EMPTY, 0)}
        pending.sort(key=lambda item: item[0])
        return [(kind, value) for _, kind, value in pending]


class ControlLoop:
    """
    Single owner of progress target, progress channels, rotation and presence.

    Runtime behavior:
    - start(): subscribes to the pose source; falls back to manual-only mode if
      the source is unavailable.
    - tick(): applies pending input, advances the filters, publishes a snapshot.
    - run(): ticks at a steady rate until stop() is called.
    - stop(): idempotent; halts ticking and detaches from the pose source.
    """

    def __init__(self, cfg: Optional[Cfg] = None,
                 source: Optional[PoseSourceProto] = None):
        self.cfg = cfg
        self.classifier = GestureClassifier(cfg)
        self.rotation = RotationMapper(cfg)
        self.filters = ProgressFilterBank(cfg)
        self.inbox = ControlInbox()

        self.source: PoseSourceProto = source if source is not None else NullPoseSource()
        self.gesture_available = source is not None
        self.sinks: List[SnapshotSinkProto] = []
        self._failed_sinks: Set[int] = set()

        self.tick_hz = cfg.loop.tick_hz if cfg is not None else DEFAULT_TICK_HZ

        self.progress_target = 0.0
        self.rotation_offset = 0.0
        self.hand_active = False
        self.tick_count = 0
        self.status = status_for_target(self.progress_target)

        self._started = False
        self._stopped = False
        self._snapshot = self._make_snapshot()

    @property
    def snapshot(self) -> ControlSnapshot:
        """Most recently published snapshot."""
        return self._snapshot

    @property
    def running(self) -> bool:
        return self._started and not self._stopped

    def subscribe(self, sink: SnapshotSinkProto) -> None:
        """Register a consumer that receives every published snapshot."""
        self.sinks.append(sink)

    def start(self) -> None:
        """Attach to the pose source and start it."""
        if self._started or self._stopped:
            return
        self._started = True

        self.source.on_sample(self.submit_pose)
        try:
            self.source.start()
        except PoseSourceUnavailable as exc:
            logger.warning(f"Gesture input unavailable, manual control only: {exc}")
            self.source.on_sample(None)
            self.source = NullPoseSource()
            self.gesture_available = False

    def stop(self) -> None:
        """Halt future ticks and detach from the pose source. Safe to repeat."""
        if self._stopped:
            return
        self._stopped = True

        self.source.on_sample(None)
        try:
            self.source.stop()
        except Exception as exc:
            # Device release is best effort; control state is already final
            logger.warning(f"Pose source did not stop cleanly: {exc}")
        logger.info(f"Control loop stopped after {self.tick_count} ticks")

    # ------------------------------------------------------------------
    # Input from other threads
    # ------------------------------------------------------------------
    def submit_pose(self, landmarks: Optional[HandPose]) -> None:
        """Pose source callback. Applied on the next tick."""
        if not self._stopped:
            self.inbox.put_pose(landmarks)

    def request_target(self, value: float) -> None:
        """Manual override from a UI collaborator. Applied on the next tick."""
        if not self._stopped:
            self.inbox.put_target(value)

    # ------------------------------------------------------------------
    # Owner-thread operations
    # ------------------------------------------------------------------
    def handle_pose(self, landmarks: Optional[HandPose]) -> None:
        """Classify a pose and update presence, target and rotation."""
        result = self.classifier.update(landmarks, self.progress_target)
        self.hand_active = result.hand_present
        self._set_target(result.target)

        offset = self.rotation.update(landmarks)
        if offset is not None:
            self.rotation_offset = offset

    def set_target(self, value: float) -> None:
        """Set the progress target directly, bypassing the classifier."""
        try:
            value = float(value)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring non-numeric progress target {value!r}")
            return
        if not math.isfinite(value):
            logger.warning(f"Ignoring non-finite progress target {value!r}")
            return
        self._set_target(max(0.0, min(1.0, value)))

    def tick(self) -> ControlSnapshot:
        """
        Run one scheduling step.

        Never waits for input: with nothing pending, the filters still relax
        toward the current target.

        Returns:
            The published snapshot (the previous one if the loop is stopped)
        """
        if self._stopped:
            return self._snapshot

        for kind, value in self.inbox.drain():
            if kind == POSE:
                self.handle_pose(value)
            else:
                self.set_target(value)

        self.filters.step(self.progress_target)
        self.tick_count += 1

        self._snapshot = self._make_snapshot()
        for sink in list(self.sinks):
            try:
                sink.render(self._snapshot)
            except Exception as exc:
                # Logged once per sink; ticking continues
                if id(sink) not in self._failed_sinks:
                    self._failed_sinks.add(id(sink))
                    logger.warning(f"Snapshot sink {type(sink).__name__} failed: {exc}")
        return self._snapshot

    async def run(self) -> None:
        """Tick at tick_hz until stopped."""
        self.start()
        loop = asyncio.get_running_loop()
        interval = 1.0 / self.tick_hz
        next_tick = loop.time()

        try:
            while not self._stopped:
                self.tick()

                next_tick += interval
                delay = next_tick - loop.time()
                if delay < 0:
                    # Fell behind; resync instead of bursting ticks
                    next_tick = loop.time()
                    delay = 0.0
                await asyncio.sleep(delay)
        finally:
            self.stop()

    def _set_target(self, value: float) -> None:
        self.progress_target = value
        status = status_for_target(value)
        if status is not self.status:
            self.status = status
            logger.info(status.description)

    def _make_snapshot(self) -> ControlSnapshot:
        return ControlSnapshot(
            tick=self.tick_count,
            progress_target=self.progress_target,
            progress=self.filters.vector(),
            rotation_offset=self.rotation_offset,
            hand_active=self.hand_active,
            status=self.status
        )
