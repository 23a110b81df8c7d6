"""
Landmark sources that push hand poses into the control loop.
"""
import logging
import threading
from typing import Optional

import cv2

from .config import Cfg
from .types import PoseCallback

logger = logging.getLogger(__name__)


class PoseSourceUnavailable(RuntimeError):
    """Raised when the camera or the hand landmark engine cannot be started."""


class NullPoseSource:
    """Pose source used when gesture input is unavailable. Never delivers."""

    def __init__(self):
        self.callback: Optional[PoseCallback] = None

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def on_sample(self, callback: Optional[PoseCallback]) -> None:
        self.callback = callback


class CameraPoseSource:
    """
    Reads webcam frames on a background thread and runs MediaPipe Hands.

    Every processed frame produces exactly one callback: the landmarks of the
    first detected hand, or None. Callbacks run on the capture thread, so the
    receiver must hand them over to its own thread (see ControlLoop.submit_pose).
    """

    def __init__(self, cfg: Cfg):
        """Initialize the source. Nothing is opened until start()."""
        self.cfg = cfg
        self._callback: Optional[PoseCallback] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def on_sample(self, callback: Optional[PoseCallback]) -> None:
        """Register the sample callback, or unsubscribe with None."""
        self._callback = callback

    def start(self) -> None:
        """
        Open the camera and the landmark model, then start capturing.

        Raises:
            PoseSourceUnavailable: If the model fails to load or the camera cannot be opened
        """
        if self._thread is not None and self._thread.is_alive():
            return

        from .landmarks import HandsTracker

        try:
            tracker = HandsTracker(
                max_num_hands=self.cfg.mediapipe.max_num_hands,
                model_complexity=self.cfg.mediapipe.model_complexity,
                min_detection_conf=self.cfg.mediapipe.min_detection_confidence,
                min_tracking_conf=self.cfg.mediapipe.min_tracking_confidence
            )
        except (ImportError, RuntimeError, AttributeError) as exc:
            raise PoseSourceUnavailable(f"Hand landmark engine failed to load: {exc}") from exc

        cap = cv2.VideoCapture(self.cfg.camera.index)
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.cfg.camera.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.cfg.camera.height)

        if not cap.isOpened():
            tracker.close()
            raise PoseSourceUnavailable(f"Failed to open camera {self.cfg.camera.index}")

        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._capture_loop,
            args=(cap, tracker, self._stop_event),
            name="camera_pose_source",
            daemon=True
        )
        self._thread.start()
        logger.info(f"Camera {self.cfg.camera.index} opened for hand tracking")

    def stop(self) -> None:
        """
        Ask the capture thread to finish.

        Does not wait: the thread releases the camera itself once its current
        frame is done.
        """
        self._callback = None
        self._stop_event.set()
        self._thread = None

    def _capture_loop(self, cap, tracker, stop_event: threading.Event) -> None:
        """Capture thread body."""
        try:
            while not stop_event.is_set():
                ret, frame = cap.read()
                if not ret:
                    logger.warning("Camera stopped delivering frames; gesture input disabled")
                    break

                if self.cfg.camera.flip_horizontal:
                    frame = cv2.flip(frame, 1)

                try:
                    landmarks = tracker.process(frame)
                except Exception as exc:
                    logger.warning(f"Hand landmark engine failed: {exc}; gesture input disabled")
                    break

                callback = self._callback
                if callback is not None and not stop_event.is_set():
                    callback(landmarks)
        finally:
            cap.release()
            tracker.close()
            logger.info("Camera released")
