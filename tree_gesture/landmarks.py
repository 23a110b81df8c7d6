"""
Hand landmark detection and landmark geometry using MediaPipe.
"""
import cv2
import numpy as np
from typing import Optional, List, Tuple

from .types import HandPose

NUM_LANDMARKS = 21
WRIST = 0
MIDDLE_FINGER_BASE = 9
# Index, middle, ring, pinky tips
FINGERTIPS = (8, 12, 16, 20)


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, model_complexity: int = 1,
                 min_detection_conf: float = 0.5, min_tracking_conf: float = 0.5):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            model_complexity: Complexity of the hand landmark model (0-1)
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        # Load failures surface as PoseSourceUnavailable in CameraPoseSource.start()
        import mediapipe as mp

        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> Optional[List[Tuple[float, float]]]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            List of 21 (x, y) coordinates in [0..1] range, or None if no hand detected
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        frame_rgb.flags.writeable = False

        results = self.hands.process(frame_rgb)

        if results.multi_hand_landmarks:
            # Only the first hand drives the tree
            hand_landmarks = results.multi_hand_landmarks[0]
            return [(landmark.x, landmark.y) for landmark in hand_landmarks.landmark]

        return None

    def close(self) -> None:
        """Release the MediaPipe graph."""
        if self.hands:
            self.hands.close()
            self.hands = None


def as_array(landmarks: Optional[HandPose]) -> Optional[np.ndarray]:
    """
    Convert landmarks to a (21, 2) float array.

    Args:
        landmarks: Hand landmarks, possibly None or malformed

    Returns:
        Array of (x, y) rows, or None if the pose is missing or malformed
    """
    if landmarks is None:
        return None
    try:
        points = np.asarray(landmarks, dtype=float)
    except (TypeError, ValueError):
        return None

    if points.ndim != 2 or points.shape[0] < NUM_LANDMARKS or points.shape[1] < 2:
        return None

    points = points[:NUM_LANDMARKS, :2]
    if not np.isfinite(points).all():
        return None
    return points


def fingertip_spread(points: np.ndarray) -> float:
    """
    Average distance from the wrist to the four fingertips.

    Large for an open palm, small for a fist.

    Args:
        points: (21, 2) landmark array from as_array()

    Returns:
        Mean Euclidean distance in normalized image units
    """
    wrist = points[WRIST]
    tips = points[list(FINGERTIPS)]
    distances = np.hypot(tips[:, 0] - wrist[0], tips[:, 1] - wrist[1])
    return float(distances.mean())
