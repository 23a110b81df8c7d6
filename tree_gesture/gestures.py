"""
Gesture recognition classes that convert hand poses into tree control signals.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from .config import Cfg
from .landmarks import MIDDLE_FINGER_BASE, as_array, fingertip_spread
from .types import GestureRegime, HandPose

logger = logging.getLogger(__name__)

OPEN_THRESHOLD = 0.35
FIST_THRESHOLD = 0.20


@dataclass
class Classification:
    """Outcome of classifying one pose sample."""
    hand_present: bool
    regime: Optional[GestureRegime]  # None when no hand
    target: float  # progress target after applying the regime


def classify_spread(avg_dist: float,
                    open_threshold: float = OPEN_THRESHOLD,
                    fist_threshold: float = FIST_THRESHOLD) -> GestureRegime:
    """
    Classify the mean wrist-to-fingertip distance.

    The band between the two thresholds is a dead zone: noisy readings close
    to a single cut-off would otherwise flip the target every frame.
    Both comparisons are strict, so the thresholds themselves are ambiguous.
    """
    if avg_dist > open_threshold:
        return GestureRegime.OPEN
    if avg_dist < fist_threshold:
        return GestureRegime.FIST
    return GestureRegime.AMBIGUOUS


def target_for_regime(regime: GestureRegime, current_target: float) -> float:
    """Open palm scatters the tree (1.0), a fist forms it (0.0)."""
    if regime is GestureRegime.OPEN:
        return 1.0
    if regime is GestureRegime.FIST:
        return 0.0
    return current_target


def offset_from_x(x: float) -> float:
    """Map a normalized x coordinate onto [-1, 1], 0.5 being centered."""
    return max(-1.0, min(1.0, (x - 0.5) * 2.0))


class GestureClassifier:
    """
    Turns open palm / fist hand shapes into a progress target.

    Features:
    - Two-threshold dead band against landmark jitter
    - Missing or malformed poses never move the target
    """

    def __init__(self, cfg: Optional[Cfg] = None):
        """Initialize classifier thresholds from configuration."""
        if cfg is not None:
            self.open_threshold = cfg.gesture.open_threshold
            self.fist_threshold = cfg.gesture.fist_threshold
        else:
            self.open_threshold = OPEN_THRESHOLD
            self.fist_threshold = FIST_THRESHOLD

    def update(self, landmarks: Optional[HandPose], current_target: float) -> Classification:
        """
        Classify a pose sample.

        Args:
            landmarks: Hand landmarks (None if no hand detected)
            current_target: Progress target before this sample

        Returns:
            Classification with presence, regime and the resulting target
        """
        points = as_array(landmarks)
        if points is None:
            if landmarks is not None:
                logger.debug("Skipping malformed hand pose sample")
            return Classification(hand_present=False, regime=None, target=current_target)

        regime = classify_spread(fingertip_spread(points),
                                 self.open_threshold, self.fist_threshold)
        return Classification(
            hand_present=True,
            regime=regime,
            target=target_for_regime(regime, current_target)
        )


class RotationMapper:
    """Maps horizontal hand position onto a tree rotation offset."""

    def __init__(self, cfg: Optional[Cfg] = None):
        self.landmark = cfg.gesture.rotation_landmark if cfg is not None else MIDDLE_FINGER_BASE

    def update(self, landmarks: Optional[HandPose]) -> Optional[float]:
        """
        Compute the rotation offset for a pose.

        Returns:
            Offset in [-1, 1], or None when there is no usable pose
        """
        points = as_array(landmarks)
        if points is None:
            return None
        return offset_from_x(float(points[self.landmark][0]))
