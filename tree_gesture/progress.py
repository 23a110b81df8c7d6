"""
Exponential smoothing of the progress target into per-part channels.
"""
from typing import Optional

from .config import Cfg
from .types import ProgressVector

# Fraction of the remaining distance each channel covers per tick.
# Settling order: foliage > photos > ornaments > gifts.
DEFAULT_COEFFICIENTS = {
    "foliage": 0.10,
    "ornaments": 0.05,
    "gifts": 0.02,
    "photos": 0.06,
}


class ProgressFilterBank:
    """
    Four independent exponential smoothers chasing one shared target.

    Each tick moves every channel by value += (target - value) * k. The
    channels are not clamped: with in-range start values and targets the
    recurrence cannot overshoot.
    """

    CHANNELS = ("foliage", "ornaments", "gifts", "photos")

    def __init__(self, cfg: Optional[Cfg] = None, initial: float = 0.0):
        """Initialize all channels at the same start value."""
        if cfg is not None:
            self.coefficients = {name: getattr(cfg.smoothing, name) for name in self.CHANNELS}
        else:
            self.coefficients = dict(DEFAULT_COEFFICIENTS)
        self.values = {name: initial for name in self.CHANNELS}

    def step(self, target: float) -> ProgressVector:
        """
        Advance every channel one tick toward the target.

        Runs unconditionally, even when the target has not changed, so the
        channels keep relaxing between pose samples.

        Args:
            target: Current progress target in [0, 1]

        Returns:
            The channel values after this tick
        """
        for name, k in self.coefficients.items():
            value = self.values[name]
            self.values[name] = value + (target - value) * k
        return self.vector()

    def vector(self) -> ProgressVector:
        """Immutable copy of the current channel values."""
        return ProgressVector(**self.values)
