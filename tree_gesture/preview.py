"""
OpenCV status window: shows the published control state and doubles as the
manual override panel.
"""
import cv2
import numpy as np

from .config import Cfg
from .types import ControlSnapshot, StatusLabel

STATUS_COLORS = {
    StatusLabel.FORMED: (80, 200, 80),
    StatusLabel.TRANSITIONING: (0, 215, 255),
    StatusLabel.CHAOS: (60, 60, 220),
}
GOLD = (0, 215, 255)
WHITE = (255, 255, 255)
GREY = (90, 90, 90)

OVERRIDE_STEP = 0.1


class StatusPreview:
    """
    Draws progress bars, status and hand indicator for each snapshot.

    Keys:
    - f: form the tree (target 0)
    - c: scatter the tree (target 1)
    - [ / ]: nudge the target down / up
    - q: stop the control loop
    """

    def __init__(self, cfg: Cfg, control):
        """
        Initialize the preview.

        Args:
            cfg: Configuration (display section is used)
            control: ControlLoop receiving overrides and stop requests
        """
        self.cfg = cfg
        self.control = control
        self.window_name = cfg.display.window_name
        self.width = cfg.display.width
        self.height = cfg.display.height

    def render(self, snapshot: ControlSnapshot) -> None:
        """Draw the snapshot and process keyboard input."""
        frame = self.draw(snapshot)
        cv2.imshow(self.window_name, frame)
        self.handle_key(cv2.waitKey(1) & 0xFF, snapshot)

    def draw(self, snapshot: ControlSnapshot) -> np.ndarray:
        """Render the snapshot onto a fresh canvas."""
        frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)

        cv2.putText(frame, snapshot.status.description, (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, STATUS_COLORS[snapshot.status], 2)

        hand_text = "Hand: detected" if snapshot.hand_active else "Hand: none"
        hand_color = (0, 255, 0) if snapshot.hand_active else (0, 0, 255)
        cv2.putText(frame, hand_text, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.5, hand_color, 1)

        bars = [("target", snapshot.progress_target)]
        p = snapshot.progress
        bars += [("foliage", p.foliage), ("ornaments", p.ornaments),
                 ("gifts", p.gifts), ("photos", p.photos)]

        bar_left, bar_right = 110, self.width - 20
        for i, (label, value) in enumerate(bars):
            y = 85 + i * 25
            cv2.putText(frame, label, (10, y + 12), cv2.FONT_HERSHEY_SIMPLEX, 0.45, WHITE, 1)
            cv2.rectangle(frame, (bar_left, y), (bar_right, y + 14), GREY, 1)
            fill = bar_left + int((bar_right - bar_left) * value)
            cv2.rectangle(frame, (bar_left, y), (fill, y + 14), GOLD, -1)

        # Rotation offset as a marker around the center line
        y = 85 + len(bars) * 25 + 10
        center = (bar_left + bar_right) // 2
        cv2.putText(frame, "rotation", (10, y + 5), cv2.FONT_HERSHEY_SIMPLEX, 0.45, WHITE, 1)
        cv2.line(frame, (bar_left, y), (bar_right, y), GREY, 1)
        marker = center + int((bar_right - bar_left) / 2 * snapshot.rotation_offset)
        cv2.circle(frame, (marker, y), 6, GOLD, -1)

        cv2.putText(frame, "f: form  c: chaos  [ ]: nudge  q: quit", (10, self.height - 10),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.4, WHITE, 1)
        return frame

    def handle_key(self, key: int, snapshot: ControlSnapshot) -> None:
        """Translate a key press into a control request."""
        if key == ord('q'):
            self.control.stop()
        elif key == ord('f'):
            self.control.request_target(0.0)
        elif key == ord('c'):
            self.control.request_target(1.0)
        elif key == ord('['):
            self.control.request_target(snapshot.progress_target - OVERRIDE_STEP)
        elif key == ord(']'):
            self.control.request_target(snapshot.progress_target + OVERRIDE_STEP)

    def close(self) -> None:
        """Close the preview window."""
        cv2.destroyWindow(self.window_name)
