"""
Test cases for the status preview and the mock renderer.
"""
import unittest
from unittest import mock
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tree_gesture.preview import StatusPreview
from tree_gesture.renderer_mock import DEFAULT_HISTORY, MockRenderer
from tree_gesture.types import ControlSnapshot, ProgressVector, SnapshotSinkProto, StatusLabel
from tree_gesture.config import load_config


def make_snapshot(target: float = 0.5, status: StatusLabel = StatusLabel.TRANSITIONING,
                  hand_active: bool = True, tick: int = 1) -> ControlSnapshot:
    return ControlSnapshot(
        tick=tick,
        progress_target=target,
        progress=ProgressVector(foliage=0.4, ornaments=0.3, gifts=0.1, photos=0.35),
        rotation_offset=-0.5,
        hand_active=hand_active,
        status=status
    )


class TestStatusPreview(unittest.TestCase):

    def setUp(self):
        self.cfg = load_config()
        self.control = mock.Mock()
        self.preview = StatusPreview(self.cfg, self.control)

    def test_is_snapshot_sink(self):
        self.assertIsInstance(self.preview, SnapshotSinkProto)

    def test_draw_canvas(self):
        frame = self.preview.draw(make_snapshot())
        self.assertEqual(frame.shape, (self.cfg.display.height, self.cfg.display.width, 3))
        self.assertGreater(frame.sum(), 0)

    def test_keys_map_to_overrides(self):
        snapshot = make_snapshot(target=0.5)

        self.preview.handle_key(ord('f'), snapshot)
        self.control.request_target.assert_called_with(0.0)

        self.preview.handle_key(ord('c'), snapshot)
        self.control.request_target.assert_called_with(1.0)

        self.preview.handle_key(ord(']'), snapshot)
        self.assertAlmostEqual(self.control.request_target.call_args[0][0], 0.6)

        self.preview.handle_key(ord('['), snapshot)
        self.assertAlmostEqual(self.control.request_target.call_args[0][0], 0.4)

    def test_quit_key_stops_loop(self):
        self.preview.handle_key(ord('q'), make_snapshot())
        self.control.stop.assert_called_once()

    def test_no_key_does_nothing(self):
        self.preview.handle_key(255, make_snapshot())
        self.control.request_target.assert_not_called()
        self.control.stop.assert_not_called()


class TestMockRenderer(unittest.TestCase):

    def test_records_frames(self):
        renderer = MockRenderer(verbose=False)
        renderer.render(make_snapshot(tick=1))
        renderer.render(make_snapshot(tick=2))
        self.assertEqual(renderer.frame_count, 2)

        renderer.reset()
        self.assertEqual(renderer.frame_count, 0)

    def test_history_is_bounded(self):
        renderer = MockRenderer(verbose=False, history=600)
        for tick in range(1, 3601):
            renderer.render(make_snapshot(tick=tick))

        self.assertEqual(len(renderer.frames), 600)
        self.assertEqual(renderer.frame_count, 3600)
        self.assertEqual(renderer.frames[0].tick, 3001)
        self.assertEqual(renderer.frames[-1].tick, 3600)

    def test_default_history_is_bounded(self):
        renderer = MockRenderer(verbose=False)
        for tick in range(1, DEFAULT_HISTORY + 11):
            renderer.render(make_snapshot(tick=tick))
        self.assertEqual(len(renderer.frames), DEFAULT_HISTORY)
        self.assertEqual(renderer.frame_count, DEFAULT_HISTORY + 10)

    def test_prints_only_on_change(self):
        renderer = MockRenderer()
        with mock.patch("builtins.print") as printed:
            renderer.render(make_snapshot(tick=1))
            renderer.render(make_snapshot(tick=2))
            renderer.render(make_snapshot(tick=3, hand_active=False))
            renderer.render(make_snapshot(tick=4, target=1.0, status=StatusLabel.CHAOS,
                                          hand_active=False))
        self.assertEqual(printed.call_count, 3)


if __name__ == '__main__':
    unittest.main()
