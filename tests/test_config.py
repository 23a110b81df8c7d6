"""
Test cases for configuration loading and validation.
"""
import copy
import os
import tempfile
import unittest
import sys
from pathlib import Path

import yaml

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tree_gesture.config import DEFAULT_CONFIG_PATH, load_config

DEFAULT_CONFIG = Path(__file__).parent.parent / "tree_gesture" / "config.default.yaml"


class TestLoadConfig(unittest.TestCase):
    """Test YAML configuration loading."""

    def setUp(self):
        with open(DEFAULT_CONFIG, 'r') as f:
            self.data = yaml.safe_load(f)
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write_config(self, data) -> str:
        path = Path(self.tmpdir.name) / "config.yaml"
        with open(path, 'w') as f:
            yaml.safe_dump(data, f)
        return str(path)

    def test_default_values(self):
        cfg = load_config()

        self.assertEqual(cfg.gesture.open_threshold, 0.35)
        self.assertEqual(cfg.gesture.fist_threshold, 0.20)
        self.assertEqual(cfg.gesture.rotation_landmark, 9)
        self.assertEqual(cfg.smoothing.foliage, 0.10)
        self.assertEqual(cfg.smoothing.ornaments, 0.05)
        self.assertEqual(cfg.smoothing.gifts, 0.02)
        self.assertEqual(cfg.smoothing.photos, 0.06)
        self.assertEqual(cfg.loop.tick_hz, 60.0)
        self.assertEqual(cfg.mediapipe.max_num_hands, 1)
        self.assertEqual((cfg.camera.width, cfg.camera.height), (640, 480))

    def test_default_file_ships_inside_package(self):
        import tree_gesture.config as config_module

        self.assertEqual(DEFAULT_CONFIG_PATH.parent, Path(config_module.__file__).parent)
        self.assertTrue(DEFAULT_CONFIG_PATH.is_file())

    def test_default_load_independent_of_working_directory(self):
        cwd = os.getcwd()
        os.chdir(self.tmpdir.name)
        try:
            cfg = load_config()
        finally:
            os.chdir(cwd)
        self.assertEqual(cfg.gesture.open_threshold, 0.35)

    def test_explicit_path(self):
        data = copy.deepcopy(self.data)
        data['loop']['tick_hz'] = 30
        cfg = load_config(self.write_config(data))
        self.assertEqual(cfg.loop.tick_hz, 30.0)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(str(Path(self.tmpdir.name) / "missing.yaml"))

    def test_flip_defaults_to_false(self):
        data = copy.deepcopy(self.data)
        del data['camera']['flip_horizontal']
        cfg = load_config(self.write_config(data))
        self.assertFalse(cfg.camera.flip_horizontal)

    def test_inverted_thresholds_rejected(self):
        data = copy.deepcopy(self.data)
        data['gesture']['open_threshold'] = 0.15
        with self.assertRaises(ValueError):
            load_config(self.write_config(data))

    def test_smoothing_out_of_range_rejected(self):
        for bad in (0.0, 1.0, 1.5, -0.1):
            data = copy.deepcopy(self.data)
            data['smoothing']['gifts'] = bad
            with self.assertRaises(ValueError):
                load_config(self.write_config(data))

    def test_rotation_landmark_out_of_range_rejected(self):
        data = copy.deepcopy(self.data)
        data['gesture']['rotation_landmark'] = 21
        with self.assertRaises(ValueError):
            load_config(self.write_config(data))

    def test_tick_rate_must_be_positive(self):
        data = copy.deepcopy(self.data)
        data['loop']['tick_hz'] = 0
        with self.assertRaises(ValueError):
            load_config(self.write_config(data))


if __name__ == '__main__':
    unittest.main()
