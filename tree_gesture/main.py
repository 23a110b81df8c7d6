"""
Main application for the gesture-controlled tree.
"""
import asyncio
import logging
import sys
from typing import List, Optional

from .config import load_config
from .control_loop import ControlLoop
from .pose_source import CameraPoseSource
from .renderer_mock import MockRenderer

logger = logging.getLogger(__name__)


class GestureTreeApp:
    """Main application class wiring camera, control loop and displays."""

    def __init__(self, config_path: Optional[str] = None, headless: bool = False,
                 use_camera: bool = True):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)

        source = CameraPoseSource(self.config) if use_camera else None
        self.control = ControlLoop(self.config, source=source)

        self.preview = None
        if headless or not self.config.display.show_preview:
            self.renderer = MockRenderer()
            self.control.subscribe(self.renderer)
        else:
            from .preview import StatusPreview
            self.preview = StatusPreview(self.config, self.control)
            self.control.subscribe(self.preview)

    async def run(self):
        """Run the control loop until stopped."""
        print(f"Starting {self.config.display.window_name}")
        print("🎄 Gesture Control:")
        print("  - Open Palm = CHAOS (scatter the tree)")
        print("  - Fist = FORMED (assemble the tree)")
        print("  - Move hand left/right = Rotate")
        if self.preview is not None:
            print("Press 'f'/'c' for manual control, 'q' to quit")
        else:
            print("Press Ctrl+C to quit")

        try:
            await self.control.run()
        finally:
            if self.preview is not None:
                self.preview.close()

        if not self.control.gesture_available:
            print("⚠️  Gesture input was unavailable; only manual control was active")


def _option(argv: List[str], name: str) -> Optional[str]:
    """Value following a flag, if present."""
    if name in argv:
        index = argv.index(name)
        if index + 1 < len(argv):
            return argv[index + 1]
    return None


async def main(argv: Optional[List[str]] = None):
    """Entry point for the application."""
    argv = sys.argv[1:] if argv is None else argv

    headless = "--headless" in argv
    use_camera = "--no-camera" not in argv
    config_path = _option(argv, "--config")

    app = None
    try:
        app = GestureTreeApp(config_path=config_path, headless=headless, use_camera=use_camera)
        await app.run()
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
    finally:
        if app is not None:
            app.control.stop()


def cli():
    """Console script entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    cli()
