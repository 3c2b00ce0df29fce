"""Main entry point for the maze solver comparison viewer."""

import argparse
import logging
import os
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from . import __version__


def main(argv=None):
    """Main entry point for the application."""
    parser = argparse.ArgumentParser(description="Compare maze solvers side by side")
    parser.add_argument("data_dir", nargs="?", default="data", help="Directory holding maze files")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the genetic solvers")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    os.environ.setdefault('QT_LOGGING_RULES', 'qt.qpa.backingstore=false')
    QApplication.setHighDpiScaleFactorRoundingPolicy(Qt.HighDpiScaleFactorRoundingPolicy.Floor)

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Maze Pathfinding Comparison")
    app.setApplicationVersion(__version__)

    # Import UI components (after QApplication is created)
    from .ui.main_window import MainWindow
    from .app.controller import ComparisonController

    controller = ComparisonController(args.data_dir, seed=args.seed)
    window = MainWindow(controller)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
