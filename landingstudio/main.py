import argparse
import logging
import sys

from PyQt6 import QtWidgets

from .config import SettingsManager, log_level
from .ui.main_window import APP_TITLE, MainWindow

if sys.platform == "win32":
    try:
        import ctypes
        ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(
            "LandingStudio.Editor")
    except (ImportError, AttributeError, OSError):
        pass

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="landing-studio", description=APP_TITLE)
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    args, qt_args = parser.parse_known_args(sys.argv[1:] if argv is None else argv)

    configure_logging(args.log_level or log_level())
    logger.info("Starting %s", APP_TITLE)

    app = QtWidgets.QApplication([sys.argv[0], *qt_args])
    app.setApplicationName(APP_TITLE)
    win = MainWindow(SettingsManager())
    win.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
