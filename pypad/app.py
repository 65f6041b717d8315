from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from pypad.di.container import Container
from pypad.domain.models import Mode
from pypad.utils.constants import APP_NAME, APP_ORG

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pypad", description=f"{APP_NAME} text editor")
    parser.add_argument("file", nargs="?", type=Path, help="File to open on start")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        help="Initial document mode (overrides [editor] default_mode)",
    )
    parser.add_argument("--config", type=Path, help="Path to an INI config file")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level name (overrides [logging] level), e.g. DEBUG",
    )
    return parser


def configure_logging(level: int | str) -> None:
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def run_app(argv: Sequence[str]) -> int:
    """
    Parses the command line, bootstraps Qt, composes the application via
    the DI container and launches the main window.
    """
    args, qt_args = build_parser().parse_known_args(list(argv[1:]))

    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication([argv[0] if argv else APP_NAME, *qt_args])

    container = Container.default(config_path=args.config)
    configure_logging(args.log_level or container.config.log_level())
    logger.info("config loaded from %s", container.config.loaded_from or "defaults")

    mode = Mode.parse(args.mode) if args.mode else None
    win = container.build_main_window(start_path=args.file, mode=mode)
    win.show()

    return app.exec()
