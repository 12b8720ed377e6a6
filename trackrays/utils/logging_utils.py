"""Logging setup shared by the pipeline, CLI and dashboard."""

import logging
from pathlib import Path
from typing import Optional

from trackrays.conf.settings import settings

_configured = False


def setup_logger(
    level: Optional[str] = None,
    log_to_file: Optional[bool] = None,
    logs_path: Optional[str | Path] = None,
) -> logging.Logger:
    """Configure the ``trackrays`` root logger.

    Args:
        level: Log level name (defaults to settings.log_level)
        log_to_file: Whether to also write logs/trackrays.log
        logs_path: Directory for the log file

    Returns:
        The configured package logger
    """
    global _configured

    level = level or settings.log_level
    log_to_file = settings.log_to_file if log_to_file is None else log_to_file
    logs_path = Path(logs_path or settings.logs_path)

    root = logging.getLogger("trackrays")
    root.setLevel(level.upper())

    # Reconfiguring replaces handlers instead of stacking them
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(settings.log_format)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_to_file:
        logs_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(logs_path / "trackrays.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.propagate = False
    _configured = True
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``trackrays`` hierarchy.

    Args:
        name: Module name, usually ``__name__``

    Returns:
        Logger instance
    """
    if not _configured:
        setup_logger()

    if name != "trackrays" and not name.startswith("trackrays."):
        name = f"trackrays.{name}"

    return logging.getLogger(name)
