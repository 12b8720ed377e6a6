"""Utility modules for the track ray pipeline."""

from .logging_utils import setup_logger, get_logger
from .io_utils import (
    ensure_dir,
    decode_text,
    load_text,
    save_json,
)

__all__ = [
    # Logging
    "setup_logger",
    "get_logger",
    # IO
    "ensure_dir",
    "decode_text",
    "load_text",
    "save_json",
]
