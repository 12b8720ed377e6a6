"""IO utilities for reading imports and writing projected output."""

import json
from pathlib import Path
from typing import Any, Dict

import orjson


def ensure_dir(path: str | Path) -> Path:
    """Ensure directory exists, create if needed.

    Args:
        path: Directory path

    Returns:
        Path object
    """
    path_obj = Path(path)
    path_obj.mkdir(parents=True, exist_ok=True)
    return path_obj


def decode_text(raw: bytes) -> str:
    """Decode uploaded bytes as UTF-8, dropping a leading BOM."""
    return raw.decode("utf-8-sig")


def load_text(file_path: str | Path) -> str:
    """Load a text file as UTF-8 (BOM stripped)."""
    with open(file_path, "rb") as f:
        return decode_text(f.read())


def save_json(data: Dict[str, Any], file_path: str | Path, pretty: bool = True) -> None:
    """Save data as JSON file.

    Args:
        data: Data to save
        file_path: Output file path
        pretty: Whether to pretty-print (indent)
    """
    path_obj = Path(file_path)
    ensure_dir(path_obj.parent)

    if pretty:
        with open(path_obj, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False, default=str)
    else:
        with open(path_obj, "wb") as f:
            f.write(orjson.dumps(data, option=orjson.OPT_SERIALIZE_NUMPY))
