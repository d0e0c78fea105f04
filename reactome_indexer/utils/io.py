"""File IO helpers."""
from __future__ import annotations

import json
import pathlib
from typing import Any, List

from .logging import get_logger

LOGGER = get_logger(__name__)


def read_lines(path: str | pathlib.Path) -> List[str]:
    """Return the stripped, non-empty lines of a text file."""
    data_path = pathlib.Path(path)
    if not data_path.exists():
        raise FileNotFoundError(f"Text file not found: {data_path}")
    with data_path.open("r", encoding="utf-8") as handle:
        return [line.strip() for line in handle if line.strip()]


def write_json(path: str | pathlib.Path, payload: dict[str, Any]) -> None:
    """Write a JSON document to disk."""
    data_path = pathlib.Path(path)
    data_path.parent.mkdir(parents=True, exist_ok=True)
    with data_path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)
    LOGGER.info("Wrote JSON document to %s", data_path)
