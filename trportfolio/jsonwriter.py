"""Stores raw API responses as JSON files."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

RESPONSES_BASE_DIR = "responses"

_DIR_PERMISSIONS = 0o700
_FILE_PERMISSIONS = 0o600

_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _dump(data: dict[str, Any]) -> str:
    text = json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)
    for char, escaped in _ESCAPES.items():
        text = text.replace(char, escaped)
    return text


class JSONWriter:
    """Writes responses to <base_dir>/<directory>/<id or page-N>.json."""

    def __init__(self, base_dir: str | os.PathLike = RESPONSES_BASE_DIR) -> None:
        self._base_dir = Path(base_dir)
        self._cursors: dict[str, int] = {}

    def write(self, directory: str, data: bytes | str) -> Path:
        """Store a JSON object under the given directory and return the file path."""
        if not directory:
            raise ValueError("writer: dir cannot be empty")

        try:
            payload = json.loads(data)
        except json.JSONDecodeError as exc:
            raise ValueError(f"could not unmarshal data bytes to write to file: {exc}") from exc

        if not isinstance(payload, dict):
            raise ValueError("could not unmarshal data bytes to write to file: not an object")

        filename = self.generate_filename(directory, payload)

        return self._write(directory, filename, payload)

    def generate_filename(self, directory: str, data: dict[str, Any]) -> str:
        """Use the object's id, or the next page number of the directory."""
        if "id" in data:
            item_id = data["id"]
            if not isinstance(item_id, str):
                raise TypeError("could not convert id into string")
            return item_id

        cursor = self._cursors.get(directory, 1)
        self._cursors[directory] = cursor + 1

        return f"page-{cursor}"

    def _write(self, directory: str, filename: str, data: dict[str, Any]) -> Path:
        text = _dump(data)
        dest_dir = self._base_dir / directory
        dest_dir.mkdir(mode=_DIR_PERMISSIONS, parents=True, exist_ok=True)
        path = dest_dir / f"{filename}.json"

        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_PERMISSIONS)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)

        logger.debug("wrote file %s", path)

        return path