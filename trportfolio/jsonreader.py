"""Reads previously stored responses from the file system."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

# Values sent to request data, in JSON form.
Request = dict[str, Any]


@dataclass(frozen=True)
class JSONResponse:
    """Raw bytes of a JSON response."""

    data: Optional[bytes] = None


class JSONReader:
    """Serves responses from <base_dir>/<data_type>/<id or page-N>.json."""

    def __init__(self, base_dir: str | os.PathLike) -> None:
        self._base_dir = Path(base_dir)
        self._cursors: dict[str, int] = {}

    def read(self, data_type: str, request: Optional[Mapping[str, Any]] = None) -> JSONResponse:
        """Return the stored response for the request."""
        request = request or {}

        if "id" not in request:
            cursor = self._cursors.get(data_type, 1)
            self._cursors[data_type] = cursor + 1
            return self._read(self._base_dir / data_type / f"page-{cursor}.json")

        return self._read(self._base_dir / data_type / f"{request['id']}.json")

    def _read(self, path: Path) -> JSONResponse:
        contents = path.read_bytes()
        logger.debug("read file contents from %s", path)
        return JSONResponse(contents)