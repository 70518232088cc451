"""Fetches lists and details of one data type through a reader."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Protocol

from trportfolio.jsonreader import JSONResponse

logger = logging.getLogger(__name__)


class _Reader(Protocol):
    def read(self, data_type: str, request: Optional[dict[str, Any]]) -> JSONResponse: ...


class WSClientError(Exception):
    """Raised when data cannot be fetched or decoded."""


class WSClient:
    """Requests one data type, following list cursors until the last page."""

    def __init__(self, data_type: str, reader: _Reader) -> None:
        self.data_type = data_type
        self._reader = reader

    def list(self) -> list[Any]:
        """Return the items of all pages."""
        items, after = self._page(None)

        while after:
            page_items, after = self._page({"after": after})
            items.extend(page_items)

        logger.debug("fetched %d %s items", len(items), self.data_type)

        return items

    def details(self, item_id: str) -> Any:
        """Return the decoded details of one item."""
        return self._request({"id": item_id})

    def _page(self, request: Optional[dict[str, Any]]) -> tuple[list[Any], str]:
        page = self._request(request)
        if not isinstance(page, dict):
            raise WSClientError(f"could not unmarshal {self.data_type} response: not an object")

        items = page.get("items") or []
        cursors = page.get("cursors") or {}
        if not isinstance(items, list) or not isinstance(cursors, dict):
            raise WSClientError(f"could not unmarshal {self.data_type} response: bad list shape")

        after = cursors.get("after") or ""
        if not isinstance(after, str):
            raise WSClientError(f"could not unmarshal {self.data_type} response: bad cursor")

        return list(items), after

    def _request(self, request: Optional[dict[str, Any]]) -> Any:
        try:
            response = self._reader.read(self.data_type, request)
        except Exception as exc:
            raise WSClientError(f"could not fetch {self.data_type}: {exc}") from exc

        try:
            return json.loads(response.data)
        except (TypeError, ValueError) as exc:
            raise WSClientError(f"could not unmarshal {self.data_type} response: {exc}") from exc