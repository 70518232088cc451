"""HTTP headers sent to the REST API and the websocket endpoint."""

from __future__ import annotations

from trportfolio.constants import COOKIE_NAME_PREFIX, HTTP_USER_AGENT


class Headers:
    """Multi-valued HTTP headers that start with the package's user agent."""

    def __init__(self) -> None:
        self._values: dict[str, list[str]] = {"User-Agent": [HTTP_USER_AGENT]}

    def add(self, key: str, value: str) -> Headers:
        """Append a value to the header, creating it if needed."""
        self._values.setdefault(key, []).append(value)
        return self

    def with_content_type_json(self) -> Headers:
        """Declare a JSON body, replacing any previous content type."""
        self._values["Content-Type"] = ["application/json"]
        return self

    def with_refresh_token(self, token: str) -> Headers:
        """Send the refresh token as the only cookie."""
        self._values["Cookie"] = [f"{COOKIE_NAME_PREFIX}refresh={token}"]
        return self

    def as_dict(self) -> dict[str, list[str]]:
        """Return a copy of the headers as a mapping of name to values."""
        return {key: list(values) for key, values in self._values.items()}