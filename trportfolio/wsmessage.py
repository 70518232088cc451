"""Messages received over the websocket connection."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

_MIN_DATA_PARTS = 2
_STATE_CONTINUE = "C"
_STATE_ERROR = "E"
_ERROR_CODE_AUTH = "AUTHENTICATION_ERROR"

_ID_PATTERN = re.compile(rb"[+-]?[0-9]+")


class MessageParseError(ValueError):
    """Raised when a websocket frame does not have the expected shape."""


@dataclass(frozen=True)
class Message:
    """A frame of the form '<subscription id> <state> <payload>'."""

    id: int
    state: str
    data: bytes = b""

    @classmethod
    def parse(cls, data: bytes | str) -> Message:
        """Split a raw frame into subscription id, state and payload."""
        raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        parts = raw.split(b" ")

        if len(parts) < _MIN_DATA_PARTS:
            raise MessageParseError("could not parse the contents")

        if not _ID_PATTERN.fullmatch(parts[0]):
            raise MessageParseError(
                f"could not convert id string to int: {parts[0].decode('utf-8', 'replace')!r}"
            )

        return cls(
            id=int(parts[0]),
            state=parts[1].decode("utf-8"),
            data=b" ".join(parts[2:]),
        )

    def has_error_state(self) -> bool:
        """Whether the server reported an error."""
        return self.state == _STATE_ERROR

    def has_continue_state(self) -> bool:
        """Whether the frame is a keep-alive to be skipped."""
        return self.state == _STATE_CONTINUE

    def has_auth_error(self) -> bool:
        """Whether the payload lists an authentication error."""
        try:
            payload = json.loads(self.data)
        except ValueError:
            return False

        if not isinstance(payload, dict):
            return False

        errors = payload.get("errors")
        if not isinstance(errors, list):
            return False

        return any(
            isinstance(error, dict) and error.get("errorCode") == _ERROR_CODE_AUTH
            for error in errors
        )