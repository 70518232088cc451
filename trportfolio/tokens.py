"""Session and refresh tokens: parsed from cookies and kept in files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable

from trportfolio.constants import COOKIE_NAME_PREFIX

_FILE_PERMISSIONS = 0o600


class TokenName(str, Enum):
    """Kinds of authentication token."""

    SESSION = "session"
    REFRESH = "refresh"

    def __str__(self) -> str:
        return self.value


class TokenNotFoundError(LookupError):
    """Raised when a response carries no cookie for the wanted token."""


@dataclass(frozen=True)
class Token:
    """A named authentication token; an empty value means none is held."""

    name: TokenName
    value: str = ""

    @classmethod
    def from_set_cookie(cls, name: TokenName | str, set_cookie_values: Iterable[str]) -> Token:
        """Extract the token from the Set-Cookie values of a response."""
        token_name = TokenName(name)
        cookies = list(set_cookie_values)
        if not cookies:
            raise TokenNotFoundError("could not find 'Set-Cookie' in header")

        start = len(COOKIE_NAME_PREFIX + token_name.value) + 1
        value: str | None = None

        for cookie in cookies:
            if token_name.value not in cookie:
                continue
            end = cookie.find(";")
            value = cookie[start:] if end == -1 else cookie[start:end]

        if value is None:
            raise TokenNotFoundError(f"could not find '{token_name.value}' token cookie in header")

        return cls(token_name, value)

    @classmethod
    def from_file(cls, name: TokenName | str, directory: str | os.PathLike = ".") -> Token:
        """Read the token stored in <directory>/.<name>."""
        token_name = TokenName(name)
        path = Path(directory) / f".{token_name.value}"
        return cls(token_name, path.read_text(encoding="utf-8"))

    def write_to_file(self, directory: str | os.PathLike = ".") -> Path:
        """Store the token in <directory>/.<name> and return the path."""
        path = Path(directory) / f".{self.name.value}"
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_PERMISSIONS)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(self.value)
        return path