"""Interactive login on the console."""

from __future__ import annotations

import getpass
from typing import Protocol

from trportfolio.apiclient import LoginResponse
from trportfolio.tokens import Token


class _AuthClient(Protocol):
    def login(self, phone_number: str, pin: str) -> LoginResponse: ...

    def provide_otp(self, process_id: str, otp: str) -> None: ...

    def session_token(self) -> Token: ...


def read_password(name: str) -> str:
    """Prompt for a secret and read it from the terminal without echo."""
    print(f"Enter {name}: ")

    try:
        return getpass.getpass("")
    except (EOFError, OSError) as exc:
        raise OSError(f"could not read {name} from stdin: {exc}") from exc


class AuthService:
    """Asks for credentials and one-time codes and passes them to the client."""

    def __init__(self, client: _AuthClient) -> None:
        self._client = client
        self._phone_number = ""
        self._pin = ""

    def acquire_credentials(self) -> None:
        """Ask for the phone number and pin."""
        print("Enter phone number in international format (+49xxxxxxxxxxxxx): ")

        try:
            line = input()
        except EOFError as exc:
            raise ValueError("could not acquire phone number: no input") from exc

        words = line.split()
        if len(words) != 1:
            raise ValueError("could not acquire phone number: expected a single value")

        self._phone_number = words[0]
        self._pin = read_password("pin")

    def login(self) -> None:
        """Log in, asking for credentials and a one-time code when needed."""
        if not self._phone_number or not self._pin:
            self.acquire_credentials()

        response = self._client.login(self._phone_number, self._pin)

        if not response.process_id:
            return

        otp = read_password("2FA token")
        self._client.provide_otp(response.process_id, otp)

    def session_token(self) -> Token:
        """The session token held by the client."""
        return self._client.session_token()