"""Keeps session and refresh tokens, refreshing the session in the background."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any, Optional, Protocol

from trportfolio.apiclient import LoginRequest, LoginResponse
from trportfolio.constants import SESSION_REFRESH_INTERVAL
from trportfolio.tokens import Token, TokenName

logger = logging.getLogger(__name__)


class _APIClient(Protocol):
    def login(self, request: LoginRequest, refresh_token: Token) -> tuple[LoginResponse, Token]: ...

    def post_otp(self, process_id: str, otp: str) -> tuple[Token, Token]: ...

    def session(self, refresh_token: Token) -> Token: ...


class AuthClient:
    """Logs in, confirms one-time codes and keeps the session token fresh."""

    def __init__(
        self,
        api_client: _APIClient,
        token_dir: str | os.PathLike = ".",
        refresh_interval: Optional[float] = SESSION_REFRESH_INTERVAL,
    ) -> None:
        self._api_client = api_client
        self._token_dir = Path(token_dir)
        self._lock = threading.Lock()
        self._stop = threading.Event()

        self._session_token = self._load(TokenName.SESSION)
        self._refresh_token = self._load(TokenName.REFRESH)

        self._thread: Optional[threading.Thread] = None
        if refresh_interval:
            self._thread = threading.Thread(
                target=self._refresh_loop,
                args=(refresh_interval,),
                name="session-refresh",
                daemon=True,
            )
            self._thread.start()

        self._refresh_session()

    def login(self, phone_number: str, pin: str) -> LoginResponse:
        """Log in with credentials; keep any session token that comes back."""
        with self._lock:
            refresh_token = self._refresh_token

        response, session_token = self._api_client.login(
            LoginRequest(phone_number=phone_number, pin=pin),
            refresh_token,
        )

        if session_token.value:
            with self._lock:
                self._session_token = session_token

        return response

    def provide_otp(self, process_id: str, otp: str) -> None:
        """Confirm a login and store the tokens received."""
        if not process_id:
            raise ValueError("processID cannot be empty")

        session_token, refresh_token = self._api_client.post_otp(process_id, otp)

        with self._lock:
            self._session_token = session_token
            self._refresh_token = refresh_token

        session_token.write_to_file(self._token_dir)
        refresh_token.write_to_file(self._token_dir)

    def session_token(self) -> Token:
        """The session token currently held."""
        with self._lock:
            return self._session_token

    def close(self) -> None:
        """Stop refreshing the session."""
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=5)

    def __enter__(self) -> AuthClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _load(self, name: TokenName) -> Token:
        try:
            return Token.from_file(name, self._token_dir)
        except FileNotFoundError:
            return Token(name)

    def _refresh_loop(self, interval: float) -> None:
        while not self._stop.wait(interval):
            self._refresh_session()

    def _refresh_session(self) -> None:
        logger.debug("refreshing session token")

        with self._lock:
            refresh_token = self._refresh_token

        try:
            session_token = self._api_client.session(refresh_token)
        except Exception as exc:
            logger.warning("could not refresh session: %s", exc)
            session_token = Token(TokenName.SESSION)

        with self._lock:
            self._session_token = session_token