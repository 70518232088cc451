"""Client of the REST endpoints used for authentication."""

from __future__ import annotations

import http.cookiejar
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from trportfolio.constants import REST_API_BASE_URI
from trportfolio.headers import Headers
from trportfolio.tokens import Token, TokenName, TokenNotFoundError

logger = logging.getLogger(__name__)

_TIMEOUT_SECONDS = 30


class APIError(Exception):
    """Raised when a request fails or its response cannot be understood."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class LoginRequest:
    """Credentials sent to the login endpoint."""

    phone_number: str
    pin: str


@dataclass(frozen=True)
class LoginResponse:
    """Answer of the login endpoint; a process id means a one-time code is due."""

    process_id: str = ""


def _set_cookie_values(response: requests.Response) -> list[str]:
    raw_headers = getattr(response.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return list(raw_headers.getlist("Set-Cookie"))
    value = response.headers.get("Set-Cookie")
    return [value] if value else []


def _flatten(headers: Headers) -> dict[str, str]:
    return {key: ", ".join(values) for key, values in headers.as_dict().items()}


class Client:
    """Talks to the login, one-time code and session endpoints."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_uri: str = REST_API_BASE_URI,
    ) -> None:
        if session is None:
            session = requests.Session()
            # Tokens are handled explicitly; never replay cookies on our own.
            session.cookies.set_policy(http.cookiejar.DefaultCookiePolicy(allowed_domains=[]))
        self._session = session
        self._base_uri = base_uri.rstrip("/")

    def login(self, request: LoginRequest, refresh_token: Token) -> tuple[LoginResponse, Token]:
        """Send credentials; return the response and any session token received."""
        body = json.dumps({"phoneNumber": request.phone_number, "pin": request.pin})

        headers = Headers().with_content_type_json()
        if refresh_token.value:
            headers.with_refresh_token(refresh_token.value)

        response = self._request("POST", f"{self._base_uri}/auth/web/login", headers, body)

        try:
            session_token = Token.from_set_cookie(TokenName.SESSION, _set_cookie_values(response))
        except TokenNotFoundError:
            session_token = Token(TokenName.SESSION)

        logger.debug("received success response: %s", response.text)

        try:
            data: Any = json.loads(response.content)
        except ValueError as exc:
            raise APIError(f"could not unmarshal login response: {exc}") from exc

        if not isinstance(data, dict):
            raise APIError("could not unmarshal login response: not an object")

        process_id = data.get("processId") or ""
        if not isinstance(process_id, str):
            raise APIError("could not unmarshal login response: processId is not a string")

        return LoginResponse(process_id), session_token

    def post_otp(self, process_id: str, otp: str) -> tuple[Token, Token]:
        """Confirm a login with its one-time code; return session and refresh tokens."""
        url = f"{self._base_uri}/auth/web/login/{process_id}/{otp}"
        response = self._request("POST", url, Headers().with_content_type_json())

        cookies = _set_cookie_values(response)
        session_token = Token.from_set_cookie(TokenName.SESSION, cookies)
        refresh_token = Token.from_set_cookie(TokenName.REFRESH, cookies)

        logger.debug("received session and refresh tokens")

        return session_token, refresh_token

    def session(self, refresh_token: Token) -> Token:
        """Exchange the refresh token for a new session token, empty if none is sent."""
        headers = Headers().with_content_type_json().with_refresh_token(refresh_token.value)
        response = self._request("GET", f"{self._base_uri}/auth/web/session", headers)

        try:
            return Token.from_set_cookie(TokenName.SESSION, _set_cookie_values(response))
        except TokenNotFoundError:
            return Token(TokenName.SESSION)

    def _request(
        self,
        method: str,
        url: str,
        headers: Headers,
        body: Optional[str] = None,
    ) -> requests.Response:
        logger.debug("executing request %s %s", method, url)

        try:
            response = self._session.request(
                method,
                url,
                headers=_flatten(headers),
                data=body,
                timeout=_TIMEOUT_SECONDS,
            )
        except requests.RequestException as exc:
            raise APIError(f"could not make request: {exc}") from exc

        if response.status_code < 400:
            return response

        raise APIError(
            f"request failed with status code '{response.status_code}': {response.text}",
            status_code=response.status_code,
        )