"""Reads data over the websocket API, re-authenticating when needed."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping, Optional, Protocol

import websocket

from trportfolio.constants import WEBSOCKET_BASE_HOST
from trportfolio.headers import Headers
from trportfolio.jsonreader import JSONResponse
from trportfolio.tokens import Token
from trportfolio.wsmessage import Message

logger = logging.getLogger(__name__)

_CONNECT_MESSAGE = 'connect 31 {"locale": "de"}'


class _AuthService(Protocol):
    def login(self) -> None: ...

    def session_token(self) -> Token: ...


class _Writer(Protocol):
    def write(self, directory: str, data: bytes) -> Any: ...


class _Connection(Protocol):
    def send(self, payload: str) -> Any: ...

    def recv(self) -> bytes | str: ...

    def close(self) -> Any: ...


class ErrorStateReceived(Exception):
    """Raised when the server answers a subscription with an error."""


def _default_connect() -> _Connection:
    header = [f"{key}: {value}" for key, values in Headers().as_dict().items() for value in values]
    return websocket.create_connection(f"wss://{WEBSOCKET_BASE_HOST}/", header=header)


class WebsocketReader:
    """Subscribes to data types and returns the first answer of each subscription."""

    def __init__(
        self,
        auth_service: _AuthService,
        writer: Optional[_Writer] = None,
        connect: Optional[Callable[[], _Connection]] = None,
    ) -> None:
        self._auth_service = auth_service
        self._writer = writer
        self._connect_factory = connect or _default_connect
        self._conn: Optional[_Connection] = None
        self._sub_id = 0
        self._connect()

    def read(self, data_type: str, request: Optional[Mapping[str, Any]] = None) -> JSONResponse:
        """Subscribe to the data type and return the payload of the answer."""
        self._sub_id += 1
        payload = self._subscription(data_type, request)

        self._send(payload)
        logger.debug("sent message %s", payload)

        while True:
            raw = self._recv()
            logger.debug("received msg %r", raw)

            message = Message.parse(raw)

            if message.has_continue_state():
                continue

            if message.has_error_state():
                if message.has_auth_error():
                    self._auth_service.login()
                    self._reconnect()
                    return self.read(data_type, request)

                text = raw.decode("utf-8", "replace") if isinstance(raw, bytes) else raw
                raise ErrorStateReceived(f"error state received: {text}")

            if self._writer is not None:
                self._writer.write(data_type, message.data)

            return JSONResponse(message.data)

    def close(self) -> None:
        """Close the connection."""
        if self._conn is None:
            raise RuntimeError("cannot close websocket: connection not established")

        conn, self._conn = self._conn, None
        try:
            conn.close()
        except (websocket.WebSocketException, OSError) as exc:
            raise ConnectionError(f"could not close websocket connection: {exc}") from exc

    def _subscription(self, data_type: str, request: Optional[Mapping[str, Any]]) -> str:
        data = dict(request or {})
        data["type"] = data_type
        data["token"] = self._auth_service.session_token().value
        body = json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
        return f"sub {self._sub_id} {body}"

    def _connect(self) -> None:
        try:
            self._conn = self._connect_factory()
        except (websocket.WebSocketException, OSError) as exc:
            raise ConnectionError(f"could not connect to websocket: {exc}") from exc

        self._send(_CONNECT_MESSAGE)
        reply = self._recv()
        logger.debug("received msg %r", reply)

    def _reconnect(self) -> None:
        try:
            self.close()
        except (RuntimeError, ConnectionError):
            pass
        self._connect()

    def _send(self, payload: str) -> None:
        if self._conn is None:
            raise ConnectionError("could not send message: connection not established")
        try:
            self._conn.send(payload)
        except (websocket.WebSocketException, OSError) as exc:
            raise ConnectionError(f"could not send message: {exc}") from exc

    def _recv(self) -> bytes:
        if self._conn is None:
            raise ConnectionError("could not read message: connection not established")
        try:
            raw = self._conn.recv()
        except (websocket.WebSocketException, OSError) as exc:
            raise ConnectionError(f"could not read message: {exc}") from exc
        return raw.encode("utf-8") if isinstance(raw, str) else raw