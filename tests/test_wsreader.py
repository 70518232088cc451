import json

import pytest

from trportfolio.tokens import Token, TokenName
from trportfolio.wsmessage import MessageParseError
from trportfolio.wsreader import ErrorStateReceived, WebsocketReader

CONNECT_MESSAGE = 'connect 31 {"locale": "de"}'


class FakeConnection:
    def __init__(self, replies):
        self.replies = list(replies)
        self.sent = []
        self.closed = False

    def send(self, payload):
        self.sent.append(payload)

    def recv(self):
        if not self.replies:
            raise OSError("connection closed")
        return self.replies.pop(0)

    def close(self):
        self.closed = True


class FakeAuthService:
    def __init__(self):
        self.logins = 0

    def login(self):
        self.logins += 1

    def session_token(self):
        return Token(TokenName.SESSION, "token")


class FakeWriter:
    def __init__(self):
        self.written = []

    def write(self, directory, data):
        self.written.append((directory, data))


def factory(*connections):
    pending = list(connections)
    return lambda: pending.pop(0)


def test_connect_sends_greeting():
    conn = FakeConnection(["connected"])
    WebsocketReader(FakeAuthService(), None, factory(conn))

    assert conn.sent == [CONNECT_MESSAGE]


def test_read_skips_continue_and_returns_payload():
    conn = FakeConnection(["connected", "1 C", '1 A {"items": []}'])
    writer = FakeWriter()
    reader = WebsocketReader(FakeAuthService(), writer, factory(conn))
    request = {"after": "cursor"}

    response = reader.read("timelineTransactions", request)

    assert response.data == b'{"items": []}'
    assert writer.written == [("timelineTransactions", b'{"items": []}')]
    assert conn.sent[1].startswith("sub 1 ")
    assert json.loads(conn.sent[1][len("sub 1 "):]) == {
        "after": "cursor",
        "type": "timelineTransactions",
        "token": "token",
    }
    assert request == {"after": "cursor"}


def test_subscription_ids_increase():
    conn = FakeConnection(["connected", '1 A {"a": 1}', '2 A {"b": 2}'])
    reader = WebsocketReader(FakeAuthService(), None, factory(conn))

    first = reader.read("timelineDetailV2", {"id": "one"})
    second = reader.read("timelineDetailV2", {"id": "two"})

    assert (first.data, second.data) == (b'{"a": 1}', b'{"b": 2}')
    assert conn.sent[1].startswith("sub 1 ")
    assert conn.sent[2].startswith("sub 2 ")


def test_error_state_raises():
    conn = FakeConnection(["connected", '1 E {"errors":[{"errorCode":"BAD_SUBSCRIPTION_TYPE"}]}'])
    reader = WebsocketReader(FakeAuthService(), None, factory(conn))

    with pytest.raises(ErrorStateReceived):
        reader.read("timelineTransactions")


def test_auth_error_logs_in_reconnects_and_retries():
    first = FakeConnection(["connected", '1 E {"errors":[{"errorCode":"AUTHENTICATION_ERROR"}]}'])
    second = FakeConnection(["connected", '2 A {"id": "x"}'])
    auth = FakeAuthService()
    reader = WebsocketReader(auth, None, factory(first, second))

    response = reader.read("timelineDetailV2", {"id": "x"})

    assert response.data == b'{"id": "x"}'
    assert auth.logins == 1
    assert first.closed
    assert second.sent[0] == CONNECT_MESSAGE
    assert second.sent[1].startswith("sub 2 ")


def test_malformed_frame_raises():
    conn = FakeConnection(["connected", "garbage"])
    reader = WebsocketReader(FakeAuthService(), None, factory(conn))

    with pytest.raises(MessageParseError):
        reader.read("timelineTransactions")


def test_read_failure_is_connection_error():
    conn = FakeConnection(["connected"])
    reader = WebsocketReader(FakeAuthService(), None, factory(conn))

    with pytest.raises(ConnectionError):
        reader.read("timelineTransactions")


def test_connect_failure_is_connection_error():
    def refuse():
        raise OSError("refused")

    with pytest.raises(ConnectionError):
        WebsocketReader(FakeAuthService(), None, refuse)


def test_close_twice():
    conn = FakeConnection(["connected"])
    reader = WebsocketReader(FakeAuthService(), None, factory(conn))

    reader.close()

    assert conn.closed
    with pytest.raises(RuntimeError):
        reader.close()