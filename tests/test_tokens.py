import pytest

from trportfolio.tokens import Token, TokenName, TokenNotFoundError

OTHER_COOKIE = "JSESSIONID=placeholder; Path=/; Secure; HttpOnly"


@pytest.mark.parametrize(
    "cookies, expected",
    [
        (
            [OTHER_COOKIE, "tr_session=token; Path=/; Secure; HttpOnly; SameSite=Strict"],
            "token",
        ),
        (
            [OTHER_COOKIE, "tr_session=secret; Path=/; Secure; HttpOnly; SameSite=Strict"],
            "secret",
        ),
    ],
)
def test_it_can_create_new_token_from_header(cookies, expected):
    parsed = Token.from_set_cookie(TokenName.SESSION, cookies)

    assert parsed.name == TokenName.SESSION
    assert str(parsed.name) == "session"
    assert parsed.value == expected


def test_string_token_name_is_accepted():
    cookies = [OTHER_COOKIE, "tr_session=token; Path=/"]
    assert Token.from_set_cookie("session", cookies).value == "token"


@pytest.mark.parametrize("cookies", [[], [OTHER_COOKIE]])
def test_it_returns_error_on_no_session_in_header(cookies):
    with pytest.raises(TokenNotFoundError):
        Token.from_set_cookie("session", cookies)


def test_refresh_token_is_picked_among_cookies():
    cookies = ["tr_session=token; Path=/", "tr_refresh=secret; Path=/"]
    assert Token.from_set_cookie(TokenName.REFRESH, cookies).value == "secret"


def test_unknown_token_name_is_rejected():
    with pytest.raises(ValueError):
        Token.from_set_cookie("other", ["tr_other=token; Path=/"])


def test_file_round_trip(tmp_path):
    original = Token(TokenName.REFRESH, "secret")
    path = original.write_to_file(tmp_path)

    assert path == tmp_path / ".refresh"
    assert Token.from_file("refresh", tmp_path) == original


def test_write_overwrites_previous_value(tmp_path):
    Token(TokenName.SESSION, "secret").write_to_file(tmp_path)
    Token(TokenName.SESSION, "token").write_to_file(tmp_path)

    assert Token.from_file(TokenName.SESSION, tmp_path).value == "token"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Token.from_file(TokenName.SESSION, tmp_path)