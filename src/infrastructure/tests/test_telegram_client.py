import pytest
import requests

from src.infrastructure.adapters.telegram.telegram_chat_sender import TelegramChatSender
from src.infrastructure.adapters.telegram.telegram_client import TelegramClient
from src.infrastructure.adapters.telegram.telegram_errors import (
    TelegramApiError, TelegramForbiddenError, TelegramNetworkError, TelegramRateLimitError
)

TOKEN = "123456:SECRET-token"


class _Response:
    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value")
        return self.payload


class _Session:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def _client(session, **kwargs):
    return TelegramClient(token=TOKEN, session=session, **kwargs)


def test_send_message_posts_chat_id_and_text():
    session = _Session(_Response({"ok": True, "result": {"message_id": 77}}))

    result = _client(session, timeout=4.0).send_message(chat_id="C1", text="hello")

    assert result == {"message_id": 77}
    assert session.calls == [{
        "url": f"https://api.telegram.org/bot{TOKEN}/sendMessage",
        "json": {"chat_id": "C1", "text": "hello"},
        "timeout": 4.0,
    }]


def test_base_url_trailing_slash_is_ignored():
    client = TelegramClient(token=TOKEN, base_url="http://localhost:8081/")

    assert client.method_url("sendMessage") == f"http://localhost:8081/bot{TOKEN}/sendMessage"


def test_forbidden_is_normalized():
    session = _Session(_Response({"ok": False, "error_code": 403, "description": "Forbidden: bot was blocked by the user"}, 403))

    with pytest.raises(TelegramForbiddenError) as excinfo:
        _client(session).send_message("C1", "hello")

    assert excinfo.value.error_code == 403
    assert "blocked" in str(excinfo.value)


def test_rate_limit_is_raised_without_retrying():
    session = _Session(_Response(
        {"ok": False, "error_code": 429, "description": "Too Many Requests", "parameters": {"retry_after": 12}},
        429,
    ))

    with pytest.raises(TelegramRateLimitError) as excinfo:
        _client(session).send_message("C1", "hello")

    assert excinfo.value.retry_after == 12
    assert len(session.calls) == 1


def test_other_api_errors_keep_code_and_description():
    session = _Session(_Response({"ok": False, "error_code": 400, "description": "Bad Request: chat not found"}, 400))

    with pytest.raises(TelegramApiError) as excinfo:
        _client(session).send_message("missing", "hello")

    assert not isinstance(excinfo.value, (TelegramForbiddenError, TelegramRateLimitError))
    assert str(excinfo.value) == "Telegram API error 400: Bad Request: chat not found"


def test_network_error_does_not_leak_token():
    session = _Session(error=requests.ConnectionError(f"Max retries exceeded with url: /bot{TOKEN}/sendMessage"))

    with pytest.raises(TelegramNetworkError) as excinfo:
        _client(session).send_message("C1", "hello")

    assert TOKEN not in str(excinfo.value)
    assert "<redacted>" in str(excinfo.value)


def test_invalid_json_is_a_network_error():
    session = _Session(_Response(status_code=502, invalid_json=True))

    with pytest.raises(TelegramNetworkError):
        _client(session).send_message("C1", "hello")


def test_chat_sender_delegates_to_send_message():
    session = _Session(_Response({"ok": True, "result": {"message_id": 5}}))

    result = TelegramChatSender(_client(session)).send("C2", "text body")

    assert result == {"message_id": 5}
    assert session.calls[0]["json"] == {"chat_id": "C2", "text": "text body"}


def test_forbidden_and_rate_limit_are_api_errors():
    assert issubclass(TelegramForbiddenError, TelegramApiError)
    assert str(TelegramRateLimitError(429, "Too Many Requests", {}, retry_after=3)) == "Telegram API error 429: Too Many Requests"
