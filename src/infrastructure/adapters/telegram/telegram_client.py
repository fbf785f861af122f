import logging
from typing import Any, Dict, Optional

import requests

from src.infrastructure.adapters.telegram.telegram_errors import (
    TelegramApiError, TelegramNetworkError,
    TelegramRateLimitError, TelegramForbiddenError
)

logger = logging.getLogger(__name__)


class TelegramClient:
    """
    HTTP client for the Telegram Bot API.
    One attempt per call: no retries, no sleeping on 429.
    Errors are normalized into TelegramError subclasses with the token redacted.
    """

    DEFAULT_BASE_URL = "https://api.telegram.org"

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def method_url(self, method: str) -> str:
        return f"{self.base_url}/bot{self.token}/{method}"

    def send_message(self, chat_id: str, text: str) -> Dict[str, Any]:
        payload = {
            "chat_id": chat_id,
            "text": text
        }
        return self._post("sendMessage", payload)

    def _post(self, method: str, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.post(self.method_url(method), json=data, timeout=self.timeout)
        except requests.RequestException as e:
            # requests puts the full URL (and so the token) in its messages
            reason = self._redact(str(e))
            logger.error(f"Telegram network error: {reason}")
            raise TelegramNetworkError(f"Request failed: {reason}") from e

        try:
            response_data = response.json()
        except ValueError as e:
            logger.error(f"Telegram invalid JSON (HTTP {response.status_code})")
            raise TelegramNetworkError("Invalid JSON response") from e

        if not isinstance(response_data, dict):
            raise TelegramNetworkError("Unexpected response shape")

        if not response_data.get("ok"):
            self._handle_api_error(response_data)

        return response_data.get("result", {})

    def _handle_api_error(self, data: Dict[str, Any]):
        error_code = data.get("error_code", 0)
        description = data.get("description", "Unknown error")
        parameters = data.get("parameters") or {}

        logger.warning(f"Telegram API Error {error_code}: {description}")

        if error_code == 429:
            retry_after = int(parameters.get("retry_after", 0))
            raise TelegramRateLimitError(error_code, description, parameters, retry_after=retry_after)

        if error_code == 403:
            raise TelegramForbiddenError(error_code, description, parameters)

        raise TelegramApiError(error_code, description, parameters)

    def _redact(self, message: str) -> str:
        if not self.token:
            return message
        return message.replace(self.token, "<redacted>")
