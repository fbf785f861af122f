from dataclasses import dataclass
from typing import Optional

class TelegramError(Exception):
    """Raised by TelegramClient when a reply could not be delivered."""
    pass

@dataclass
class TelegramApiError(TelegramError):
    """The Bot API answered with ok == false."""
    error_code: int
    description: str
    parameters: Optional[dict] = None

    def __str__(self) -> str:
        return f"Telegram API error {self.error_code}: {self.description}"

class TelegramNetworkError(TelegramError):
    """The request never got a Bot API answer (connection, timeout, non-JSON body)."""
    pass

@dataclass
class TelegramRateLimitError(TelegramApiError):
    """429 from sendMessage. The reply is dropped; retry_after is only reported."""
    retry_after: int = 0

@dataclass
class TelegramForbiddenError(TelegramApiError):
    """403 from sendMessage: the user blocked the bot or it left the chat."""
    pass
