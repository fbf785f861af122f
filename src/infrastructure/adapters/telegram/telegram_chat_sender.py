from typing import Any, Dict

from src.infrastructure.adapters.telegram.telegram_client import TelegramClient
from src.responder.interfaces.chat_sender import ChatSender


class TelegramChatSender(ChatSender):
    """
    ChatSender backed by the Bot API sendMessage method.
    TelegramError subclasses propagate to the dispatcher, which logs them.
    """

    def __init__(self, client: TelegramClient):
        self.client = client

    def send(self, chat_id: str, text: str) -> Dict[str, Any]:
        return self.client.send_message(chat_id=chat_id, text=text)
