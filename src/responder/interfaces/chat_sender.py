from abc import ABC, abstractmethod
from typing import Any, Dict


class ChatSender(ABC):
    """
    Outbound chat delivery. Raises on failure; the result is opaque to callers.
    """
    @abstractmethod
    def send(self, chat_id: str, text: str) -> Dict[str, Any]:
        pass
