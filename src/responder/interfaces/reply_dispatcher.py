from abc import ABC, abstractmethod
from typing import Any

from src.responder.domain.acknowledgment import OutboundReply
from src.responder.domain.invocation_context import InvocationContext


class ReplyDispatcher(ABC):
    """
    Hands a reply to a ChatSender without making the caller wait for delivery.
    The outcome is only ever logged.
    """
    @abstractmethod
    def dispatch(self, context: InvocationContext, reply: OutboundReply) -> Any:
        pass
