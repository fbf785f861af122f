import threading
from typing import Callable

from src.responder.domain.acknowledgment import OutboundReply
from src.responder.domain.invocation_context import InvocationContext
from src.responder.interfaces.chat_sender import ChatSender
from src.responder.interfaces.reply_dispatcher import ReplyDispatcher


class BackgroundReplyDispatcher(ReplyDispatcher):
    """
    Fire-and-forget delivery on a daemon thread.
    The thread is never joined, so it may outlive the request that started it.
    No timeout, no cancellation, no retry: a failure is logged once and dropped.
    """

    def __init__(self, sender: ChatSender, thread_factory: Callable[..., threading.Thread] = threading.Thread):
        self.sender = sender
        self._thread_factory = thread_factory

    def dispatch(self, context: InvocationContext, reply: OutboundReply) -> threading.Thread:
        thread = self._thread_factory(
            target=self._deliver,
            args=(context, reply),
            name=f"reply-{reply.chat_id}",
            daemon=True,
        )
        thread.start()
        return thread

    def _deliver(self, context: InvocationContext, reply: OutboundReply) -> None:
        try:
            self.sender.send(reply.chat_id, reply.text)
        except Exception as e:
            context.log.error(f"Failed to send reply to chat {reply.chat_id}: {e}")
            return

        context.log.info("Done")
