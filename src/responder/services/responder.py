from typing import Any, Mapping, Optional

from src.responder.domain.acknowledgment import Acknowledgment, OutboundReply
from src.responder.domain.cloud_event import CloudEvent, EventType
from src.responder.domain.exceptions import MalformedEventData
from src.responder.domain.face import faces_from_payload
from src.responder.domain.invocation_context import InvocationContext
from src.responder.interfaces.reply_dispatcher import ReplyDispatcher
from src.responder.services.face_formatter import FaceAnalysisFormatter

NO_EVENT_MESSAGE = "No CloudEvent received"

GREETING_TEXT = (
    "👋 😃\n"
    "Send me an image with faces in it and I will analyze it for you."
)


class Responder:
    """
    Turns one CloudEvent into at most one chat reply.

    The reply is handed to the dispatcher and never awaited; every event that
    reaches type dispatch is acknowledged with 204 whatever happens to the send.
    Nothing is raised out of handle().
    """

    def __init__(self, dispatcher: ReplyDispatcher, formatter: Optional[FaceAnalysisFormatter] = None):
        self.dispatcher = dispatcher
        self.formatter = formatter or FaceAnalysisFormatter()

    def handle(self, context: InvocationContext, event: Optional[CloudEvent]) -> Acknowledgment:
        if event is None:
            context.log.error(NO_EVENT_MESSAGE)
            return Acknowledgment(message=NO_EVENT_MESSAGE)

        reply = self.build_reply(context, event)
        if reply is not None:
            try:
                self.dispatcher.dispatch(context, reply)
            except Exception as e:
                context.log.error(f"Failed to dispatch reply to chat {reply.chat_id}: {e}")

        return Acknowledgment(status_code=204)

    def build_reply(self, context: InvocationContext, event: CloudEvent) -> Optional[OutboundReply]:
        """
        Returns None when there is nothing to send (unknown type or bad data);
        the reason has already been logged.
        """
        try:
            if event.type == EventType.IMAGE_PROCESSED:
                data = self._require_mapping(event)
                text = self.formatter.format(faces_from_payload(data.get("faces")))
                return OutboundReply(chat_id=self._chat_id(data), text=text)

            if event.type == EventType.TEXT:
                data = self._require_mapping(event)
                return OutboundReply(chat_id=self._chat_id(data), text=GREETING_TEXT)

        except MalformedEventData as e:
            context.log.error(f"Malformed {event.type} event: {e}")
            return None

        # Unknown types are not answered: there is no chat to answer to
        context.log.error(f"Cannot handle events of type: {event.type}")
        return None

    @staticmethod
    def _require_mapping(event: CloudEvent) -> Mapping[str, Any]:
        if not isinstance(event.data, Mapping):
            raise MalformedEventData("Event data must be an object")
        return event.data

    @staticmethod
    def _chat_id(data: Mapping[str, Any]) -> str:
        chat = data.get("chat")
        if chat is None or chat == "":
            raise MalformedEventData("Event data has no 'chat'")
        return str(chat)
