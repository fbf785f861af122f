import json
from typing import Any, Callable, Mapping, Optional
from urllib.parse import unquote

from cloudevents.exceptions import GenericException
from cloudevents.http import from_http

from src.responder.domain.cloud_event import CloudEvent
from src.responder.domain.exceptions import CloudEventParseError

STRUCTURED_CONTENT_TYPE = "application/cloudevents+json"
BATCH_CONTENT_TYPE = "application/cloudevents-batch+json"


def _media_type(content_type: Optional[str]) -> str:
    return (content_type or "").split(";")[0].strip().lower()


def _is_json(media_type: str) -> bool:
    return media_type == "application/json" or media_type.endswith("+json")


class CloudEventHttpDecoder:
    """
    Adapter over the CloudEvents SDK HTTP binding (binary and structured modes).
    Produces the responder's CloudEvent; returns None when the request carries
    no CloudEvent at all.
    """

    def decode(self, headers: Mapping[str, str], body: bytes) -> Optional[CloudEvent]:
        headers = {key.lower(): value for key, value in headers.items()}
        media_type = _media_type(headers.get("content-type"))

        if media_type == BATCH_CONTENT_TYPE:
            raise CloudEventParseError("Batched CloudEvents are not supported")

        structured = media_type == STRUCTURED_CONTENT_TYPE
        if not structured and not any(key.startswith("ce-") for key in headers):
            return None

        # Binary-mode attribute values are percent-encoded on the wire
        headers = {
            key: unquote(value) if key.startswith("ce-") else value
            for key, value in headers.items()
        }

        try:
            event = from_http(headers, body, data_unmarshaller=self._unmarshaller(structured, media_type))
        except (GenericException, ValueError, TypeError, AttributeError) as e:
            # The SDK lets non-object structured envelopes fail with plain Python errors
            raise CloudEventParseError(str(e)) from e

        return CloudEvent(
            type=event["type"],
            data=event.data,
            id=event.get("id"),
            source=event.get("source"),
            specversion=event.get("specversion", "1.0"),
            subject=event.get("subject"),
            time=event.get("time"),
            datacontenttype=event.get("datacontenttype"),
        )

    @staticmethod
    def _unmarshaller(structured: bool, media_type: str) -> Callable[[Any], Any]:
        strict_json = not structured and (_is_json(media_type) or not media_type)

        def unmarshal(content: Any) -> Any:
            if content is None or content == b"" or content == "":
                return None
            try:
                return json.loads(content)
            except (ValueError, TypeError, UnicodeDecodeError) as e:
                if strict_json:
                    raise CloudEventParseError("Invalid JSON") from e
            if isinstance(content, bytes) and (structured or media_type.startswith("text/")):
                return content.decode("utf-8", errors="replace")
            return content

        return unmarshal
