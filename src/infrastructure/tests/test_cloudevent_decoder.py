import base64
import json

import pytest

from src.infrastructure.inbound.cloudevents.cloudevent_decoder import CloudEventHttpDecoder
from src.responder.domain.exceptions import CloudEventParseError


def _binary_headers(event_type: str = "telegram.text", content_type: str = "application/json") -> dict:
    return {
        "Content-Type": content_type,
        "Ce-Id": "evt-1",
        "Ce-Source": "/telegram/bot",
        "Ce-Specversion": "1.0",
        "Ce-Type": event_type,
    }


def test_binary_mode_decodes_headers_and_json_body():
    event = CloudEventHttpDecoder().decode(_binary_headers(), json.dumps({"chat": "C1"}).encode())

    assert event.type == "telegram.text"
    assert event.id == "evt-1"
    assert event.source == "/telegram/bot"
    assert event.specversion == "1.0"
    assert event.data == {"chat": "C1"}


def test_binary_mode_with_empty_body_has_no_data():
    event = CloudEventHttpDecoder().decode(_binary_headers(), b"")

    assert event.type == "telegram.text"
    assert event.data is None


def test_binary_mode_text_body_is_kept_as_string():
    event = CloudEventHttpDecoder().decode(_binary_headers(content_type="text/plain; charset=utf-8"), b"hello")

    assert event.data == "hello"


def test_structured_mode_reads_envelope():
    envelope = {
        "specversion": "1.0",
        "type": "telegram.image.processed",
        "source": "/faces",
        "id": "evt-2",
        "data": {"faces": [{"age": 30, "emotion": {"happiness": 0.9}}], "chat": "C2"},
    }

    event = CloudEventHttpDecoder().decode(
        {"content-type": "application/cloudevents+json; charset=utf-8"},
        json.dumps(envelope).encode(),
    )

    assert event.type == "telegram.image.processed"
    assert event.id == "evt-2"
    assert list(event.data["faces"][0]["emotion"]) == ["happiness"]


def test_structured_mode_decodes_data_base64():
    raw = json.dumps({"chat": "C3"}).encode()
    envelope = {
        "specversion": "1.0",
        "id": "evt-3",
        "source": "/telegram",
        "type": "telegram.text",
        "datacontenttype": "application/json",
        "data_base64": base64.b64encode(raw).decode(),
    }

    event = CloudEventHttpDecoder().decode({"content-type": "application/cloudevents+json"}, json.dumps(envelope).encode())

    assert event.data == {"chat": "C3"}


def test_request_without_cloudevent_decodes_to_none():
    assert CloudEventHttpDecoder().decode({"content-type": "application/json"}, b'{"chat": "C1"}') is None


@pytest.mark.parametrize(
    "headers, body",
    [
        ({"content-type": "application/cloudevents-batch+json"}, b"[]"),
        ({"content-type": "application/cloudevents+json"}, b"{not json"),
        ({"content-type": "application/cloudevents+json"}, b'{"data": {}}'),
        ({"content-type": "application/cloudevents+json"}, b"[1, 2]"),
        (_binary_headers(), b"{broken"),
    ],
)
def test_undecodable_requests_raise(headers, body):
    with pytest.raises(CloudEventParseError):
        CloudEventHttpDecoder().decode(headers, body)


@pytest.mark.parametrize("missing", ["Ce-Id", "Ce-Source", "Ce-Specversion"])
def test_binary_mode_requires_core_attributes(missing):
    headers = _binary_headers()
    del headers[missing]

    with pytest.raises(CloudEventParseError):
        CloudEventHttpDecoder().decode(headers, b'{"chat": "C1"}')


def test_binary_mode_percent_decodes_attribute_headers():
    headers = {**_binary_headers(), "Ce-Source": "%2Ffaces", "Ce-Subject": "image%20processed"}

    event = CloudEventHttpDecoder().decode(headers, b'{"chat": "C1"}')

    assert event.source == "/faces"
    assert event.subject == "image processed"
