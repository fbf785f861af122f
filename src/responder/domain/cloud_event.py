from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class EventType(str, Enum):
    IMAGE_PROCESSED = "telegram.image.processed"
    TEXT = "telegram.text"


@dataclass(frozen=True)
class CloudEvent:
    """
    Inbound event envelope.
    `type` is any string; only EventType values are handled.
    The remaining attributes are carried for logging only.
    """
    type: str
    data: Any = None
    id: Optional[str] = None
    source: Optional[str] = None
    specversion: str = "1.0"
    subject: Optional[str] = None
    time: Optional[str] = None
    datacontenttype: Optional[str] = None
