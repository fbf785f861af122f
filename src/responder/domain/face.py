from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from src.responder.domain.exceptions import MalformedEventData


@dataclass(frozen=True)
class Face:
    """
    One detected face. `emotion` keeps the order the analysis reported it in.
    """
    age: Any
    emotion: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "Face":
        if not isinstance(payload, Mapping):
            raise MalformedEventData(f"Face entry must be an object, got {type(payload).__name__}")

        emotion = payload.get("emotion", {})
        if emotion is None:
            emotion = {}
        if not isinstance(emotion, Mapping):
            raise MalformedEventData("Face 'emotion' must be an object")

        return cls(age=payload.get("age"), emotion=dict(emotion))


def faces_from_payload(payload: Any) -> List[Face]:
    if not isinstance(payload, list):
        raise MalformedEventData("Event data 'faces' must be a list")
    return [Face.from_payload(item) for item in payload]
