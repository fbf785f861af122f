import math
from decimal import Decimal
from typing import Any, Mapping, Sequence, Union

from src.responder.domain.face import Face

FaceLike = Union[Face, Mapping[str, Any]]


def _render_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    magnitude = abs(value)
    if 1e-6 <= magnitude < 1e21:
        if value.is_integer():
            return str(int(value))
        # repr() gives the shortest round-trip digits; only the notation changes
        return format(Decimal(repr(value)), "f")

    mantissa, exponent = repr(value).split("e")
    exponent = int(exponent)
    return f"{mantissa}e{'+' if exponent > 0 else '-'}{abs(exponent)}"


def _render_value(value: Any) -> str:
    """
    Renders ages and scores the way the analysis pipeline's JavaScript side
    prints numbers: 30.0 -> "30", 1e-05 -> "0.00001", 1e-07 -> "1e-7".
    """
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _render_float(value)
    return str(value)


class FaceAnalysisFormatter:
    """
    Pure service. Renders a face analysis as the chat reply text.
    Faces and emotions are written in the order given.
    """

    HEADER = "Hi! Thanks for playing. 😃\nI found {count} {noun} in this image.\n"

    def format(self, faces: Sequence[FaceLike]) -> str:
        noun = "face" if len(faces) == 1 else "faces"
        text = self.HEADER.format(count=len(faces), noun=noun)

        for face in faces:
            if not isinstance(face, Face):
                face = Face.from_payload(face)

            text += f"\n\n* Age: {_render_value(face.age)}"
            for emotion, score in face.emotion.items():
                text += f"\n  - {emotion}: {_render_value(score)}"

        return text
