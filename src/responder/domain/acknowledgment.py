from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Acknowledgment:
    """
    Value returned to the invoking host. Distinct from the outbound chat reply.
    """
    status_code: Optional[int] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.status_code is not None:
            result["statusCode"] = self.status_code
        if self.message is not None:
            result["message"] = self.message
        return result


@dataclass(frozen=True)
class OutboundReply:
    chat_id: str
    text: str
