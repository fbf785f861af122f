import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class StructuredRuntimeLogger:
    """
    Lightweight JSON-lines logger for the CloudEvent ingress path.
    One record per line: timestamp, service, event_type and free-form fields.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, service: str = "responder"):
        self._logger = logger or logging.getLogger("runtime")
        self._service = service

    def emit(self, event_type: str, **fields: Any) -> None:
        self._logger.info(self._render(event_type, fields))

    def emit_error(self, event_type: str, **fields: Any) -> None:
        self._logger.error(self._render(event_type, fields))

    def _render(self, event_type: str, fields: Dict[str, Any]) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": self._service,
            "event_type": event_type,
        }
        payload.update(fields)
        return json.dumps(payload, default=str, ensure_ascii=True)
