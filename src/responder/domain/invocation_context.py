import logging
from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class InvocationContext:
    """
    Per-request context handed to Responder.handle by the host.
    """
    log: logging.Logger
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = "POST"
    query: Dict[str, str] = field(default_factory=dict)
