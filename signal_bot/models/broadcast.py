"""
models/broadcast.py
-------------------
Resultado de una difusión: entregas correctas + fallos por destinatario.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FailureReason(str, Enum):
    RECIPIENT_UNREACHABLE = "RecipientUnreachable"
    TRANSPORT_ERROR = "TransportError"


@dataclass(frozen=True)
class DeliveryFailure:
    recipient_id: str
    reason: FailureReason
    detail: str = ""


@dataclass
class BroadcastReport:
    delivered: int = 0
    failed: List[DeliveryFailure] = field(default_factory=list)
    # Motivo si el mecanismo de envío completo falló (token inválido, etc.)
    aborted: Optional[str] = None

    @property
    def attempted(self) -> int:
        return self.delivered + len(self.failed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "delivered": self.delivered,
            "failed": [
                {
                    "recipient_id": f.recipient_id,
                    "reason": f.reason.value,
                    "detail": f.detail,
                }
                for f in self.failed
            ],
            "aborted": self.aborted,
        }
