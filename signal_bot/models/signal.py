"""
models/signal.py
----------------
Modelo de datos para una señal de trading generada por el bot.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional


class Direction(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"


class Confidence(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class Ticker:
    """Snapshot 24h de un par: último precio y variación porcentual."""

    last_price: Decimal
    change_percent: Decimal


@dataclass(frozen=True)
class Signal:
    """
    Señal inmutable. `id` y `created_at` solo existen en la copia
    devuelta por SignalStore.save().
    """

    asset: str
    direction: Direction
    entry_price: Decimal
    confidence: Confidence
    stop_loss: Decimal
    take_profit_1: Decimal
    take_profit_2: Decimal
    take_profit_3: Decimal
    risk_reward: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def take_profits(self):
        return (self.take_profit_1, self.take_profit_2, self.take_profit_3)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "asset": self.asset,
            "direction": self.direction.value,
            "entry_price": float(self.entry_price),
            "confidence": self.confidence.value,
            "stop_loss": float(self.stop_loss),
            "take_profit_1": float(self.take_profit_1),
            "take_profit_2": float(self.take_profit_2),
            "take_profit_3": float(self.take_profit_3),
            "risk_reward": self.risk_reward,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
