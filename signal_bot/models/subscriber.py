"""
models/subscriber.py
--------------------
Destinatario de Telegram suscrito (o no) a las señales.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Subscriber:
    recipient_id: str
    display_name: Optional[str]
    subscribed: bool
    created_at: datetime


@dataclass(frozen=True)
class StatusSnapshot:
    subscriber_count: int
    signal_count: int
