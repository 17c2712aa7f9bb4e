"""
commands_controller.py
----------------------
Traduce los comandos de Telegram a operaciones del registro de
suscriptores y del almacén de señales. No guarda estado propio.
"""

from __future__ import annotations

import logging
from typing import Optional

from signal_bot.models import StatusSnapshot, Subscriber

logger = logging.getLogger("commands_controller")


class CommandsController:
    def __init__(self, subscriber_registry, signal_store):
        self.subscriber_registry = subscriber_registry
        self.signal_store = signal_store

    def on_start(self, recipient_id, display_name: Optional[str] = None) -> Subscriber:
        return self.subscriber_registry.upsert_on_contact(recipient_id, display_name)

    def on_subscribe(self, recipient_id, display_name: Optional[str] = None) -> Subscriber:
        return self.subscriber_registry.set_subscribed(recipient_id, True, display_name)

    def on_unsubscribe(self, recipient_id) -> Subscriber:
        return self.subscriber_registry.set_subscribed(recipient_id, False)

    def on_status_query(self) -> StatusSnapshot:
        return StatusSnapshot(
            subscriber_count=self.subscriber_registry.count_subscribed(),
            signal_count=self.signal_store.count(),
        )
