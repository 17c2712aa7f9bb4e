import asyncio

import pytest

from signal_bot.exceptions import BroadcastUnavailable
from signal_bot.models import BroadcastReport, Subscriber
from signal_bot.services.db_service import init_db
from signal_bot.utils.helpers import utc_now


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "signals.db")
    init_db(path)
    return path


@pytest.fixture
def uninitialized_db(tmp_path):
    # Archivo sin tablas: cualquier consulta falla con sqlite3.OperationalError
    return str(tmp_path / "empty.db")


def make_subscriber(recipient_id, name=None):
    return Subscriber(
        recipient_id=str(recipient_id),
        display_name=name,
        subscribed=True,
        created_at=utc_now(),
    )


class FakeSender:
    """Registra cada intento; `errors` mapea recipient_id → excepción a lanzar."""

    def __init__(self, errors=None, delays=None):
        self.errors = errors or {}
        self.delays = delays or {}
        self.attempts = []
        self.delivered = []

    async def send(self, recipient_id, text):
        self.attempts.append(recipient_id)
        if recipient_id in self.delays:
            await asyncio.sleep(self.delays[recipient_id])
        if recipient_id in self.errors:
            raise self.errors[recipient_id]
        self.delivered.append((recipient_id, text))


class RecordingDispatcher:
    def __init__(self, outage=False):
        self.calls = []
        self.outage = outage

    async def broadcast(self, message, recipients):
        self.calls.append((message, list(recipients)))
        if self.outage:
            raise BroadcastUnavailable("Token de Telegram inválido")
        return BroadcastReport(delivered=len(recipients))
