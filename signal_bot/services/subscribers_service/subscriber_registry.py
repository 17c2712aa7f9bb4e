"""
services/subscribers_service/subscriber_registry.py
---------------------------------------------------
Estado de suscripción por destinatario de Telegram.

Cada mutación es UN solo INSERT ... ON CONFLICT(recipient_id) DO UPDATE,
así que llamadas repetidas con el mismo recipient_id nunca duplican el
registro y no hay estados parciales observables.
"""

import logging
import sqlite3
from datetime import datetime
from typing import List, Optional

from signal_bot.config import DB_PATH
from signal_bot.exceptions import PersistenceUnavailable
from signal_bot.models import Subscriber
from signal_bot.services.db_service import get_connection
from signal_bot.utils.helpers import now_ts

logger = logging.getLogger("subscriber_registry")

_SELECT = "SELECT recipient_id, display_name, subscribed, created_at FROM subscribers"


def _clean_name(display_name: Optional[str]) -> Optional[str]:
    if display_name is None:
        return None
    display_name = str(display_name).strip()
    return display_name or None


def _row_to_subscriber(row) -> Subscriber:
    return Subscriber(
        recipient_id=row[0],
        display_name=row[1],
        subscribed=bool(row[2]),
        created_at=datetime.fromisoformat(row[3]),
    )


class SubscriberRegistry:
    def __init__(self, db_path: str = DB_PATH):
        self.db_path = db_path

    # ------------------------------------------------------------
    # 🔧 Ejecución atómica: escritura + lectura del registro
    # ------------------------------------------------------------
    def _upsert(self, sql: str, params: tuple, recipient_id: str) -> Subscriber:
        try:
            conn = get_connection(self.db_path)
            try:
                conn.execute(sql, params)
                conn.commit()
                row = conn.execute(
                    f"{_SELECT} WHERE recipient_id = ?", (recipient_id,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"❌ Error actualizando suscriptor {recipient_id}: {e}")
            raise PersistenceUnavailable(f"No se pudo actualizar el suscriptor: {e}") from e

        return _row_to_subscriber(row)

    def _fetch(self, sql: str, params: tuple = ()):
        try:
            conn = get_connection(self.db_path)
            try:
                return conn.execute(sql, params).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"❌ Error leyendo suscriptores: {e}")
            raise PersistenceUnavailable(f"No se pudo leer suscriptores: {e}") from e

    # ------------------------------------------------------------
    # 1) PRIMER CONTACTO (/start)
    # ------------------------------------------------------------
    def upsert_on_contact(self, recipient_id, display_name: Optional[str] = None) -> Subscriber:
        """
        Crea con subscribed=True si no existe; si existe solo actualiza el
        nombre (un nombre vacío conserva el guardado) y deja `subscribed` igual.
        """
        recipient_id = str(recipient_id)
        subscriber = self._upsert(
            """
            INSERT INTO subscribers (recipient_id, display_name, subscribed, created_at)
            VALUES (?, ?, 1, ?)
            ON CONFLICT(recipient_id) DO UPDATE SET
                display_name = COALESCE(excluded.display_name, subscribers.display_name)
            """,
            (recipient_id, _clean_name(display_name), now_ts()),
            recipient_id,
        )
        logger.info(f"👤 Contacto registrado: {recipient_id} ({subscriber.display_name})")
        return subscriber

    # ------------------------------------------------------------
    # 2) ACTIVAR / DESACTIVAR SUSCRIPCIÓN
    # ------------------------------------------------------------
    def set_subscribed(
        self, recipient_id, value: bool, display_name: Optional[str] = None
    ) -> Subscriber:
        recipient_id = str(recipient_id)
        subscriber = self._upsert(
            """
            INSERT INTO subscribers (recipient_id, display_name, subscribed, created_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(recipient_id) DO UPDATE SET
                subscribed = excluded.subscribed,
                display_name = COALESCE(excluded.display_name, subscribers.display_name)
            """,
            (recipient_id, _clean_name(display_name), 1 if value else 0, now_ts()),
            recipient_id,
        )
        logger.info(f"{'✅' if value else '⛔'} Suscripción {recipient_id} → {bool(value)}")
        return subscriber

    # ------------------------------------------------------------
    # 3) CONSULTAS
    # ------------------------------------------------------------
    def list_subscribed(self) -> List[Subscriber]:
        rows = self._fetch(f"{_SELECT} WHERE subscribed = 1")
        return [_row_to_subscriber(r) for r in rows]

    def count_subscribed(self) -> int:
        rows = self._fetch("SELECT COUNT(*) FROM subscribers WHERE subscribed = 1")
        return int(rows[0][0])
