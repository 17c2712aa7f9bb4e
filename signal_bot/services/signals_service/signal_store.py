"""
services/signals_service/signal_store.py
----------------------------------------
Registro durable de señales. Solo inserción: no existe update ni delete.
"""

import dataclasses
import logging
import sqlite3

from signal_bot.config import DB_PATH
from signal_bot.exceptions import PersistenceUnavailable
from signal_bot.models import Signal
from signal_bot.services.db_service import get_connection
from signal_bot.utils.helpers import utc_now

logger = logging.getLogger("signal_store")


class SignalStore:
    def __init__(self, db_path: str = DB_PATH):
        self.db_path = db_path

    # ------------------------------------------------------------
    # 1) GUARDAR SEÑAL NUEVA
    # ------------------------------------------------------------
    def save(self, signal: Signal) -> Signal:
        """
        Inserta la señal y devuelve la copia durable (con id y created_at).
        """
        created_at = utc_now()

        try:
            conn = get_connection(self.db_path)
            try:
                cur = conn.execute(
                    """
                    INSERT INTO signals (
                        asset, direction, entry_price, confidence, stop_loss,
                        take_profit_1, take_profit_2, take_profit_3,
                        risk_reward, created_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        signal.asset,
                        signal.direction.value,
                        str(signal.entry_price),
                        signal.confidence.value,
                        str(signal.stop_loss),
                        str(signal.take_profit_1),
                        str(signal.take_profit_2),
                        str(signal.take_profit_3),
                        signal.risk_reward,
                        created_at.isoformat(),
                    ),
                )
                conn.commit()
                new_id = cur.lastrowid
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"❌ Error al guardar la señal {signal.asset}: {e}")
            raise PersistenceUnavailable(f"No se pudo guardar la señal: {e}") from e

        logger.info(
            f"📥 Señal registrada | ID={new_id} | {signal.asset} {signal.direction.value}"
        )
        return dataclasses.replace(signal, id=new_id, created_at=created_at)

    # ------------------------------------------------------------
    # 2) CONTAR SEÑALES
    # ------------------------------------------------------------
    def count(self) -> int:
        try:
            conn = get_connection(self.db_path)
            try:
                row = conn.execute("SELECT COUNT(*) FROM signals").fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"❌ Error contando señales: {e}")
            raise PersistenceUnavailable(f"No se pudo contar señales: {e}") from e

        return int(row[0])
