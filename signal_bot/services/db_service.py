"""
services/db_service.py
----------------------
Servicio de base de datos SQLite para Trading Signal Bot.

Tablas (independientes, sin claves foráneas):
    - signals      → Señales generadas (solo inserción)
    - subscribers  → Destinatarios de Telegram, clave única recipient_id

Los precios se guardan como TEXT para conservar el Decimal exacto.
"""

from __future__ import annotations

import logging
import os
import sqlite3

from signal_bot.config import DB_PATH
from signal_bot.exceptions import PersistenceUnavailable

logger = logging.getLogger("db_service")


# ============================================================
# 🔧 CONEXIÓN
# ============================================================

def get_connection(db_path: str = DB_PATH) -> sqlite3.Connection:
    """Devuelve una conexión a la base de datos."""
    return sqlite3.connect(db_path, timeout=10)


# ============================================================
# 🏗 CREACIÓN DE TABLAS
# ============================================================

def init_db(db_path: str = DB_PATH) -> None:
    """
    Crea la base de datos y sus tablas si no existen.
    """
    folder = os.path.dirname(db_path)
    if folder:
        os.makedirs(folder, exist_ok=True)

    try:
        conn = get_connection(db_path)
    except sqlite3.Error as e:
        raise PersistenceUnavailable(f"No se pudo abrir {db_path}: {e}") from e

    try:
        cur = conn.cursor()

        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS signals (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                asset TEXT NOT NULL,
                direction TEXT NOT NULL,
                entry_price TEXT NOT NULL,
                confidence TEXT NOT NULL,
                stop_loss TEXT NOT NULL,
                take_profit_1 TEXT NOT NULL,
                take_profit_2 TEXT NOT NULL,
                take_profit_3 TEXT NOT NULL,
                risk_reward TEXT NOT NULL,
                created_at TEXT NOT NULL
            );
            """
        )

        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS subscribers (
                recipient_id TEXT PRIMARY KEY,
                display_name TEXT,
                subscribed INTEGER NOT NULL DEFAULT 1,
                created_at TEXT NOT NULL
            );
            """
        )

        conn.commit()
    except sqlite3.Error as e:
        raise PersistenceUnavailable(f"No se pudo inicializar {db_path}: {e}") from e
    finally:
        conn.close()

    logger.info(f"🗄 DB inicializada correctamente en {db_path}")
