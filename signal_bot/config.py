"""
config.py
---------
Configuración central de Trading Signal Bot.

Incluye:
    ✔ Variables de entorno (.env)
    ✔ Rutas de datos y logs
    ✔ Token del bot de Telegram
    ✔ Config del servidor HTTP
    ✔ Fuente de mercado (Binance)
    ✔ Parámetros de la política de señales
    ✔ Parámetros de difusión
"""

import os
from dotenv import load_dotenv

from signal_bot.exceptions import ConfigError

# ============================================================
# Cargar archivo .env
# ============================================================

load_dotenv()


# ============================================================
# RUTAS (relativas al directorio de trabajo)
# ============================================================

DB_PATH = os.getenv("DB_PATH", os.path.join("data", "signals.db"))
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


# ============================================================
# TELEGRAM (BOT)
# ============================================================

TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")


# ============================================================
# SERVIDOR HTTP
# ============================================================

HOST = os.getenv("HOST", "0.0.0.0")
PORT = os.getenv("PORT", "3000")


# ============================================================
# MERCADO: BINANCE (API pública)
# ============================================================

BINANCE_ENDPOINT = os.getenv("BINANCE_ENDPOINT", "https://api.binance.com")
TICKER_TIMEOUT_SEC = float(os.getenv("TICKER_TIMEOUT_SEC", "10"))
EXCHANGE_NAME = "Binance"

DEFAULT_ASSET = os.getenv("DEFAULT_ASSET", "BTCUSDT")


# ============================================================
# POLÍTICA DE SEÑALES
# ============================================================

SIGNAL_RISK_REWARD = os.getenv("SIGNAL_RISK_REWARD", "1:2.5")
SIGNAL_PRICE_DECIMALS = int(os.getenv("SIGNAL_PRICE_DECIMALS", "2"))


# ============================================================
# DIFUSIÓN
# ============================================================

DELIVERY_TIMEOUT_SEC = float(os.getenv("DELIVERY_TIMEOUT_SEC", "15"))
BROADCAST_CONCURRENCY = int(os.getenv("BROADCAST_CONCURRENCY", "20"))

# Disparador periódico opcional (0 = desactivado)
SIGNAL_LOOP_INTERVAL_SEC = int(os.getenv("SIGNAL_LOOP_INTERVAL_SEC", "0"))
SIGNAL_LOOP_ASSETS = [
    a.strip() for a in os.getenv("SIGNAL_LOOP_ASSETS", "BTCUSDT").split(",") if a.strip()
]


# ============================================================
# VALIDACIÓN (fatal en el arranque)
# ============================================================

def validate_config() -> None:
    errors = []

    if not TELEGRAM_BOT_TOKEN:
        errors.append("❌ TELEGRAM_BOT_TOKEN no configurado.")

    if not DB_PATH:
        errors.append("❌ DB_PATH no configurado.")

    if not str(PORT).isdigit() or not 0 < int(PORT) < 65536:
        errors.append(f"❌ PORT inválido: {PORT!r}")

    if not BINANCE_ENDPOINT.startswith(("http://", "https://")):
        errors.append(f"❌ BINANCE_ENDPOINT inválido: {BINANCE_ENDPOINT!r}")

    if BROADCAST_CONCURRENCY < 1:
        errors.append("❌ BROADCAST_CONCURRENCY debe ser >= 1.")

    if SIGNAL_LOOP_INTERVAL_SEC and not SIGNAL_LOOP_ASSETS:
        errors.append("❌ SIGNAL_LOOP_ASSETS vacío con el loop periódico activo.")

    if errors:
        raise ConfigError("\n".join(errors))
