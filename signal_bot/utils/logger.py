"""
utils/logger.py
----------------
Logging del servicio: consola + archivo rotativo `signal_bot.log`.

main.py llama a configure_logging() una sola vez; el resto de módulos solo
hace logging.getLogger("<nombre>").
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from signal_bot.config import LOG_DIR, LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
LOG_FILENAME = "signal_bot.log"

# Librerías que a nivel INFO loguean cada petición
NOISY_LOGGERS = ("telegram", "httpx", "uvicorn.access")


def _build_handlers(log_dir: str):
    formatter = logging.Formatter(LOG_FORMAT)

    rotating = RotatingFileHandler(
        os.path.join(log_dir, LOG_FILENAME),
        maxBytes=2 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    console = logging.StreamHandler()

    for handler in (rotating, console):
        handler.setFormatter(formatter)
    return [rotating, console]


def configure_logging(log_dir: str = LOG_DIR, level: str = LOG_LEVEL) -> str:
    """Instala los handlers en el logger raíz y devuelve la ruta del archivo."""
    os.makedirs(log_dir, exist_ok=True)

    # force=True reemplaza handlers previos si se llama de nuevo
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        handlers=_build_handlers(log_dir),
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    log_file = os.path.join(log_dir, LOG_FILENAME)
    logging.getLogger("logger").info(f"📘 Logging activo (nivel {level}) → {log_file}")
    return log_file
