# main.py
import asyncio
import logging
import sys

import uvicorn
from telegram.error import TelegramError
from telegram.ext import Application

from signal_bot.api.server import create_app
from signal_bot.application_layer import ApplicationLayer
from signal_bot.config import (
    DB_PATH,
    HOST,
    PORT,
    SIGNAL_LOOP_ASSETS,
    SIGNAL_LOOP_INTERVAL_SEC,
    TELEGRAM_BOT_TOKEN,
    validate_config,
)
from signal_bot.exceptions import ConfigError, PersistenceUnavailable
from signal_bot.services.db_service import init_db
from signal_bot.services.scheduler_service import run_signal_loop
from signal_bot.services.telegram_service.command_bot import publish_commands, register_handlers
from signal_bot.utils.logger import configure_logging

logger = logging.getLogger("main")


async def run():
    """
    Bot de Telegram (polling) + servidor HTTP en el mismo event loop.
    """
    init_db(DB_PATH)

    application = Application.builder().token(TELEGRAM_BOT_TOKEN).build()
    app_layer = ApplicationLayer(bot=application.bot, db_path=DB_PATH)
    register_handlers(application, app_layer)

    server = uvicorn.Server(
        uvicorn.Config(create_app(app_layer.signal), host=HOST, port=int(PORT), log_config=None)
    )

    # ⬇️ Control manual del ciclo de python-telegram-bot (sin run_polling)
    await application.initialize()
    await application.start()
    await application.updater.start_polling()
    logger.info("🤖 Bot Telegram inicializado (polling).")

    try:
        await publish_commands(application.bot)
    except TelegramError as e:
        logger.warning(f"⚠️ No se pudo publicar el menú de comandos: {e}")

    loop_task = None
    if SIGNAL_LOOP_INTERVAL_SEC > 0:
        loop_task = asyncio.create_task(
            run_signal_loop(app_layer.signal, SIGNAL_LOOP_ASSETS, SIGNAL_LOOP_INTERVAL_SEC)
        )

    try:
        logger.info(f"🚀 Servidor corriendo en el puerto {PORT}")
        await server.serve()
    finally:
        if loop_task:
            loop_task.cancel()
        await application.updater.stop()
        await application.stop()
        await application.shutdown()
        logger.info("👋 Bot detenido.")


def main():
    configure_logging()

    try:
        validate_config()
    except ConfigError as e:
        logger.error(f"Configuración inválida:\n{e}")
        sys.exit(1)

    try:
        asyncio.run(run())
    except PersistenceUnavailable as e:
        logger.error(f"🗄 Base de datos no disponible: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
