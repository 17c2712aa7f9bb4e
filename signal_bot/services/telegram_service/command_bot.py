# services/telegram_service/command_bot.py
import asyncio
import logging

from telegram import BotCommand, Update
from telegram.ext import CommandHandler, ContextTypes

from signal_bot.config import EXCHANGE_NAME
from signal_bot.exceptions import PersistenceUnavailable
from signal_bot.utils.formatters import (
    STORAGE_ERROR_TEXT,
    SUBSCRIBED_TEXT,
    UNSUBSCRIBED_TEXT,
    format_status,
    format_welcome,
)

logger = logging.getLogger("command_bot")

BOT_COMMANDS = [
    ("start", "Iniciar el bot"),
    ("suscribir", "Recibir señales"),
    ("parar", "Dejar de recibir señales"),
    ("estado", "Estado del sistema"),
    ("help", "Ayuda"),
]


def register_handlers(application, app_layer):
    """
    ÚNICA función pública que main.py debe importar.
    Los comandos no reconocidos no tienen handler y se ignoran.
    """
    application.bot_data["app_layer"] = app_layer

    application.add_handler(CommandHandler("start", cmd_start))
    application.add_handler(CommandHandler("help", cmd_help))
    application.add_handler(CommandHandler(["suscribir", "subscrever"], cmd_suscribir))
    application.add_handler(CommandHandler("parar", cmd_parar))
    application.add_handler(CommandHandler(["estado", "status"], cmd_estado))

    logger.info("✅ Handlers registrados correctamente (command_bot).")


async def publish_commands(bot):
    """Publica el menú de comandos del bot."""
    await bot.set_my_commands([BotCommand(cmd, desc) for cmd, desc in BOT_COMMANDS])
    logger.info("📋 Menú de comandos publicado.")


# ============================================================
# 🔧 Helpers
# ============================================================

def _commands(context: ContextTypes.DEFAULT_TYPE):
    return context.application.bot_data["app_layer"].commands


def _display_name(update: Update):
    user = update.effective_user
    if user is None:
        return None
    return user.username or user.first_name


# ============================================================
# 🤖 Comandos
# ============================================================

async def cmd_start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    name = _display_name(update)
    try:
        await asyncio.to_thread(_commands(context).on_start, update.effective_chat.id, name)
    except PersistenceUnavailable:
        logger.exception("Error en /start")
        return await update.effective_message.reply_text(STORAGE_ERROR_TEXT)

    await update.effective_message.reply_text(format_welcome(name), parse_mode="Markdown")


async def cmd_help(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.effective_message.reply_text(
        format_welcome(_display_name(update)), parse_mode="Markdown"
    )


async def cmd_suscribir(update: Update, context: ContextTypes.DEFAULT_TYPE):
    try:
        await asyncio.to_thread(
            _commands(context).on_subscribe, update.effective_chat.id, _display_name(update)
        )
    except PersistenceUnavailable:
        logger.exception("Error en /suscribir")
        return await update.effective_message.reply_text(STORAGE_ERROR_TEXT)

    await update.effective_message.reply_text(SUBSCRIBED_TEXT, parse_mode="Markdown")


async def cmd_parar(update: Update, context: ContextTypes.DEFAULT_TYPE):
    try:
        await asyncio.to_thread(_commands(context).on_unsubscribe, update.effective_chat.id)
    except PersistenceUnavailable:
        logger.exception("Error en /parar")
        return await update.effective_message.reply_text(STORAGE_ERROR_TEXT)

    await update.effective_message.reply_text(UNSUBSCRIBED_TEXT, parse_mode="Markdown")


async def cmd_estado(update: Update, context: ContextTypes.DEFAULT_TYPE):
    try:
        snapshot = await asyncio.to_thread(_commands(context).on_status_query)
    except PersistenceUnavailable:
        logger.exception("Error en /estado")
        return await update.effective_message.reply_text(STORAGE_ERROR_TEXT)

    await update.effective_message.reply_text(
        format_status(snapshot, EXCHANGE_NAME), parse_mode="Markdown"
    )
