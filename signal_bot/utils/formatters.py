# =====================================================================
# formatters.py
# ---------------------------------------------------------------
# Generadores de texto para Telegram (Markdown).
# Formatos: señal, bienvenida, estado, confirmaciones.
# =====================================================================

from datetime import datetime
from decimal import Decimal
from typing import Optional

from telegram.helpers import escape_markdown

from signal_bot.models import Confidence, Direction, Signal, StatusSnapshot
from signal_bot.utils.helpers import utc_now

CONFIDENCE_LABELS = {
    Confidence.HIGH: "Alta",
    Confidence.MEDIUM: "Media",
    Confidence.LOW: "Baja",
}


def format_price(value: Decimal) -> str:
    # Decimal ya cuantizado: se respeta su precisión
    return f"${value:,f}"


def format_timestamp(moment: Optional[datetime] = None) -> str:
    return (moment or utc_now()).strftime("%d/%m/%Y %H:%M:%S UTC")


def format_signal_message(signal: Signal) -> str:
    emoji = "🟢" if signal.direction is Direction.LONG else "🔴"
    tp1, tp2, tp3 = (format_price(tp) for tp in signal.take_profits)

    return (
        "🎯 *SEÑAL DE TRADING*\n\n"
        f"📊 {signal.asset}\n"
        f"{emoji} {signal.direction.value}\n"
        f"💰 Entrada: {format_price(signal.entry_price)}\n"
        f"💪 Confianza: {CONFIDENCE_LABELS[signal.confidence]}\n\n"
        f"🛡️ Stop: {format_price(signal.stop_loss)}\n"
        "🎯 Take Profit:\n"
        f"   {tp1}\n"
        f"   {tp2}\n"
        f"   {tp3}\n\n"
        f"⚖️ R/R: {signal.risk_reward}\n\n"
        f"🕒 {format_timestamp(signal.created_at)}"
    )


def format_welcome(name: Optional[str]) -> str:
    name = escape_markdown(name or "trader", version=1)
    return (
        "🤖 *Trading Signal Bot*\n\n"
        f"¡Hola *{name}*! Bienvenido al sistema de señales automatizadas.\n\n"
        "📊 *Señales:*\n"
        "• Análisis del ticker 24h de Binance\n"
        "• Stop Loss & Take Profit\n\n"
        "🎯 *Comandos:*\n"
        "/suscribir - Recibir señales\n"
        "/parar - Dejar de recibir señales\n"
        "/estado - Estado del sistema\n"
        "/help - Esta ayuda\n\n"
        "⚠️ *Solo con fines educativos*"
    )


def format_status(snapshot: StatusSnapshot, exchange: str) -> str:
    return (
        "📊 *Estado del Sistema*\n\n"
        "• 🤖 Bot: 🟢 Online\n"
        f"• 👥 Suscriptores: {snapshot.subscriber_count}\n"
        f"• 📈 Señales: {snapshot.signal_count}\n"
        f"• 🏦 Exchange: {exchange}\n"
        "• ⚡ Estado: Operativo\n\n"
        f"🕒 {format_timestamp()}"
    )


SUBSCRIBED_TEXT = "✅ *¡Suscripción activada!* Recibirás señales automáticas."
UNSUBSCRIBED_TEXT = "❌ *Suscripción cancelada.* Usa /suscribir para reactivarla."
STORAGE_ERROR_TEXT = "⚠️ Servicio temporalmente no disponible. Inténtalo más tarde."
