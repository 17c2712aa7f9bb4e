"""
services/telegram_service/broadcaster.py
----------------------------------------
Difusión de un mensaje a todos los suscriptores.

Contrato:
    • cada destinatario se intenta de forma independiente (una tarea por
      destinatario); el fallo de uno nunca aborta ni bloquea a los demás
    • sin reintentos dentro de la misma difusión
    • siempre devuelve un BroadcastReport, aunque fallen todos
    • solo BroadcastUnavailable (mecanismo de envío caído) es fatal
"""

import asyncio
import logging
from typing import Optional, Sequence

from telegram.error import (
    BadRequest,
    ChatMigrated,
    Forbidden,
    InvalidToken,
    TelegramError,
)

from signal_bot.config import BROADCAST_CONCURRENCY, DELIVERY_TIMEOUT_SEC
from signal_bot.exceptions import (
    BroadcastUnavailable,
    DeliveryError,
    RecipientUnreachable,
    TransportError,
)
from signal_bot.models import BroadcastReport, DeliveryFailure, FailureReason, Subscriber

logger = logging.getLogger("broadcaster")

# Fragmentos de BadRequest que indican que el chat ya no existe
_UNREACHABLE_HINTS = ("chat not found", "user not found", "deactivated", "blocked")


class TelegramSender:
    """
    Único punto que conoce los errores de python-telegram-bot.
    Traduce cada error a la taxonomía del bot.
    """

    def __init__(self, bot, parse_mode: Optional[str] = "Markdown"):
        if bot is None:
            raise TypeError("TelegramSender requiere bot (python-telegram-bot).")
        self.bot = bot
        self.parse_mode = parse_mode

    async def send(self, recipient_id: str, text: str) -> None:
        try:
            await self.bot.send_message(
                chat_id=recipient_id, text=text, parse_mode=self.parse_mode
            )
        except InvalidToken as e:
            raise BroadcastUnavailable(f"Token de Telegram inválido: {e}") from e
        except (Forbidden, ChatMigrated) as e:
            raise RecipientUnreachable(recipient_id, str(e)) from e
        except BadRequest as e:
            if any(hint in str(e).lower() for hint in _UNREACHABLE_HINTS):
                raise RecipientUnreachable(recipient_id, str(e)) from e
            raise TransportError(recipient_id, str(e)) from e
        except TelegramError as e:
            raise TransportError(recipient_id, str(e)) from e


class BroadcastDispatcher:
    def __init__(
        self,
        sender,
        delivery_timeout: Optional[float] = DELIVERY_TIMEOUT_SEC,
        max_concurrency: int = BROADCAST_CONCURRENCY,
    ):
        self.sender = sender
        self.delivery_timeout = delivery_timeout
        self.max_concurrency = max(1, max_concurrency)

    async def broadcast(self, message: str, recipients: Sequence[Subscriber]) -> BroadcastReport:
        report = BroadcastReport()
        if not recipients:
            logger.info("📭 Sin suscriptores activos: nada que difundir.")
            return report

        semaphore = asyncio.Semaphore(self.max_concurrency)
        results = await asyncio.gather(
            *(self._deliver(semaphore, r.recipient_id, message) for r in recipients),
            return_exceptions=True,
        )

        outage: Optional[BroadcastUnavailable] = None
        for recipient, result in zip(recipients, results):
            if result is None:
                report.delivered += 1
            elif isinstance(result, DeliveryFailure):
                report.failed.append(result)
            elif isinstance(result, BroadcastUnavailable):
                outage = result
            else:
                report.failed.append(
                    DeliveryFailure(recipient.recipient_id, FailureReason.TRANSPORT_ERROR, repr(result))
                )

        if outage is not None:
            logger.error(f"🚨 Difusión abortada: {outage}")
            raise outage

        logger.info(
            f"📨 Difusión completada: {report.delivered} entregados, {len(report.failed)} fallidos"
        )
        return report

    async def _deliver(self, semaphore: asyncio.Semaphore, recipient_id: str, message: str):
        """None si se entregó, DeliveryFailure si no. Solo BroadcastUnavailable escapa."""
        async with semaphore:
            try:
                await asyncio.wait_for(
                    self.sender.send(recipient_id, message), timeout=self.delivery_timeout
                )
                return None
            except BroadcastUnavailable:
                raise
            except RecipientUnreachable as e:
                reason, detail = FailureReason.RECIPIENT_UNREACHABLE, e.detail
            except DeliveryError as e:
                reason, detail = FailureReason.TRANSPORT_ERROR, e.detail
            except asyncio.TimeoutError:
                reason, detail = FailureReason.TRANSPORT_ERROR, f"timeout ({self.delivery_timeout}s)"
            except Exception as e:
                reason, detail = FailureReason.TRANSPORT_ERROR, str(e) or repr(e)

        logger.warning(f"⚠️ Error al enviar a {recipient_id}: {reason.value} ({detail})")
        return DeliveryFailure(recipient_id, reason, detail)
