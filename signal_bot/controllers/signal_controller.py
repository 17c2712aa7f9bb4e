import asyncio
import logging
from dataclasses import dataclass

from signal_bot.config import DEFAULT_ASSET
from signal_bot.exceptions import BroadcastUnavailable
from signal_bot.models import BroadcastReport, Signal
from signal_bot.services.signals_service.signal_synthesizer import DEFAULT_POLICY, synthesize
from signal_bot.utils.formatters import format_signal_message
from signal_bot.utils.helpers import normalize_symbol

logger = logging.getLogger("signal_controller")


@dataclass
class GenerationResult:
    signal: Signal
    report: BroadcastReport


class SignalController:
    """
    Pipeline de generación:
        ticker → síntesis → persistencia → suscriptores → difusión

    La persistencia termina SIEMPRE antes de la difusión: una señal que no
    se pudo registrar nunca se envía.
    """

    def __init__(self, ticker_client, signal_store, subscriber_registry, dispatcher, policy=DEFAULT_POLICY):
        self.ticker_client = ticker_client
        self.signal_store = signal_store
        self.subscriber_registry = subscriber_registry
        self.dispatcher = dispatcher
        self.policy = policy

        logger.info("🔧 SignalController inicializado correctamente.")

    async def generate_signal(self, asset: str = DEFAULT_ASSET) -> GenerationResult:
        symbol = normalize_symbol(asset)
        logger.info(f"🚀 Generando señal para {symbol}")

        # HTTP y sqlite son bloqueantes: fuera del event loop
        ticker = await asyncio.to_thread(self.ticker_client.fetch_ticker, symbol)

        signal = synthesize(symbol, ticker, self.policy)
        stored = await asyncio.to_thread(self.signal_store.save, signal)

        recipients = await asyncio.to_thread(self.subscriber_registry.list_subscribed)
        message = format_signal_message(stored)

        try:
            report = await self.dispatcher.broadcast(message, recipients)
        except BroadcastUnavailable as e:
            logger.error(f"🚨 Señal {stored.id} registrada pero no difundida: {e}")
            report = BroadcastReport(aborted=str(e))

        logger.info(
            f"✅ Señal {stored.id} {stored.asset} {stored.direction.value} "
            f"({stored.confidence.value}) → {report.delivered}/{len(recipients)} entregas"
        )
        return GenerationResult(signal=stored, report=report)
