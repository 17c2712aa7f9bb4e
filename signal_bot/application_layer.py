# application_layer.py
import logging

from signal_bot.config import (
    BINANCE_ENDPOINT,
    BROADCAST_CONCURRENCY,
    DB_PATH,
    DELIVERY_TIMEOUT_SEC,
    TICKER_TIMEOUT_SEC,
)
from signal_bot.controllers.commands_controller import CommandsController
from signal_bot.controllers.signal_controller import SignalController
from signal_bot.services.market_service.ticker_client import TickerClient
from signal_bot.services.signals_service.signal_store import SignalStore
from signal_bot.services.signals_service.signal_synthesizer import SignalPolicy
from signal_bot.services.subscribers_service.subscriber_registry import SubscriberRegistry
from signal_bot.services.telegram_service.broadcaster import BroadcastDispatcher, TelegramSender

logger = logging.getLogger("application_layer")


class ApplicationLayer:
    """
    Capa de orquestación: centraliza el wiring de servicios y controladores.
    IMPORTANTE:
    - bot es obligatorio (TelegramSender lo requiere)
    """

    def __init__(self, bot, db_path: str = DB_PATH, policy: SignalPolicy = None):
        if bot is None:
            raise TypeError(
                "ApplicationLayer.__init__() requiere bot (python-telegram-bot)."
            )

        # Infra
        self.sender = TelegramSender(bot)
        self.dispatcher = BroadcastDispatcher(
            self.sender,
            delivery_timeout=DELIVERY_TIMEOUT_SEC,
            max_concurrency=BROADCAST_CONCURRENCY,
        )
        self.ticker_client = TickerClient(BINANCE_ENDPOINT, TICKER_TIMEOUT_SEC)

        # Persistencia
        self.signal_store = SignalStore(db_path)
        self.subscriber_registry = SubscriberRegistry(db_path)

        # Controllers
        self.signal = SignalController(
            ticker_client=self.ticker_client,
            signal_store=self.signal_store,
            subscriber_registry=self.subscriber_registry,
            dispatcher=self.dispatcher,
            policy=policy or SignalPolicy.from_config(),
        )
        self.commands = CommandsController(
            subscriber_registry=self.subscriber_registry,
            signal_store=self.signal_store,
        )

        logger.info("✅ ApplicationLayer inicializado correctamente.")
