"""
exceptions.py
-------------
Jerarquía única de errores del bot.

    SignalBotError
    ├── ConfigError              → arranque (fatal)
    ├── TickerError
    │   ├── UpstreamUnavailable  → red / respuesta no-2xx del exchange
    │   └── MalformedResponse    → campos numéricos ausentes o inválidos
    ├── InvalidTicker            → datos de ticker no utilizables
    ├── PersistenceUnavailable   → SQLite no disponible
    ├── DeliveryError            → fallo de entrega a UN destinatario
    │   ├── RecipientUnreachable → chat bloqueado / borrado / inexistente
    │   └── TransportError       → fallo transitorio del canal
    └── BroadcastUnavailable     → el mecanismo de envío completo está caído
"""


class SignalBotError(Exception):
    """Base de todos los errores del dominio."""


class ConfigError(SignalBotError):
    pass


# ============================================================
# 📡 MARKET DATA
# ============================================================

class TickerError(SignalBotError):
    pass


class UpstreamUnavailable(TickerError):
    pass


class MalformedResponse(TickerError):
    pass


class InvalidTicker(SignalBotError):
    pass


# ============================================================
# 🗄 PERSISTENCIA
# ============================================================

class PersistenceUnavailable(SignalBotError):
    pass


# ============================================================
# 📨 ENTREGA
# ============================================================

class DeliveryError(SignalBotError):
    def __init__(self, recipient_id: str, detail: str):
        super().__init__(f"{recipient_id}: {detail}")
        self.recipient_id = recipient_id
        self.detail = detail


class RecipientUnreachable(DeliveryError):
    pass


class TransportError(DeliveryError):
    pass


class BroadcastUnavailable(SignalBotError):
    pass
