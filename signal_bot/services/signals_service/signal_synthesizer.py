"""
services/signals_service/signal_synthesizer.py
----------------------------------------------
Transforma un ticker (precio + variación 24h) en una señal.

Función pura, sin I/O:
    • dirección  → LONG si variación >= 0, SHORT si no
    • confianza  → HIGH si |var| > 3, MEDIUM si |var| > 1, LOW en otro caso
                   (los empates caen en el nivel inferior)
    • niveles    → precio de entrada × multiplicadores fijos por dirección
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Tuple

from signal_bot.config import SIGNAL_PRICE_DECIMALS, SIGNAL_RISK_REWARD
from signal_bot.exceptions import InvalidTicker
from signal_bot.models import Confidence, Direction, Signal, Ticker
from signal_bot.utils.helpers import safe_decimal, to_asset_pair


@dataclass(frozen=True)
class SignalPolicy:
    """Constantes de la política. Orden de multiplicadores: (SL, TP1, TP2, TP3)."""

    quote_asset: str = "USDT"
    medium_threshold: Decimal = Decimal("1")
    high_threshold: Decimal = Decimal("3")
    long_multipliers: Tuple[Decimal, ...] = (
        Decimal("0.98"), Decimal("1.01"), Decimal("1.02"), Decimal("1.03"),
    )
    short_multipliers: Tuple[Decimal, ...] = (
        Decimal("1.02"), Decimal("0.99"), Decimal("0.98"), Decimal("0.97"),
    )
    risk_reward: str = "1:2.5"
    price_decimals: int = 2

    @classmethod
    def from_config(cls) -> "SignalPolicy":
        return cls(risk_reward=SIGNAL_RISK_REWARD, price_decimals=SIGNAL_PRICE_DECIMALS)

    @property
    def quantum(self) -> Decimal:
        return Decimal(1).scaleb(-self.price_decimals)


DEFAULT_POLICY = SignalPolicy()


def classify_direction(change_percent: Decimal) -> Direction:
    return Direction.LONG if change_percent >= 0 else Direction.SHORT


def classify_confidence(change_percent: Decimal, policy: SignalPolicy = DEFAULT_POLICY) -> Confidence:
    magnitude = abs(change_percent)
    if magnitude > policy.high_threshold:
        return Confidence.HIGH
    if magnitude > policy.medium_threshold:
        return Confidence.MEDIUM
    return Confidence.LOW


def synthesize(symbol: str, ticker: Ticker, policy: SignalPolicy = DEFAULT_POLICY) -> Signal:
    if not symbol:
        raise InvalidTicker("Símbolo vacío")

    price = safe_decimal(ticker.last_price)
    change = safe_decimal(ticker.change_percent)

    if price is None or price <= 0:
        raise InvalidTicker(f"Precio inválido para {symbol}: {ticker.last_price!r}")
    if change is None:
        raise InvalidTicker(f"Variación inválida para {symbol}: {ticker.change_percent!r}")

    direction = classify_direction(change)
    multipliers = (
        policy.long_multipliers if direction is Direction.LONG else policy.short_multipliers
    )

    def _level(value: Decimal) -> Decimal:
        return value.quantize(policy.quantum, rounding=ROUND_HALF_UP)

    try:
        entry = _level(price)
        sl, tp1, tp2, tp3 = (_level(price * m) for m in multipliers)
    except InvalidOperation:
        raise InvalidTicker(f"Precio fuera de rango para {symbol}: {ticker.last_price!r}")

    return Signal(
        asset=to_asset_pair(symbol, policy.quote_asset),
        direction=direction,
        entry_price=entry,
        confidence=classify_confidence(change, policy),
        stop_loss=sl,
        take_profit_1=tp1,
        take_profit_2=tp2,
        take_profit_3=tp3,
        risk_reward=policy.risk_reward,
    )
