"""
services/market_service/ticker_client.py
----------------------------------------
Cliente del ticker 24h público de Binance.

Una sola petición por llamada, sin reintentos: la política de reintento
(si existe) pertenece a quien llama.
"""

import logging
from typing import Optional

import requests

from signal_bot.config import BINANCE_ENDPOINT, TICKER_TIMEOUT_SEC
from signal_bot.exceptions import InvalidTicker, MalformedResponse, UpstreamUnavailable
from signal_bot.models import Ticker
from signal_bot.utils.helpers import safe_decimal

logger = logging.getLogger("ticker_client")

TICKER_PATH = "/api/v3/ticker/24hr"


class TickerClient:
    def __init__(
        self,
        endpoint: str = BINANCE_ENDPOINT,
        timeout: float = TICKER_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_ticker(self, symbol: str) -> Ticker:
        if not symbol or not symbol.strip():
            raise InvalidTicker("Símbolo vacío")

        symbol = symbol.strip().upper()
        url = f"{self.endpoint}{TICKER_PATH}"

        try:
            r = self.session.get(url, params={"symbol": symbol}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"❌ Binance no disponible ({symbol}): {e}")
            raise UpstreamUnavailable(f"Binance no disponible: {e}") from e

        if not r.ok:
            detail = _error_message(r)
            logger.error(f"❌ Ticker {symbol} → HTTP {r.status_code}: {detail}")
            raise UpstreamUnavailable(f"Binance respondió {r.status_code}: {detail}")

        try:
            data = r.json()
        except ValueError as e:
            raise MalformedResponse(f"Respuesta no JSON para {symbol}") from e

        if not isinstance(data, dict):
            raise MalformedResponse(f"Respuesta inesperada para {symbol}: {data!r}")

        last_price = safe_decimal(data.get("lastPrice"))
        change = safe_decimal(data.get("priceChangePercent"))

        if last_price is None or change is None:
            raise MalformedResponse(
                f"Campos lastPrice/priceChangePercent inválidos para {symbol}"
            )

        logger.info(f"📊 Ticker {symbol}: {last_price} ({change}%)")
        return Ticker(last_price=last_price, change_percent=change)


def _error_message(response) -> str:
    try:
        body = response.json()
    except ValueError:
        return (response.text or "").strip()[:200]
    if isinstance(body, dict) and body.get("msg"):
        return str(body["msg"])
    return str(body)[:200]
