"""
utils/helpers.py
-----------------
Funciones pequeñas y reutilizables para toda la aplicación.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional


# ============================================================
# 🔤 Normalizar símbolo
# ============================================================
def normalize_symbol(text: str) -> str:
    """
    Convierte: btc/usdt → BTCUSDT, #ETHUSDT → ETHUSDT
    """
    return (text or "").replace("/", "").replace("#", "").strip().upper()


def to_asset_pair(symbol: str, quote: str = "USDT") -> str:
    """
    BTCUSDT → BTC/USDT. Si no termina en la moneda cotizada se devuelve igual.
    """
    if quote and symbol.endswith(quote):
        return f"{symbol[:-len(quote)]}/{quote}"
    return symbol


# ============================================================
# 🔢 Conversión numérica segura
# ============================================================
def safe_decimal(value) -> Optional[Decimal]:
    """Decimal finito o None (acepta str, int, float o Decimal)."""
    if value is None or isinstance(value, bool):
        return None
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return d if d.is_finite() else None


# ============================================================
# 🔵 Timestamp utilitario
# ============================================================
def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def now_ts() -> str:
    """Devuelve timestamp ISO en UTC (para logs/DB)."""
    return utc_now().isoformat()
