"""
services/scheduler_service.py
------------------------------
Disparador periódico opcional: genera una señal por cada activo
configurado cada `interval_sec` segundos.

Cada activo es una unidad de trabajo independiente: un error se registra
y el ciclo continúa con el siguiente. Sin reintentos dentro del ciclo.
"""

import asyncio
import logging
from typing import Iterable

logger = logging.getLogger("scheduler_service")


async def run_signal_cycle(controller, assets: Iterable[str]) -> int:
    """Ejecuta un ciclo y devuelve cuántas señales se generaron."""
    generated = 0
    for asset in assets:
        try:
            await controller.generate_signal(asset)
            generated += 1
        except Exception as e:
            logger.error(f"❌ Error generando señal periódica {asset}: {e}")
    return generated


async def run_signal_loop(controller, assets: Iterable[str], interval_sec: int = 3600):
    assets = list(assets)
    logger.info(f"🕒 Loop de señales iniciado ({', '.join(assets)} cada {interval_sec}s)")

    while True:
        generated = await run_signal_cycle(controller, assets)
        logger.info(f"🕒 Ciclo completado: {generated}/{len(assets)} señales")
        await asyncio.sleep(interval_sec)
