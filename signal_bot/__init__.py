"""
Trading Signal Bot
------------------
Genera señales de trading a partir del ticker de Binance, las persiste
y las difunde a todos los suscriptores del bot de Telegram.
"""

SERVICE_NAME = "Trading Signal Bot"
__version__ = "1.0.0"
