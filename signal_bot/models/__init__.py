from signal_bot.models.broadcast import BroadcastReport, DeliveryFailure, FailureReason
from signal_bot.models.signal import Confidence, Direction, Signal, Ticker
from signal_bot.models.subscriber import StatusSnapshot, Subscriber

__all__ = [
    "BroadcastReport",
    "Confidence",
    "DeliveryFailure",
    "Direction",
    "FailureReason",
    "Signal",
    "StatusSnapshot",
    "Subscriber",
    "Ticker",
]
