import asyncio

import pytest
from telegram.error import BadRequest, ChatMigrated, Forbidden, InvalidToken, NetworkError, TimedOut

from conftest import FakeSender, make_subscriber
from signal_bot.exceptions import BroadcastUnavailable, RecipientUnreachable, TransportError
from signal_bot.models import FailureReason
from signal_bot.services.telegram_service.broadcaster import BroadcastDispatcher, TelegramSender


def recipients(*ids):
    return [make_subscriber(i) for i in ids]


# ============================================================
# BroadcastDispatcher
# ============================================================

def test_failure_of_one_recipient_does_not_block_others():
    sender = FakeSender(errors={"2": TransportError("2", "boom")})
    dispatcher = BroadcastDispatcher(sender, delivery_timeout=1)

    report = asyncio.run(dispatcher.broadcast("hola", recipients("1", "2", "3")))

    assert sorted(sender.attempts) == ["1", "2", "3"]
    assert sorted(r for r, _ in sender.delivered) == ["1", "3"]
    assert report.delivered == 2
    assert report.attempted == 3
    assert [(f.recipient_id, f.reason) for f in report.failed] == [("2", FailureReason.TRANSPORT_ERROR)]


def test_unexpected_exception_is_isolated_as_transport_error():
    sender = FakeSender(errors={"2": RuntimeError("kaboom")})
    report = asyncio.run(BroadcastDispatcher(sender).broadcast("x", recipients("1", "2", "3")))

    assert report.delivered == 2
    assert report.failed[0].reason is FailureReason.TRANSPORT_ERROR
    assert "kaboom" in report.failed[0].detail


def test_unreachable_recipients_are_classified():
    sender = FakeSender(
        errors={
            "1": RecipientUnreachable("1", "bot was blocked by the user"),
            "2": TransportError("2", "timed out"),
        }
    )
    report = asyncio.run(BroadcastDispatcher(sender).broadcast("x", recipients("1", "2")))

    reasons = {f.recipient_id: f.reason for f in report.failed}
    assert reasons == {
        "1": FailureReason.RECIPIENT_UNREACHABLE,
        "2": FailureReason.TRANSPORT_ERROR,
    }
    assert report.delivered == 0


def test_all_failures_still_return_report():
    sender = FakeSender(errors={i: TransportError(i, "down") for i in ("1", "2", "3")})
    report = asyncio.run(BroadcastDispatcher(sender).broadcast("x", recipients("1", "2", "3")))

    assert report.delivered == 0
    assert len(report.failed) == 3


def test_slow_recipient_times_out_without_blocking_others():
    sender = FakeSender(delays={"slow": 2})
    dispatcher = BroadcastDispatcher(sender, delivery_timeout=0.05)

    report = asyncio.run(dispatcher.broadcast("x", recipients("a", "slow", "b")))

    assert report.delivered == 2
    assert report.failed[0].recipient_id == "slow"
    assert report.failed[0].reason is FailureReason.TRANSPORT_ERROR
    assert "timeout" in report.failed[0].detail


def test_concurrency_limit_still_attempts_everyone():
    ids = [str(i) for i in range(25)]
    sender = FakeSender(delays={i: 0.01 for i in ids})
    report = asyncio.run(BroadcastDispatcher(sender, max_concurrency=3).broadcast("x", recipients(*ids)))

    assert report.delivered == 25
    assert sorted(sender.attempts) == sorted(ids)


def test_outage_is_raised_after_every_attempt():
    sender = FakeSender(errors={"2": BroadcastUnavailable("invalid token")})

    with pytest.raises(BroadcastUnavailable):
        asyncio.run(BroadcastDispatcher(sender).broadcast("x", recipients("1", "2", "3")))

    assert sorted(sender.attempts) == ["1", "2", "3"]


def test_no_recipients_sends_nothing():
    sender = FakeSender()
    report = asyncio.run(BroadcastDispatcher(sender).broadcast("x", []))

    assert report.delivered == 0 and report.failed == []
    assert sender.attempts == []


def test_report_to_dict():
    sender = FakeSender(errors={"2": RecipientUnreachable("2", "Forbidden")})
    report = asyncio.run(BroadcastDispatcher(sender).broadcast("x", recipients("1", "2")))

    assert report.to_dict() == {
        "delivered": 1,
        "failed": [{"recipient_id": "2", "reason": "RecipientUnreachable", "detail": "Forbidden"}],
        "aborted": None,
    }


# ============================================================
# TelegramSender
# ============================================================

class FakeBot:
    def __init__(self, error=None):
        self.error = error
        self.sent = []

    async def send_message(self, chat_id, text, parse_mode=None):
        if self.error is not None:
            raise self.error
        self.sent.append((chat_id, text, parse_mode))


def test_sender_uses_markdown():
    bot = FakeBot()
    asyncio.run(TelegramSender(bot).send("123", "*hola*"))
    assert bot.sent == [("123", "*hola*", "Markdown")]


@pytest.mark.parametrize(
    "error",
    [
        Forbidden("Forbidden: bot was blocked by the user"),
        BadRequest("Chat not found"),
        ChatMigrated(new_chat_id=-100123),
    ],
)
def test_sender_maps_unreachable_errors(error):
    with pytest.raises(RecipientUnreachable):
        asyncio.run(TelegramSender(FakeBot(error)).send("1", "x"))


@pytest.mark.parametrize(
    "error",
    [NetworkError("connection reset"), TimedOut(), BadRequest("Can't parse entities")],
)
def test_sender_maps_transport_errors(error):
    with pytest.raises(TransportError):
        asyncio.run(TelegramSender(FakeBot(error)).send("1", "x"))


def test_sender_maps_invalid_token_to_outage():
    with pytest.raises(BroadcastUnavailable):
        asyncio.run(TelegramSender(FakeBot(InvalidToken())).send("1", "x"))


def test_sender_requires_bot():
    with pytest.raises(TypeError):
        TelegramSender(None)
