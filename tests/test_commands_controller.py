from decimal import Decimal

from signal_bot.controllers.commands_controller import CommandsController
from signal_bot.models import StatusSnapshot, Ticker
from signal_bot.services.signals_service.signal_store import SignalStore
from signal_bot.services.signals_service.signal_synthesizer import synthesize
from signal_bot.services.subscribers_service.subscriber_registry import SubscriberRegistry


def make_controller(db_path):
    return CommandsController(SubscriberRegistry(db_path), SignalStore(db_path))


def test_start_subscribes_new_user(db_path):
    commands = make_controller(db_path)
    subscriber = commands.on_start(555, "dana")
    assert subscriber.subscribed is True
    assert commands.on_status_query().subscriber_count == 1


def test_start_does_not_resubscribe(db_path):
    commands = make_controller(db_path)
    commands.on_start(555, "dana")
    commands.on_unsubscribe(555)

    assert commands.on_start(555, "dana").subscribed is False


def test_subscribe_unsubscribe_cycle(db_path):
    commands = make_controller(db_path)

    assert commands.on_subscribe(1, "eve").subscribed is True
    assert commands.on_unsubscribe(1).subscribed is False
    assert commands.on_unsubscribe(1).subscribed is False
    assert commands.on_subscribe(1, None).display_name == "eve"


def test_unsubscribe_unknown_user_creates_opted_out_record(db_path):
    commands = make_controller(db_path)
    assert commands.on_unsubscribe(2).subscribed is False
    assert commands.on_status_query().subscriber_count == 0


def test_status_query(db_path):
    commands = make_controller(db_path)
    commands.on_subscribe(1, "a")
    commands.on_subscribe(2, "b")
    commands.on_unsubscribe(2)
    store = SignalStore(db_path)
    for _ in range(3):
        store.save(synthesize("BTCUSDT", Ticker(Decimal("100"), Decimal("1"))))

    assert commands.on_status_query() == StatusSnapshot(subscriber_count=1, signal_count=3)
