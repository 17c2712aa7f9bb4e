import dataclasses
from decimal import Decimal

from fastapi.testclient import TestClient

from signal_bot import SERVICE_NAME, __version__
from signal_bot.api.server import create_app
from signal_bot.controllers.signal_controller import GenerationResult
from signal_bot.exceptions import MalformedResponse, PersistenceUnavailable
from signal_bot.models import BroadcastReport, DeliveryFailure, FailureReason, Ticker
from signal_bot.services.signals_service.signal_synthesizer import synthesize
from signal_bot.utils.helpers import utc_now


class FakeController:
    def __init__(self, error=None, report=None):
        self.error = error
        self.report = report or BroadcastReport(delivered=2)
        self.assets = []

    async def generate_signal(self, asset):
        self.assets.append(asset)
        if self.error is not None:
            raise self.error
        signal = synthesize(asset, Ticker(Decimal("3000.00"), Decimal("-0.5")))
        stored = dataclasses.replace(signal, id=1, created_at=utc_now())
        return GenerationResult(signal=stored, report=self.report)


def client_for(controller):
    return TestClient(create_app(controller))


def test_health():
    response = client_for(FakeController()).get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "Online", "service": SERVICE_NAME, "version": __version__}


def test_generate_signal_success():
    controller = FakeController()
    response = client_for(controller).post("/api/generate-signal", json={"asset": "ETHUSDT"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["signal"]["asset"] == "ETH/USDT"
    assert body["signal"]["direction"] == "SHORT"
    assert body["signal"]["confidence"] == "LOW"
    assert body["signal"]["stop_loss"] == 3060.0
    assert body["signal"]["take_profit_3"] == 2910.0
    assert body["signal"]["risk_reward"] == "1:2.5"
    assert body["signal"]["id"] == 1
    assert body["broadcast"]["delivered"] == 2
    assert controller.assets == ["ETHUSDT"]


def test_default_asset_without_body():
    controller = FakeController()
    assert client_for(controller).post("/api/generate-signal").status_code == 200
    assert client_for(controller).post("/api/generate-signal", json={}).status_code == 200
    assert client_for(controller).post("/api/generate-signal", json={"asset": None}).status_code == 200
    assert controller.assets == ["BTCUSDT", "BTCUSDT", "BTCUSDT"]


def test_delivery_failures_do_not_change_status():
    report = BroadcastReport(
        delivered=0,
        failed=[DeliveryFailure("9", FailureReason.RECIPIENT_UNREACHABLE, "blocked")],
    )
    response = client_for(FakeController(report=report)).post("/api/generate-signal", json={})

    assert response.status_code == 200
    assert response.json()["broadcast"]["failed"][0]["reason"] == "RecipientUnreachable"


def test_pipeline_errors_return_500_with_message():
    for error in (MalformedResponse("lastPrice ausente"), PersistenceUnavailable("db caída"), RuntimeError("otro")):
        response = client_for(FakeController(error=error)).post("/api/generate-signal", json={})

        assert response.status_code == 500
        assert response.json() == {"error": str(error)}
