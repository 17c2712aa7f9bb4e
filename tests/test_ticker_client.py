from decimal import Decimal
from unittest.mock import Mock

import pytest
import requests

from signal_bot.exceptions import InvalidTicker, MalformedResponse, UpstreamUnavailable
from signal_bot.services.market_service.ticker_client import TickerClient


def make_response(status=200, body=None, json_error=False, text=""):
    response = Mock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.text = text
    if json_error:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


def make_client(response=None, error=None):
    session = Mock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return TickerClient(endpoint="https://api.binance.test/", timeout=3, session=session), session


def test_fetch_ticker_parses_decimal_fields():
    client, session = make_client(
        make_response(body={"symbol": "BTCUSDT", "lastPrice": "50000.01000000", "priceChangePercent": "-1.250"})
    )

    ticker = client.fetch_ticker("btcusdt")

    assert ticker.last_price == Decimal("50000.01")
    assert ticker.change_percent == Decimal("-1.25")
    session.get.assert_called_once_with(
        "https://api.binance.test/api/v3/ticker/24hr",
        params={"symbol": "BTCUSDT"},
        timeout=3,
    )


def test_network_error_is_upstream_unavailable():
    client, _ = make_client(error=requests.ConnectionError("connection refused"))
    with pytest.raises(UpstreamUnavailable):
        client.fetch_ticker("BTCUSDT")


def test_non_2xx_is_upstream_unavailable_with_upstream_message():
    client, _ = make_client(make_response(status=400, body={"code": -1121, "msg": "Invalid symbol."}))
    with pytest.raises(UpstreamUnavailable, match="Invalid symbol"):
        client.fetch_ticker("NOPE")


def test_server_error_without_json_body():
    client, _ = make_client(make_response(status=502, json_error=True, text="Bad Gateway"))
    with pytest.raises(UpstreamUnavailable, match="502"):
        client.fetch_ticker("BTCUSDT")


def test_invalid_json_is_malformed():
    client, _ = make_client(make_response(json_error=True))
    with pytest.raises(MalformedResponse):
        client.fetch_ticker("BTCUSDT")


@pytest.mark.parametrize(
    "body",
    [
        {"lastPrice": "100"},
        {"priceChangePercent": "1"},
        {"lastPrice": "abc", "priceChangePercent": "1"},
        {"lastPrice": "100", "priceChangePercent": None},
        ["not", "a", "dict"],
    ],
)
def test_missing_or_non_numeric_fields_are_malformed(body):
    client, _ = make_client(make_response(body=body))
    with pytest.raises(MalformedResponse):
        client.fetch_ticker("BTCUSDT")


@pytest.mark.parametrize("symbol", ["", "   ", None])
def test_empty_symbol_makes_no_request(symbol):
    client, session = make_client(make_response(body={}))
    with pytest.raises(InvalidTicker):
        client.fetch_ticker(symbol)
    session.get.assert_not_called()
