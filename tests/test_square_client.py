"""SquareClient against a mocked requests.Session."""

from unittest.mock import Mock

import pytest
import requests

from pocketcashier.domain.exceptions import ConfigError, UpstreamError
from pocketcashier.services.square_client import SquareClient
from pocketcashier.utils.settings import Settings


def _client(session, **settings):
    settings.setdefault("square_access_token", "sq-token")
    return SquareClient(Settings(**settings), session=session)


def _charge(client, **overrides):
    kwargs = dict(
        source_id="cnon:ok",
        amount_cents=1000,
        location_id="LOC-1",
        idempotency_key="idem-1",
        reference_id="order-1",
        note="Shop Order order-1",
        buyer_email="dana@example.com",
    )
    kwargs.update(overrides)
    return client.create_payment(**kwargs)


def _response(ok=True, status_code=200, body=None, text=""):
    resp = Mock(ok=ok, status_code=status_code, text=text)
    resp.content = b"{}" if body is not None else b""
    resp.json.return_value = body
    return resp


def test_builds_payment_request():
    session = Mock()
    session.post.return_value = _response(body={"payment": {"id": "pay-1", "status": "COMPLETED"}})

    payment = _charge(_client(session))

    assert payment == {"id": "pay-1", "status": "COMPLETED"}
    url = session.post.call_args.args[0]
    assert url == "https://connect.squareupsandbox.com/v2/payments"

    kwargs = session.post.call_args.kwargs
    assert kwargs["json"] == {
        "source_id": "cnon:ok",
        "amount_money": {"amount": 1000, "currency": "USD"},
        "location_id": "LOC-1",
        "idempotency_key": "idem-1",
        "reference_id": "order-1",
        "note": "Shop Order order-1",
        "buyer_email_address": "dana@example.com",
    }
    assert kwargs["headers"]["Authorization"] == "Bearer sq-token"
    assert kwargs["headers"]["Square-Version"] == "2024-01-18"


def test_production_environment_url():
    session = Mock()
    session.post.return_value = _response(body={"payment": {"id": "pay-1"}})

    _charge(_client(session, square_environment="production"))

    assert session.post.call_args.args[0] == "https://connect.squareup.com/v2/payments"


def test_missing_token_is_config_error():
    session = Mock()
    with pytest.raises(ConfigError):
        _charge(SquareClient(Settings(), session=session))
    session.post.assert_not_called()


def test_declined_card_surfaces_error_detail():
    session = Mock()
    session.post.return_value = _response(
        ok=False,
        status_code=402,
        body={"errors": [{"code": "CARD_DECLINED", "detail": "Card was declined."}]},
    )

    with pytest.raises(UpstreamError, match="Payment processing failed: Card was declined."):
        _charge(_client(session))


def test_non_json_error_uses_text():
    session = Mock()
    resp = _response(ok=False, status_code=502, text="Bad Gateway")
    resp.content = b"<html>"
    resp.json.side_effect = ValueError("no json")
    session.post.return_value = resp

    with pytest.raises(UpstreamError, match="Bad Gateway"):
        _charge(_client(session))


def test_transport_error_is_not_retried():
    session = Mock()
    session.post.side_effect = requests.ConnectionError("reset")

    with pytest.raises(UpstreamError):
        _charge(_client(session))

    assert session.post.call_count == 1
