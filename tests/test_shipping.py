"""Tests for the shipping carrier contract endpoints and quote envelopes."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from myrover_carrier.credentials import InMemoryCredentialStore
from myrover_carrier.serve import create_app
from myrover_carrier.shipping.quotes import (
    CarrierQuote,
    StaticQuoteProvider,
    connection_envelope,
    rates_envelope,
)

EXPECTED_RATES = {
    "data": [
        {
            "carrier_quote": {
                "code": "myrover_same_day_gta",
                "display_name": "MyRover Same-Day Courier (GTA)",
                "cost": 19.95,
            }
        },
        {
            "carrier_quote": {
                "code": "myrover_standard_gta",
                "display_name": "MyRover Next-Day Courier (GTA)",
                "cost": 12.5,
            }
        },
    ]
}

SAMPLE_CART = {
    "base_options": {
        "origin": {"zip": "M5V 2T6", "country_iso2": "CA"},
        "destination": {"zip": "L4C 1A1", "country_iso2": "CA"},
        "items": [{"sku": "TEE-1", "quantity": 2, "weight": {"units": "kg", "value": 0.4}}],
        "store_id": "abc123",
    },
    "zone_options": {},
}


# ── Rates ─────────────────────────────────────────────────────────────────


class TestRates:
    def test_empty_object_returns_two_quotes(self, client):
        resp = client.post("/v1/shipping/rates", json={})
        assert resp.status_code == 200
        body = json.loads(resp.text)
        assert isinstance(body["data"], list)
        assert len(body["data"]) == 2

    def test_exact_envelope(self, client):
        resp = client.post("/v1/shipping/rates", json=SAMPLE_CART)
        assert resp.json() == EXPECTED_RATES

    def test_cart_contents_ignored(self, client):
        first = client.post("/v1/shipping/rates", json=SAMPLE_CART).json()
        second = client.post("/v1/shipping/rates", json={"anything": [1, 2, 3]}).json()
        third = client.post("/v1/shipping/rates", json=[]).json()
        assert first == second == third == EXPECTED_RATES

    def test_empty_body(self, client):
        resp = client.post("/v1/shipping/rates", content=b"")
        assert resp.status_code == 200
        assert resp.json() == EXPECTED_RATES

    def test_malformed_json_400(self, client):
        resp = client.post(
            "/v1/shipping/rates",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid JSON body"}

    def test_post_only(self, client):
        assert client.get("/v1/shipping/rates").status_code == 405

    def test_body_not_formatted_above_debug(self, client):
        with patch("myrover_carrier.routes.shipping.logger") as mock_logger:
            mock_logger.isEnabledFor.return_value = False
            resp = client.post("/v1/shipping/rates", json=SAMPLE_CART)
        assert resp.status_code == 200
        mock_logger.isEnabledFor.assert_called_with(logging.DEBUG)
        mock_logger.debug.assert_not_called()

    def test_body_logged_at_debug(self, client, caplog):
        with caplog.at_level(logging.DEBUG, logger="myrover_carrier.routes.shipping"):
            client.post("/v1/shipping/rates", json=SAMPLE_CART)
        assert "M5V 2T6" in caplog.text

    def test_independent_of_credentials(self, client, store):
        assert len(store) == 0
        assert client.post("/v1/shipping/rates", json={}).status_code == 200

    def test_provider_is_replaceable(self, settings, mock_http_client):
        class FlatRate:
            def quote(self, payload):
                return [CarrierQuote("flat", "Flat Rate", Decimal("5.00"))]

        app = create_app(
            settings=settings,
            store=InMemoryCredentialStore(),
            quote_provider=FlatRate(),
            http_client=mock_http_client,
        )
        with TestClient(app) as c:
            resp = c.post("/v1/shipping/rates", json={})
        assert resp.json() == {
            "data": [{"carrier_quote": {"code": "flat", "display_name": "Flat Rate", "cost": 5.0}}]
        }


# ── Connection ────────────────────────────────────────────────────────────


class TestConnection:
    @pytest.mark.parametrize(
        "payload",
        [{}, {"connection_options": {"api_key": "x"}}, [1, 2], "text", None],
    )
    def test_always_ok(self, client, payload):
        resp = client.post("/v1/shipping/connection", json=payload)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["status"] == "OK"
        assert isinstance(data["message"], str) and data["message"]

    def test_non_json_body_ok(self, client):
        resp = client.post("/v1/shipping/connection", content=b"ping")
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "OK"

    def test_post_only(self, client):
        assert client.get("/v1/shipping/connection").status_code == 405


# ── Envelopes ─────────────────────────────────────────────────────────────


class TestEnvelopes:
    def test_static_provider_ignores_payload(self):
        provider = StaticQuoteProvider()
        assert provider.quote({}) == provider.quote({"items": [1]})
        assert [q.code for q in provider.quote({})] == [
            "myrover_same_day_gta",
            "myrover_standard_gta",
        ]

    def test_static_quotes_are_not_shared_list(self):
        provider = StaticQuoteProvider()
        quotes = provider.quote({})
        quotes.clear()
        assert len(provider.quote({})) == 2

    def test_rates_envelope(self):
        assert rates_envelope(StaticQuoteProvider().quote({})) == EXPECTED_RATES

    def test_connection_envelope(self):
        assert connection_envelope() == {
            "data": {"status": "OK", "message": "MyRover GTA Carrier connection verified"}
        }

    def test_connection_message_is_fixed(self):
        with pytest.raises(TypeError):
            connection_envelope("custom")  # type: ignore[call-arg]
