"""
WhatsApp Transport Integration Tests

End-to-end flow tests: webhook → normalization → responder → TwiML

KEY ASSERTION: the platform always gets a 200 with a readable reply
"""

import xml.etree.ElementTree as ET
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from twilio.request_validator import RequestValidator

from main import app
from responder import FALLBACK_MESSAGE, HELP_MESSAGE
from services.sheets import DataSourceError, InventoryItem, OrderRecord, StubSheetsDataSource

client = TestClient(app)

WEBHOOK = "/webhook/whatsapp"


def reply_text(response) -> str:
    """Text of the single <Message> in a TwiML response."""
    root = ET.fromstring(response.content)
    assert root.tag == "Response"
    messages = root.findall("Message")
    assert len(messages) == 1
    return messages[0].text or ""


@pytest.fixture
def data_source():
    source = StubSheetsDataSource(
        orders=[OrderRecord(order_id="12345", status="Shipped", eta="Tomorrow")],
        inventory=[
            InventoryItem(name="Widget", sku="WID-1", quantity=42, location="Aisle 3"),
            InventoryItem(name="Gadget", sku="GAD-7", quantity=2),
        ],
        low_stock_threshold=5,
    )
    with patch("transport.whatsapp.webhook.get_data_source", return_value=source):
        yield source


class TestTextFlow:
    """Test complete text message flow."""

    def test_order_reply(self, data_source):
        response = client.post(WEBHOOK, data={"Body": "order 12345", "From": "whatsapp:+1555"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/xml")
        assert reply_text(response) == "Order 12345\nStatus: Shipped\nETA: Tomorrow"

    def test_bare_number_is_order(self, data_source):
        response = client.post(WEBHOOK, data={"Body": "12345"})
        assert reply_text(response).startswith("Order 12345")

    def test_lowercase_body_field(self, data_source):
        response = client.post(WEBHOOK, data={"body": "inventory wid-1"})
        assert reply_text(response) == "Widget (WID-1)\nQty: 42\nLocation: Aisle 3"

    def test_inventory_no_match(self, data_source):
        response = client.post(WEBHOOK, data={"Body": "inventory sku-1"})
        assert reply_text(response) == 'No inventory records match "sku-1".'

    def test_low_stock(self, data_source):
        response = client.post(WEBHOOK, data={"Body": "LOW STOCK"})
        assert reply_text(response) == "Low Stock Alerts:\n\nGadget — Qty: 2"

    def test_empty_low_stock(self):
        source = AsyncMock()
        source.list_low_stock.return_value = []
        with patch("transport.whatsapp.webhook.get_data_source", return_value=source):
            response = client.post(WEBHOOK, data={"Body": "list low stock"})
        assert reply_text(response) == "No items are below the low stock threshold."

    def test_help(self, data_source):
        response = client.post(WEBHOOK, data={"Body": "Menu"})
        assert reply_text(response) == HELP_MESSAGE

    def test_unknown_gets_fallback_without_echo(self, data_source):
        response = client.post(WEBHOOK, data={"Body": "<b>what</b> & more"})

        assert response.status_code == 200
        assert reply_text(response) == FALLBACK_MESSAGE
        assert b"what" not in response.content

    def test_missing_body_gets_fallback(self, data_source):
        response = client.post(WEBHOOK, data={"From": "whatsapp:+1555"})
        assert reply_text(response) == FALLBACK_MESSAGE

    def test_reply_is_xml_escaped(self):
        source = StubSheetsDataSource(orders=[OrderRecord(order_id="1", customer_name="Smith & <Sons>")])
        with patch("transport.whatsapp.webhook.get_data_source", return_value=source):
            response = client.post(WEBHOOK, data={"Body": "order 1"})

        assert b"Smith &amp; &lt;Sons&gt;" in response.content
        assert reply_text(response) == "Order 1\nCustomer: Smith & <Sons>"


class TestFailureFlow:
    """Failures still produce 200 + friendly text."""

    def test_order_lookup_failure(self):
        source = AsyncMock()
        source.get_order.side_effect = DataSourceError("HTTP 503")
        with patch("transport.whatsapp.webhook.get_data_source", return_value=source):
            response = client.post(WEBHOOK, data={"Body": "order 12345"})

        assert response.status_code == 200
        assert reply_text(response) == "Sorry, I could not reach the orders sheet."

    def test_inventory_lookup_failure(self):
        source = AsyncMock()
        source.find_inventory.side_effect = DataSourceError("timeout")
        with patch("transport.whatsapp.webhook.get_data_source", return_value=source):
            response = client.post(WEBHOOK, data={"Body": "inventory x"})

        assert response.status_code == 200
        assert reply_text(response) == "Sorry, I could not reach the inventory sheet."

    def test_data_source_construction_failure(self):
        with patch("transport.whatsapp.webhook.get_data_source", side_effect=ValueError("bad threshold")):
            response = client.post(WEBHOOK, data={"Body": "order 1"})

        assert response.status_code == 200
        assert reply_text(response) == "Sorry, something went wrong. Please try again."


class TestMethodNotAllowed:
    """Only POST is accepted."""

    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "PURGE"])
    def test_non_post_rejected(self, method):
        response = client.request(method, WEBHOOK)

        assert response.status_code == 405
        assert response.headers["allow"] == "POST"
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Method Not Allowed"

    def test_head_rejected(self):
        response = client.head(WEBHOOK)

        assert response.status_code == 405
        assert response.headers["allow"] == "POST"

    def test_browser_preflight_rejected(self):
        response = client.options(
            WEBHOOK,
            headers={"Origin": "http://example.com", "Access-Control-Request-Method": "GET"},
        )

        assert response.status_code == 405
        assert response.text == "Method Not Allowed"
        assert "access-control-allow-methods" not in response.headers

    def test_other_errors_keep_json_detail(self):
        response = client.get("/webhook/unknown")

        assert response.status_code == 404
        assert response.json() == {"detail": "Not Found"}


class TestFormDecoding:
    """Raw URL-encoded bodies as Twilio sends them."""

    FORM = {"Content-Type": "application/x-www-form-urlencoded"}

    def test_plus_means_space(self, data_source):
        response = client.post(WEBHOOK, content=b"Body=low+stock", headers=self.FORM)
        assert reply_text(response) == "Low Stock Alerts:\n\nGadget — Qty: 2"

    def test_percent_escapes(self, data_source):
        response = client.post(WEBHOOK, content=b"Body=inventory%20WID-1", headers=self.FORM)
        assert reply_text(response).startswith("Widget (WID-1)")

    def test_repeated_key_last_wins(self, data_source):
        response = client.post(WEBHOOK, content=b"Body=order+1&Body=help", headers=self.FORM)
        assert reply_text(response) == HELP_MESSAGE

    def test_invalid_utf8_is_not_rejected(self, data_source):
        response = client.post(WEBHOOK, content=b"Body=\xff\xfehelp", headers=self.FORM)

        assert response.status_code == 200
        assert reply_text(response) == FALLBACK_MESSAGE

    def test_empty_body(self, data_source):
        response = client.post(WEBHOOK, content=b"", headers=self.FORM)

        assert response.status_code == 200
        assert reply_text(response) == FALLBACK_MESSAGE


class TestSignatureEnforcement:
    """Optional Twilio signature check on the webhook."""

    def test_unsigned_request_rejected_when_enabled(self, data_source):
        with patch("config.Config.TWILIO_VALIDATE_SIGNATURE", True), \
                patch("config.Config.TWILIO_AUTH_TOKEN", "token"):
            response = client.post(WEBHOOK, data={"Body": "help"})

        assert response.status_code == 401

    def test_signed_request_accepted_when_enabled(self, data_source):
        form = {"Body": "help"}
        signature = RequestValidator("token").compute_signature(f"http://testserver{WEBHOOK}", form)
        with patch("config.Config.TWILIO_VALIDATE_SIGNATURE", True), \
                patch("config.Config.TWILIO_AUTH_TOKEN", "token"), \
                patch("config.Config.TWILIO_WEBHOOK_URL", ""):
            response = client.post(WEBHOOK, data=form, headers={"X-Twilio-Signature": signature})

        assert response.status_code == 200
        assert reply_text(response) == HELP_MESSAGE

    def test_missing_token_when_enabled_is_500(self, data_source):
        with patch("config.Config.TWILIO_VALIDATE_SIGNATURE", True), \
                patch("config.Config.TWILIO_AUTH_TOKEN", ""):
            response = client.post(WEBHOOK, data={"Body": "help"}, headers={"X-Twilio-Signature": "x"})

        assert response.status_code == 500


class TestHealthEndpoints:
    """Test health check endpoints."""

    def test_whatsapp_health(self, data_source):
        response = client.get(f"{WEBHOOK}/health")

        assert response.status_code == 200
        assert response.json()["sheets_backend"] == "stub"

    def test_live(self):
        assert client.get("/health/live").json() == {"status": "alive"}

    def test_ready_with_stub_backend(self, monkeypatch):
        monkeypatch.setenv("SHEETS_BACKEND", "stub")
        with patch("config.Config.TWILIO_VALIDATE_SIGNATURE", False):
            assert client.get("/health/ready").json() == {"status": "ready"}

    def test_not_ready_without_sheet_id(self, monkeypatch):
        monkeypatch.setenv("SHEETS_BACKEND", "google")
        monkeypatch.delenv("GOOGLE_SHEETS_ID", raising=False)
        response = client.get("/health/ready").json()
        assert response["status"] == "not_ready"
        assert "GOOGLE_SHEETS_ID" in response["reason"]

    def test_root_lists_webhook(self):
        assert client.get("/").json()["endpoints"]["whatsapp_webhook"] == "POST /webhook/whatsapp"
