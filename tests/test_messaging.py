import json
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from app.domain.errors import ValidationError
from app.domain.messages import ImageProcessingMessage, InventoryMessage, OrderMessage
from app.services.messaging_service import MessagingService
from app.storage.queues import QueueStore


@pytest.fixture
def queue_client():
    return MagicMock()


@pytest.fixture
def service(queue_client):
    service_client = MagicMock()
    service_client.get_queue_client.return_value = queue_client
    return MessagingService(QueueStore(service_client))


def test_order_message_uses_camel_case_and_numeric_amount():
    message = OrderMessage(
        order_id="15",
        customer_id="3",
        product_ids=["P1", "P2"],
        total_amount=Decimal("25.00"),
        order_date=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )

    payload = json.loads(message.to_json())

    assert payload["orderId"] == "15"
    assert payload["productIds"] == ["P1", "P2"]
    assert payload["totalAmount"] == 25.0
    assert payload["status"] == "Pending"
    assert OrderMessage.from_json(message.to_json()) == message


def test_message_defaults():
    assert ImageProcessingMessage().status == "Processing"
    assert InventoryMessage(product_id="P1", action="LOW_STOCK_ALERT").quantity == 0


def test_send_order_message(service, queue_client):
    result = service.send_order_message(OrderMessage(order_id="1"))

    assert result.success
    assert result.message == "Order message sent successfully!"
    payload = json.loads(queue_client.send_message.call_args.args[0])
    assert payload["orderId"] == "1"


def test_send_failure_becomes_result(service, queue_client):
    queue_client.send_message.side_effect = RuntimeError("network down")

    result = service.send_inventory_message(InventoryMessage(product_id="P1"))

    assert not result.success
    assert result.message.startswith("Error sending inventory message")


def test_process_order_message(service, queue_client):
    queue_client.receive_message.return_value = MagicMock(
        id="m1", content=OrderMessage(order_id="42").to_json()
    )

    result = service.process_order_message()

    assert result.success
    assert result.message == "Processed order message: 42"
    assert result.value.order_id == "42"
    queue_client.delete_message.assert_called_once()


def test_process_empty_queue(service, queue_client):
    queue_client.receive_message.return_value = None

    result = service.process_image_message()

    assert result.success
    assert result.message == "No image processing messages to process."
    assert result.value is None


def test_peek_skips_malformed(service, queue_client):
    queue_client.peek_messages.return_value = [
        MagicMock(content=OrderMessage(order_id="1").to_json()),
        MagicMock(content="to nie jest json"),
    ]

    messages = service.peek_order_messages()

    assert [m.order_id for m in messages] == ["1"]


def test_clear_known_queue(service, queue_client):
    assert service.clear_queue("order-processing").success
    queue_client.clear_messages.assert_called_once()


def test_clear_unknown_queue_is_rejected(service, queue_client):
    result = service.clear_queue("payments")

    assert isinstance(result.error, ValidationError)
    queue_client.clear_messages.assert_not_called()


def test_pascal_case_payload_from_older_producer_is_decoded():
    payload = json.dumps(
        {
            "OrderId": "42",
            "CustomerId": "7",
            "ProductIds": ["P1", "P2"],
            "TotalAmount": 25.0,
            "OrderDate": "2026-01-01T12:00:00Z",
            "Status": "Pending",
            "Message": "Order placed",
        }
    )

    message = OrderMessage.from_json(payload)

    assert message.order_id == "42"
    assert message.customer_id == "7"
    assert message.product_ids == ["P1", "P2"]
    assert message.total_amount == Decimal("25")
    assert message.message == "Order placed"
    # wysylka zawsze w camelCase
    assert "orderId" in json.loads(message.to_json())


def test_process_pascal_case_inventory_message(service, queue_client):
    queue_client.receive_message.return_value = MagicMock(
        id="m2",
        content=json.dumps({"ProductId": "P9", "Action": "REORDER", "Quantity": 12}),
    )

    result = service.process_inventory_message()

    assert result.message == "Processed inventory message for product: P9"
    assert result.value.quantity == 12


@pytest.mark.parametrize("amount", ["0.01", "25.00", "99999999999.99", "9999999999999.99"])
def test_amounts_up_to_fifteen_digits_survive_queue_round_trip(amount):
    message = OrderMessage(order_id="1", total_amount=Decimal(amount))

    decoded = OrderMessage.from_json(message.to_json())

    assert decoded.total_amount == Decimal(amount)
