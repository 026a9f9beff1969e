# app/services/messaging_service.py
from typing import TypeVar

from app.domain.errors import ValidationError
from app.domain.messages import (
    ImageProcessingMessage,
    InventoryMessage,
    OrderMessage,
    QueueMessage,
)
from app.services.results import ServiceResult, service_boundary
from app.storage.queues import QueueStore
from app.utils.settings import (
    IMAGE_QUEUE,
    INVENTORY_QUEUE,
    ORDER_QUEUE,
    QUEUE_PEEK_DEFAULT,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound=QueueMessage)

QUEUE_NAMES = (ORDER_QUEUE, INVENTORY_QUEUE, IMAGE_QUEUE)


class MessagingService:
    """Wysylanie i odbior wiadomosci na trzech stalych kolejkach."""

    def __init__(self, queues: QueueStore):
        self.queues = queues

    def _send(self, queue_name: str, message: QueueMessage) -> None:
        self.queues.send(queue_name, message.to_json())

    def _receive(self, queue_name: str, message_type: type[M]) -> M | None:
        payload = self.queues.receive_one(queue_name)
        if payload is None:
            return None
        return message_type.from_json(payload)

    @service_boundary("Error sending order message")
    def send_order_message(self, message: OrderMessage) -> ServiceResult[None]:
        self._send(ORDER_QUEUE, message)
        return ServiceResult.ok("Order message sent successfully!")

    @service_boundary("Error sending inventory message")
    def send_inventory_message(self, message: InventoryMessage) -> ServiceResult[None]:
        self._send(INVENTORY_QUEUE, message)
        return ServiceResult.ok("Inventory message sent successfully!")

    @service_boundary("Error sending image message")
    def send_image_message(self, message: ImageProcessingMessage) -> ServiceResult[None]:
        self._send(IMAGE_QUEUE, message)
        return ServiceResult.ok("Image processing message sent successfully!")

    @service_boundary("Error processing order message")
    def process_order_message(self) -> ServiceResult[OrderMessage]:
        message = self._receive(ORDER_QUEUE, OrderMessage)
        if message is None:
            return ServiceResult.ok("No order messages to process.")
        return ServiceResult.ok(f"Processed order message: {message.order_id or 'Unknown'}", message)

    @service_boundary("Error processing inventory message")
    def process_inventory_message(self) -> ServiceResult[InventoryMessage]:
        message = self._receive(INVENTORY_QUEUE, InventoryMessage)
        if message is None:
            return ServiceResult.ok("No inventory messages to process.")
        return ServiceResult.ok(
            f"Processed inventory message for product: {message.product_id or 'Unknown'}",
            message,
        )

    @service_boundary("Error processing image message")
    def process_image_message(self) -> ServiceResult[ImageProcessingMessage]:
        message = self._receive(IMAGE_QUEUE, ImageProcessingMessage)
        if message is None:
            return ServiceResult.ok("No image processing messages to process.")
        return ServiceResult.ok(
            f"Processed image message: {message.image_name or 'Unknown'}", message
        )

    def peek_order_messages(self, max_messages: int = QUEUE_PEEK_DEFAULT) -> list[OrderMessage]:
        messages = []
        for payload in self.queues.peek(ORDER_QUEUE, max_messages):
            try:
                messages.append(OrderMessage.from_json(payload))
            except ValueError:
                logger.warning(f"Skipping malformed message on {ORDER_QUEUE}")
        return messages

    @service_boundary("Error clearing queue")
    def clear_queue(self, queue_name: str) -> ServiceResult[None]:
        if queue_name not in QUEUE_NAMES:
            raise ValidationError(f"Unknown queue '{queue_name}'")
        self.queues.clear(queue_name)
        return ServiceResult.ok(f"Queue {queue_name} cleared")
