# app/storage/queues.py
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.queue import QueueClient, QueueServiceClient

from app.utils.logging import get_logger

logger = get_logger(__name__)

# limit uslugi na jeden peek
MAX_PEEK = 32


class QueueStore:
    """
    Raw string messages on named queues.

    receive_one is at-most-once: the message is deleted as soon as it is read,
    a consumer that fails afterwards loses it.
    """

    def __init__(self, service: QueueServiceClient):
        self.service = service

    def queue(self, name: str) -> QueueClient:
        return self.service.get_queue_client(name)

    def ensure_queue(self, name: str) -> QueueClient:
        client = self.queue(name)
        try:
            client.create_queue()
        except ResourceExistsError:
            pass
        return client

    def send(self, name: str, payload: str) -> None:
        client = self.ensure_queue(name)
        client.send_message(payload)
        logger.info(f"Message sent to {name}")

    def receive_one(self, name: str) -> str | None:
        client = self.queue(name)
        try:
            message = client.receive_message()
        except ResourceNotFoundError:
            return None

        if message is None:
            return None

        client.delete_message(message)
        logger.info(f"Message {message.id} received from {name}")
        return message.content

    def peek(self, name: str, max_messages: int = 10) -> list[str]:
        client = self.queue(name)
        try:
            messages = client.peek_messages(max_messages=max(1, min(max_messages, MAX_PEEK)))
        except ResourceNotFoundError:
            return []
        return [m.content for m in messages]

    def clear(self, name: str) -> None:
        try:
            self.queue(name).clear_messages()
        except ResourceNotFoundError:
            return
        logger.info(f"Queue {name} cleared")
