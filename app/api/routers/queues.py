from fastapi import APIRouter, Depends, Query

from app.api.deps import get_storage, unwrap
from app.domain.messages import ImageProcessingMessage, InventoryMessage, OrderMessage
from app.domain.schemas import MessageOut
from app.services.messaging_service import MessagingService
from app.storage.clients import StorageGateway
from app.utils.settings import QUEUE_PEEK_DEFAULT

router = APIRouter(prefix="/queues", tags=["queues"])


def get_service(storage: StorageGateway = Depends(get_storage)) -> MessagingService:
    return MessagingService(storage.queues)


def _message(result) -> MessageOut:
    unwrap(result)
    return MessageOut(success=True, message=result.message)


@router.get("/orders", response_model=list[OrderMessage], response_model_by_alias=True)
def peek_order_messages(
    max_messages: int = Query(default=QUEUE_PEEK_DEFAULT, ge=1, le=32),
    svc: MessagingService = Depends(get_service),
):
    return svc.peek_order_messages(max_messages)


@router.post("/orders", response_model=MessageOut)
def send_order_message(message: OrderMessage, svc: MessagingService = Depends(get_service)):
    return _message(svc.send_order_message(message))


@router.post("/inventory", response_model=MessageOut)
def send_inventory_message(message: InventoryMessage, svc: MessagingService = Depends(get_service)):
    return _message(svc.send_inventory_message(message))


@router.post("/images", response_model=MessageOut)
def send_image_message(message: ImageProcessingMessage, svc: MessagingService = Depends(get_service)):
    return _message(svc.send_image_message(message))


@router.post("/orders/process", response_model=MessageOut)
def process_order_message(svc: MessagingService = Depends(get_service)):
    return _message(svc.process_order_message())


@router.post("/inventory/process", response_model=MessageOut)
def process_inventory_message(svc: MessagingService = Depends(get_service)):
    return _message(svc.process_inventory_message())


@router.post("/images/process", response_model=MessageOut)
def process_image_message(svc: MessagingService = Depends(get_service)):
    return _message(svc.process_image_message())


@router.delete("/{queue_name}", response_model=MessageOut)
def clear_queue(queue_name: str, svc: MessagingService = Depends(get_service)):
    return _message(svc.clear_queue(queue_name))
