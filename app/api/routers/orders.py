# app/api/routers/orders.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_storage, require_admin, unwrap
from app.data.database import get_db
from app.data.models.user import UserModel
from app.domain.schemas import (
    OrderOut,
    OrderStatisticsOut,
    OrderStatusIn,
    PlaceOrderIn,
)
from app.services.cart_service import CartService
from app.services.messaging_service import MessagingService
from app.services.order_service import OrderService
from app.storage.clients import StorageGateway

router = APIRouter(prefix="/orders", tags=["orders"])
admin_router = APIRouter(prefix="/admin/orders", tags=["admin"])


def get_service(
    db: Session = Depends(get_db),
    storage: StorageGateway = Depends(get_storage),
) -> OrderService:
    return OrderService(
        db,
        cart_service=CartService(db, products=storage.products),
        messaging=MessagingService(storage.queues),
    )


#klient
@router.post("/", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def place_order(
    payload: PlaceOrderIn,
    customer_id: int = Query(...),
    svc: OrderService = Depends(get_service),
):
    """
    Tworzy zamówienie z koszyka klienta i czysci koszyk.
    """
    order = unwrap(
        svc.create_order_from_cart(customer_id, payload.shipping_address, payload.notes)
    )
    return OrderOut.model_validate(order)


@router.get("/", response_model=list[OrderOut])
def list_orders(customer_id: int = Query(...), svc: OrderService = Depends(get_service)):
    return [OrderOut.model_validate(o) for o in svc.get_customer_orders(customer_id)]


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    customer_id: int = Query(...),
    svc: OrderService = Depends(get_service),
):
    order = unwrap(svc.view_order(order_id, customer_id=customer_id))
    return OrderOut.model_validate(order)


@router.post("/{order_id}/cancel", response_model=OrderOut)
def cancel_order(
    order_id: int,
    customer_id: int = Query(...),
    svc: OrderService = Depends(get_service),
):
    order = unwrap(svc.cancel_order(order_id, customer_id))
    return OrderOut.model_validate(order)


#admin
@admin_router.get("/", response_model=list[OrderOut], dependencies=[Depends(require_admin)])
def list_all_orders(
    status_filter: str | None = Query(default=None, alias="status"),
    svc: OrderService = Depends(get_service),
):
    orders = svc.get_orders_by_status(status_filter) if status_filter else svc.get_all_orders()
    return [OrderOut.model_validate(o) for o in orders]


@admin_router.get(
    "/statistics", response_model=OrderStatisticsOut, dependencies=[Depends(require_admin)]
)
def order_statistics(svc: OrderService = Depends(get_service)):
    return OrderStatisticsOut.model_validate(svc.get_order_statistics())


@admin_router.get("/by-number/{order_number}", response_model=OrderOut, dependencies=[Depends(require_admin)])
def get_order_by_number(order_number: str, svc: OrderService = Depends(get_service)):
    order = svc.get_order_by_number(order_number)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderOut.model_validate(order)


@admin_router.get("/{order_id}", response_model=OrderOut, dependencies=[Depends(require_admin)])
def admin_get_order(order_id: int, svc: OrderService = Depends(get_service)):
    order = unwrap(svc.view_order(order_id, is_admin=True))
    return OrderOut.model_validate(order)


@admin_router.put("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusIn,
    admin: UserModel = Depends(require_admin),
    svc: OrderService = Depends(get_service),
):
    order = unwrap(svc.update_order_status(order_id, payload.status, admin.id))
    return OrderOut.model_validate(order)
