#app/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_storage, unwrap
from app.data.database import get_db
from app.domain.schemas import CartCountOut, CartItemOut, CartOut, ItemIn, MessageOut, QuantityIn
from app.services.cart_service import CartService
from app.storage.clients import StorageGateway

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(
    db: Session = Depends(get_db),
    storage: StorageGateway = Depends(get_storage),
) -> CartService:
    return CartService(db, products=storage.products)


@router.get("/{customer_id}", response_model=CartOut)
def get_cart(customer_id: int, svc: CartService = Depends(get_service)):
    cart = unwrap(svc.open_cart(customer_id))
    return CartOut.model_validate(cart)


@router.get("/{customer_id}/count", response_model=CartCountOut)
def get_cart_count(customer_id: int, svc: CartService = Depends(get_service)):
    return CartCountOut(customer_id=customer_id, count=svc.item_count(customer_id))


@router.post("/{customer_id}/items", response_model=CartItemOut)
def add_item(customer_id: int, payload: ItemIn, svc: CartService = Depends(get_service)):
    item = unwrap(
        svc.add_product_from_catalog(customer_id, payload.product_id, payload.quantity)
    )
    return CartItemOut.model_validate(item)


@router.put("/items/{cart_item_id}", response_model=CartItemOut)
def update_item(cart_item_id: int, payload: QuantityIn, svc: CartService = Depends(get_service)):
    item = unwrap(svc.update_item_quantity(cart_item_id, payload.quantity))
    return CartItemOut.model_validate(item)


@router.delete("/items/{cart_item_id}", response_model=MessageOut)
def remove_item(cart_item_id: int, svc: CartService = Depends(get_service)):
    result = svc.remove_item(cart_item_id)
    unwrap(result)
    return MessageOut(success=True, message=result.message)


@router.delete("/{customer_id}/items", response_model=MessageOut)
def clear_cart(customer_id: int, svc: CartService = Depends(get_service)):
    result = svc.clear(customer_id)
    unwrap(result)
    return MessageOut(success=True, message=result.message)
