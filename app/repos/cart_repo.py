# app/repos/cart_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.data.models.customer import CustomerModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_customer(self, customer_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel)
            .options(selectinload(CartModel.items))
            .where(CartModel.customer_id == customer_id)
        ).scalar_one_or_none()

    def customer_exists(self, customer_id: int) -> bool:
        return self.db.get(CustomerModel, customer_id) is not None

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def get_cart_item(self, cart_item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, cart_item_id)

    def get_cart_item_by_product(self, cart_id: int, product_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def clear_cart_items(self, cart: CartModel) -> int:
        removed = len(cart.items)
        #delete-orphan usuwa wiersze przy flush
        cart.items.clear()
        self.db.flush()
        return removed

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
