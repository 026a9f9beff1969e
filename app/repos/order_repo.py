# app/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.data.models.customer import CustomerModel
from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def _with_details(self):
        return select(OrderModel).options(
            selectinload(OrderModel.items),
            selectinload(OrderModel.customer).selectinload(CustomerModel.user),
        )

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        return item

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            self._with_details().where(OrderModel.id == order_id)
        ).scalar_one_or_none()

    def get_order_for_customer(self, order_id: int, customer_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(
                OrderModel.id == order_id,
                OrderModel.customer_id == customer_id,
            )
        ).scalar_one_or_none()

    def get_order_by_number(self, order_number: str) -> OrderModel | None:
        return self.db.execute(
            self._with_details().where(OrderModel.order_number == order_number)
        ).scalar_one_or_none()

    def list_orders(
        self,
        customer_id: int | None = None,
        status: str | None = None,
    ) -> list[OrderModel]:
        stmt = self._with_details()
        if customer_id is not None:
            stmt = stmt.where(OrderModel.customer_id == customer_id)
        if status is not None:
            stmt = stmt.where(OrderModel.status == status)
        stmt = stmt.order_by(OrderModel.order_date.desc(), OrderModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def all_orders(self) -> list[OrderModel]:
        return list(self.db.execute(select(OrderModel)).scalars().all())

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
