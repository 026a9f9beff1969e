#app/data/models/cart.py
from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.models.user import utcnow


class CartModel(Base):
    __tablename__ = "Cart"

    id = Column(Integer, primary_key=True)
    customer_id = Column(
        Integer,
        ForeignKey("Customers.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    created_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    customer = relationship("CustomerModel", back_populates="cart")
    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CartItemModel.id",
    )

    @property
    def total_amount(self) -> Decimal:
        return sum((i.subtotal for i in self.items), Decimal("0.00"))

    @property
    def total_items(self) -> int:
        return sum(i.quantity for i in self.items)
