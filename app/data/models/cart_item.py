from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.models.user import utcnow


class CartItemModel(Base):
    __tablename__ = "CartItems"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("Cart.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(100), nullable=False)  # RowKey produktu w Products

    product_name = Column(String(200), nullable=False)
    price = Column(Numeric(18, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    image_url = Column(String(500), nullable=True)
    added_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_cart_item_quantity"),)

    @property
    def subtotal(self) -> Decimal:
        return Decimal(str(self.price)) * self.quantity
