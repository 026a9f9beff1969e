from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.data.database import Base


class OrderItemModel(Base):
    __tablename__ = "OrderItems"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("Orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(100), nullable=False)

    product_name = Column(String(200), nullable=False)
    price = Column(Numeric(18, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    subtotal = Column(Numeric(18, 2), nullable=False)

    order = relationship("OrderModel", back_populates="items")
