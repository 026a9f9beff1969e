from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.models.user import utcnow

ORDER_STATUSES = ("PENDING", "PROCESSED", "SHIPPED", "DELIVERED", "CANCELLED")


class OrderModel(Base):
    __tablename__ = "Orders"

    id = Column(Integer, primary_key=True)
    order_number = Column(String(50), nullable=False, unique=True)
    customer_id = Column(
        Integer, ForeignKey("Customers.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    order_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    total_amount = Column(Numeric(18, 2), nullable=False)
    status = Column(String(50), nullable=False, default="PENDING")
    shipping_address = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    processed_date = Column(DateTime(timezone=True), nullable=True)
    processed_by = Column(Integer, ForeignKey("Users.id", ondelete="RESTRICT"), nullable=True)

    customer = relationship("CustomerModel", back_populates="orders")
    processed_by_user = relationship("UserModel")
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItemModel.id",
    )
