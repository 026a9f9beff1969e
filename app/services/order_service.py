# app/services/order_service.py
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable

from sqlalchemy.orm import Session

from app.data.models.order import ORDER_STATUSES, OrderModel
from app.data.models.order_item import OrderItemModel
from app.data.models.user import utcnow
from app.domain.errors import EmptyCart, Forbidden, InvalidState, InvalidStatus, NotFound
from app.domain.messages import OrderMessage
from app.repos.order_repo import OrderRepo
from app.services.cart_service import CartService
from app.services.messaging_service import MessagingService
from app.services.results import ServiceResult, service_boundary
from app.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class OrderStatistics:
    total_orders: int = 0
    pending_orders: int = 0
    processed_orders: int = 0
    shipped_orders: int = 0
    delivered_orders: int = 0
    cancelled_orders: int = 0
    total_revenue: Decimal = Decimal("0.00")


def generate_order_number(customer_id: int, now: datetime) -> str:
    # unikalnosc pilnuje indeks na Orders.order_number
    return f"ORD-{now:%Y%m%d%H%M%S}-{customer_id}"


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    Zamowienie powstaje z koszyka jako niezmienny snapshot pozycji.
    """

    def __init__(
        self,
        db: Session,
        cart_service: CartService | None = None,
        messaging: MessagingService | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_service = cart_service or CartService(db)
        self.messaging = messaging
        self.clock = clock

    @service_boundary("Failed to create order")
    def create_order_from_cart(
        self,
        customer_id: int,
        shipping_address: str | None = None,
        notes: str | None = None,
    ) -> ServiceResult[OrderModel]:
        """
        Use Case: Tworzenie zamówienia z koszyka.

        1. Pobiera koszyk z pozycjami (pusty -> EmptyCart, bez zmian w bazie)
        2. W jednej transakcji zapisuje Order i OrderItems
        3. Czysci koszyk poza transakcja (best effort)
        4. Publikuje OrderMessage jesli kolejka jest podlaczona
        """
        cart = self.cart_service.get_cart_with_items(customer_id)

        if cart is None or not cart.items:
            raise EmptyCart("Cart is empty")

        now = self.clock()

        try:
            order = self.repo.add_order(
                OrderModel(
                    order_number=generate_order_number(customer_id, now),
                    customer_id=customer_id,
                    order_date=now,
                    total_amount=cart.total_amount,
                    status="PENDING",
                    shipping_address=shipping_address,
                    notes=notes,
                )
            )

            for cart_item in cart.items:
                self.repo.add_order_item(
                    OrderItemModel(
                        order_id=order.id,
                        product_id=cart_item.product_id,
                        product_name=cart_item.product_name,
                        price=cart_item.price,
                        quantity=cart_item.quantity,
                        subtotal=cart_item.subtotal,
                    )
                )

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(
            f"Order {order.order_number} created for customer {customer_id}, "
            f"total {order.total_amount}"
        )

        # zamowienie juz zapisane, niewyczyszczony koszyk mozna wyczyscic ponownie
        cleared = self.cart_service.clear(customer_id)
        if not cleared.success:
            logger.warning(
                f"Order {order.order_number} placed but cart of customer "
                f"{customer_id} was not cleared: {cleared.message}"
            )

        self._publish_order_placed(order)

        return ServiceResult.ok("Order placed successfully", order)

    def _publish_order_placed(self, order: OrderModel) -> None:
        if self.messaging is None:
            return

        result = self.messaging.send_order_message(
            OrderMessage(
                order_id=str(order.id),
                customer_id=str(order.customer_id),
                product_ids=[i.product_id for i in order.items],
                total_amount=order.total_amount,
                order_date=order.order_date,
                status=order.status,
                message=f"Order {order.order_number} placed",
            )
        )
        if not result.success:
            logger.warning(f"Order {order.order_number} not published: {result.message}")

    #query
    def get_order(self, order_id: int) -> OrderModel | None:
        return self.repo.get_order(order_id)

    def get_order_by_number(self, order_number: str) -> OrderModel | None:
        return self.repo.get_order_by_number(order_number)

    def get_customer_orders(self, customer_id: int) -> list[OrderModel]:
        return self.repo.list_orders(customer_id=customer_id)

    def get_all_orders(self) -> list[OrderModel]:
        return self.repo.list_orders()

    def get_orders_by_status(self, status: str) -> list[OrderModel]:
        return self.repo.list_orders(status=status.upper())

    @service_boundary("Failed to load order")
    def view_order(
        self, order_id: int, customer_id: int | None = None, is_admin: bool = False
    ) -> ServiceResult[OrderModel]:
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFound("Order not found")

        if not is_admin and order.customer_id != customer_id:
            raise Forbidden("You do not have permission to view this order")

        return ServiceResult.ok("Order loaded", order)

    #commands
    @service_boundary("Failed to update order status")
    def update_order_status(
        self, order_id: int, new_status: str, admin_user_id: int
    ) -> ServiceResult[OrderModel]:
        """
        Zmiana statusu przez admina. Dowolny status -> dowolny z pieciu,
        bez sprawdzania poprzedniego. PROCESSED za kazdym razem nadpisuje
        processed_date i processed_by.
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFound("Order not found")

        status = (new_status or "").upper()
        if status not in ORDER_STATUSES:
            raise InvalidStatus("Invalid order status")

        order.status = status

        if status == "PROCESSED":
            order.processed_date = self.clock()
            order.processed_by = admin_user_id

        self.repo.commit()
        logger.info(f"Order {order_id} status set to {status} by user {admin_user_id}")

        return ServiceResult.ok("Order status updated successfully", order)

    @service_boundary("Failed to cancel order")
    def cancel_order(self, order_id: int, customer_id: int) -> ServiceResult[OrderModel]:
        order = self.repo.get_order_for_customer(order_id, customer_id)

        if not order:
            raise NotFound("Order not found")

        if order.status != "PENDING":
            raise InvalidState("Only pending orders can be cancelled")

        order.status = "CANCELLED"
        self.repo.commit()
        logger.info(f"Order {order_id} cancelled by customer {customer_id}")

        return ServiceResult.ok("Order cancelled successfully", order)

    def get_order_statistics(self) -> OrderStatistics:
        # pelny skan tabeli, wystarcza przy malej skali
        orders = self.repo.all_orders()
        counts = {status: 0 for status in ORDER_STATUSES}
        revenue = Decimal("0.00")

        for order in orders:
            counts[order.status] = counts.get(order.status, 0) + 1
            if order.status != "CANCELLED":
                revenue += Decimal(str(order.total_amount))

        return OrderStatistics(
            total_orders=len(orders),
            pending_orders=counts["PENDING"],
            processed_orders=counts["PROCESSED"],
            shipped_orders=counts["SHIPPED"],
            delivered_orders=counts["DELIVERED"],
            cancelled_orders=counts["CANCELLED"],
            total_revenue=revenue,
        )
