from decimal import Decimal

from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.data.models.user import utcnow
from app.domain.errors import NotFound, ValidationError
from app.repos.cart_repo import CartRepo
from app.services.results import ServiceResult, service_boundary
from app.storage.tables import ProductTable
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Koszyk klienta (cart + pozycje) jako jedna jednostka spojnosci.
    commands (add, update, remove, clear) zwracaja ServiceResult
    query (get, count) tylko odczyt

    Kazda komenda to osobny commit, dwie rownolegle karty przegladarki
    dodajace ten sam produkt nie sa serializowane (last write wins).
    """

    def __init__(self, db: Session, products: ProductTable | None = None):
        self.db = db
        self.repo = CartRepo(db)
        self.products = products

    #query - odczyt
    def get_cart_with_items(self, customer_id: int) -> CartModel | None:
        return self.repo.get_cart_by_customer(customer_id)

    def item_count(self, customer_id: int) -> int:
        cart = self.repo.get_cart_by_customer(customer_id)
        if not cart:
            return 0
        return cart.total_items

    #commands
    def get_or_create_cart(self, customer_id: int) -> CartModel:
        cart = self.repo.get_cart_by_customer(customer_id)
        if cart:
            return cart

        if not self.repo.customer_exists(customer_id):
            raise NotFound("Customer not found")

        now = utcnow()
        cart = self.repo.create_cart(
            CartModel(customer_id=customer_id, created_date=now, updated_date=now)
        )
        self.repo.commit()

        logger.info(f"Created cart {cart.id} for customer {customer_id}")
        return cart

    @service_boundary("Failed to load cart")
    def open_cart(self, customer_id: int) -> ServiceResult[CartModel]:
        return ServiceResult.ok("Cart loaded", self.get_or_create_cart(customer_id))

    @service_boundary("Failed to add item to cart")
    def add_item(
        self,
        customer_id: int,
        product_id: str,
        product_name: str,
        price: Decimal | float | str,
        quantity: int,
        image_url: str | None = None,
    ) -> ServiceResult[CartItemModel]:
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        cart = self.get_or_create_cart(customer_id)

        #ten sam produkt = ta sama pozycja, cena zostaje z pierwszego dodania
        existing_item = self.repo.get_cart_item_by_product(cart.id, product_id)

        if existing_item:
            logger.info(
                f"Product {product_id} already in cart {cart.id}, quantity "
                f"{existing_item.quantity} -> {existing_item.quantity + quantity}"
            )
            existing_item.quantity += quantity
            item = existing_item
        else:
            logger.info(f"Adding product {product_id} to cart {cart.id}")
            item = self.repo.add_cart_item(
                CartItemModel(
                    cart_id=cart.id,
                    product_id=product_id,
                    product_name=product_name,
                    price=Decimal(str(price)),
                    quantity=quantity,
                    image_url=image_url,
                    added_date=utcnow(),
                )
            )

        cart.updated_date = utcnow()
        self.repo.commit()

        return ServiceResult.ok("Item added to cart successfully", item)

    @service_boundary("Failed to add item to cart")
    def add_product_from_catalog(
        self, customer_id: int, product_id: str, quantity: int = 1
    ) -> ServiceResult[CartItemModel]:
        """Dodaje produkt z katalogu, sprawdza dostepnosc i stan magazynu."""
        if self.products is None:
            raise RuntimeError("Product catalog is not configured")

        product = self.products.get_product(product_id)

        if not product.is_available:
            raise ValidationError("Product is not available")

        if product.stock_quantity < quantity:
            raise ValidationError(
                f"Only {product.stock_quantity} items available in stock"
            )

        return self.add_item(
            customer_id,
            product.row_key,
            product.product_name,
            Decimal(str(product.price)),
            quantity,
            product.image_url or None,
        )

    @service_boundary("Failed to update cart")
    def update_item_quantity(self, cart_item_id: int, quantity: int) -> ServiceResult[CartItemModel]:
        item = self.repo.get_cart_item(cart_item_id)

        if not item:
            raise NotFound("Cart item not found")

        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        item.quantity = quantity
        if item.cart is not None:
            item.cart.updated_date = utcnow()

        self.repo.commit()
        logger.info(f"Cart item {cart_item_id} quantity set to {quantity}")

        return ServiceResult.ok("Cart updated successfully", item)

    @service_boundary("Failed to remove item")
    def remove_item(self, cart_item_id: int) -> ServiceResult[None]:
        item = self.repo.get_cart_item(cart_item_id)

        if not item:
            raise NotFound("Cart item not found")

        cart = item.cart
        self.repo.delete_cart_item(item)
        if cart is not None:
            cart.updated_date = utcnow()

        self.repo.commit()
        logger.info(f"Cart item {cart_item_id} removed")

        return ServiceResult.ok("Item removed from cart")

    @service_boundary("Failed to clear cart")
    def clear(self, customer_id: int) -> ServiceResult[int]:
        cart = self.repo.get_cart_by_customer(customer_id)

        if not cart:
            return ServiceResult.ok("Cart is already empty", 0)

        removed = self.repo.clear_cart_items(cart)
        cart.updated_date = utcnow()
        self.repo.commit()

        logger.info(f"Cleared {removed} items from cart {cart.id}")
        return ServiceResult.ok("Cart cleared successfully", removed)
