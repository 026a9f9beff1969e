# app/domain/schemas.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class MessageOut(BaseModel):
    """Odpowiedz dla komend bez danych."""

    success: bool
    message: str


# ----- konta -----

class RegisterIn(BaseModel):
    """Schema dla rejestracji klienta."""

    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=72)
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    phone_number: str | None = Field(default=None, max_length=20)
    address: str | None = Field(default=None, max_length=500)
    city: str | None = Field(default=None, max_length=100)
    postal_code: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)


class LoginIn(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)


class AdminCreateIn(BaseModel):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=72)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)


class UserRead(BaseModel):
    """Schema dla użytkownika (response)."""

    id: int
    username: str
    email: str
    role: str
    is_active: bool
    created_date: datetime
    last_login_date: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class CustomerRead(BaseModel):
    id: int
    user_id: int
    first_name: str
    last_name: str
    phone_number: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None

    model_config = ConfigDict(from_attributes=True)


class LoginOut(BaseModel):
    user: UserRead
    customer: CustomerRead | None = None

    model_config = ConfigDict(from_attributes=True)


# ----- koszyk -----

class ItemIn(BaseModel):
    """Schema dla dodawania produktu z katalogu do koszyka."""

    product_id: str = Field(..., min_length=1, max_length=100)
    quantity: int = Field(default=1, gt=0, description="Ilość produktu (musi być > 0)")


class QuantityIn(BaseModel):
    quantity: int


class CartItemOut(BaseModel):
    """Schema dla produktu w koszyku (response)."""

    id: int
    product_id: str
    product_name: str
    price: Decimal
    quantity: int
    image_url: str | None = None
    subtotal: Decimal
    added_date: datetime

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    id: int
    customer_id: int
    items: List[CartItemOut]
    total_amount: Decimal
    total_items: int
    created_date: datetime
    updated_date: datetime

    model_config = ConfigDict(from_attributes=True)


class CartCountOut(BaseModel):
    customer_id: int
    count: int


# ----- zamowienia -----

class PlaceOrderIn(BaseModel):
    """Schema dla tworzenia zamówienia z koszyka."""

    shipping_address: str | None = Field(default=None, max_length=500)
    notes: str | None = None


class OrderStatusIn(BaseModel):
    status: str = Field(..., min_length=1)


class OrderItemOut(BaseModel):
    id: int
    product_id: str
    product_name: str
    price: Decimal
    quantity: int
    subtotal: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamówienia (response)."""

    id: int
    order_number: str
    customer_id: int
    order_date: datetime
    total_amount: Decimal
    status: str
    shipping_address: str | None = None
    notes: str | None = None
    processed_date: datetime | None = None
    processed_by: int | None = None
    items: List[OrderItemOut] = []

    model_config = ConfigDict(from_attributes=True)


class OrderStatisticsOut(BaseModel):
    total_orders: int
    pending_orders: int
    processed_orders: int
    shipped_orders: int
    delivered_orders: int
    cancelled_orders: int
    total_revenue: Decimal

    model_config = ConfigDict(from_attributes=True)


# ----- katalog -----

class ProductIn(BaseModel):
    """Schema dla produktu w katalogu (request)."""

    product_name: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    price: float = Field(..., ge=0.01, description="Cena musi być > 0")
    stock_quantity: int = Field(..., ge=0)
    category: str = Field(..., min_length=1)
    image_url: str = ""
    is_available: bool = True


class ProductOut(BaseModel):
    row_key: str
    product_name: str
    description: str
    price: float
    stock_quantity: int
    category: str
    image_url: str
    created_date: datetime | None = None
    is_available: bool

    model_config = ConfigDict(from_attributes=True)


class CustomerProfileIn(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phone_number: str = Field(default="", max_length=20)
    address: str = ""
    is_active: bool = True


class CustomerProfileOut(BaseModel):
    row_key: str
    first_name: str
    last_name: str
    email: str
    phone_number: str
    address: str
    created_date: datetime | None = None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


# ----- pliki -----

def new_contract_id() -> str:
    return uuid.uuid4().hex[:8].upper()


class Contract(BaseModel):
    """Umowa klienta, sam plik lezy w udziale plikow."""

    contract_id: str = Field(default_factory=new_contract_id)
    contract_name: str = Field(..., min_length=1, max_length=100)
    customer_id: str = Field(..., min_length=1)
    contract_type: str = Field(..., min_length=1)  # Service, NDA, ...
    created_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expiry_date: datetime | None = None
    status: str = "Draft"
    file_path: str = ""


class FileListOut(BaseModel):
    files: List[str]
