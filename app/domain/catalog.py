# app/domain/catalog.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TableRecord(BaseModel):
    """Wspolne pola encji z Table Storage (klucze + etag)."""

    model_config = ConfigDict(populate_by_name=True)

    partition_key: str = Field(alias="PartitionKey")
    row_key: str = Field(default="", alias="RowKey")
    etag: str | None = Field(default=None, exclude=True)

    def to_entity(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Product(TableRecord):
    partition_key: str = Field(default="Product", alias="PartitionKey")

    product_name: str = Field(default="", alias="ProductName")
    description: str = Field(default="", alias="Description")
    price: float = Field(default=0.0, alias="Price")
    stock_quantity: int = Field(default=0, alias="StockQuantity")
    category: str = Field(default="", alias="Category")
    image_url: str = Field(default="", alias="ImageUrl")
    created_date: datetime | None = Field(default=None, alias="CreatedDate")
    is_available: bool = Field(default=True, alias="IsAvailable")


class CustomerProfile(TableRecord):
    partition_key: str = Field(default="Customer", alias="PartitionKey")

    first_name: str = Field(default="", alias="FirstName")
    last_name: str = Field(default="", alias="LastName")
    email: str = Field(default="", alias="Email")
    phone_number: str = Field(default="", alias="PhoneNumber")
    address: str = Field(default="", alias="Address")
    created_date: datetime | None = Field(default=None, alias="CreatedDate")
    is_active: bool = Field(default=True, alias="IsActive")
