# app/storage/tables.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping, TypeVar

import pydantic
from azure.core import MatchConditions
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.data.tables import EntityProperty, TableServiceClient, UpdateMode

from app.domain.catalog import CustomerProfile, Product, TableRecord
from app.domain.errors import Conflict, NotFound
from app.utils.settings import (
    CUSTOMER_PARTITION,
    CUSTOMER_PROFILE_TABLE,
    PRODUCT_PARTITION,
    PRODUCT_TABLE,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)

R = TypeVar("R", bound=TableRecord)


# ---------------------------------------------------------------------------
# coercion of heterogeneous historical records
# ---------------------------------------------------------------------------

def _unwrap(value: Any) -> Any:
    # Int64 and other explicitly typed values come back as EntityProperty(value, edm_type)
    return value.value if isinstance(value, EntityProperty) else value


def as_str(value: Any) -> str:
    return "" if value is None else str(value)


def as_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    return 0.0


def as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return 0
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        try:
            return int(value)
        except (ValueError, OverflowError, InvalidOperation):
            return 0
    return 0


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


Coercers = dict[str, Callable[[Any], Any]]

PRODUCT_COERCERS: Coercers = {
    "ProductName": as_str,
    "Description": as_str,
    "Price": as_float,
    "StockQuantity": as_int,
    "Category": as_str,
    "ImageUrl": as_str,
    "CreatedDate": as_datetime,
    "IsAvailable": as_bool,
}

CUSTOMER_PROFILE_COERCERS: Coercers = {
    "FirstName": as_str,
    "LastName": as_str,
    "Email": as_str,
    "PhoneNumber": as_str,
    "Address": as_str,
    "CreatedDate": as_datetime,
    "IsActive": as_bool,
}


def decode_entity(model: type[R], entity: Mapping[str, Any], coercers: Coercers) -> R:
    """
    Project a raw table entity onto a typed record.

    The strict decode is tried first. Records written by older clients may
    store e.g. Price as a string, in which case every known attribute is
    coerced one by one: unparseable values fall back to their zero value,
    attributes the record never had keep the model default.
    """
    metadata = getattr(entity, "metadata", None) or {}
    keys = {
        "PartitionKey": entity.get("PartitionKey", ""),
        "RowKey": entity.get("RowKey", ""),
        "etag": metadata.get("etag"),
    }
    known = {name: entity[name] for name in coercers if name in entity}

    try:
        return model.model_validate({**known, **keys}, strict=True)
    except pydantic.ValidationError:
        logger.info(
            f"Entity {keys['PartitionKey']}/{keys['RowKey']} has mismatched types, coercing"
        )

    coerced = {
        name: coerce(_unwrap(entity[name]))
        for name, coerce in coercers.items()
        if name in entity
    }
    return model.model_validate({**coerced, **keys})


# ---------------------------------------------------------------------------
# gateway
# ---------------------------------------------------------------------------

class TableStore:
    """put/get/query/delete over one table of the key-attribute store."""

    def __init__(self, service: TableServiceClient, table_name: str):
        self.service = service
        self.table_name = table_name
        self.client = service.get_table_client(table_name)

    def ensure_table(self) -> None:
        self.service.create_table_if_not_exists(self.table_name)

    def insert(self, partition: str, key: str, record: Mapping[str, Any]) -> dict[str, Any]:
        self.ensure_table()
        entity = {**record, "PartitionKey": partition, "RowKey": key}
        try:
            self.client.create_entity(entity=entity)
        except ResourceExistsError:
            raise Conflict(f"Entity {partition}/{key} already exists")
        return entity

    def put(
        self,
        partition: str,
        key: str,
        record: Mapping[str, Any],
        etag: str | None = None,
    ) -> dict[str, Any]:
        self.ensure_table()
        entity = {**record, "PartitionKey": partition, "RowKey": key}
        if etag:
            self.client.update_entity(
                entity=entity,
                mode=UpdateMode.REPLACE,
                etag=etag,
                match_condition=MatchConditions.IfNotModified,
            )
        else:
            self.client.upsert_entity(entity=entity, mode=UpdateMode.REPLACE)
        return entity

    def get(self, partition: str, key: str) -> Mapping[str, Any]:
        try:
            return self.client.get_entity(partition_key=partition, row_key=key)
        except ResourceNotFoundError:
            raise NotFound(f"Entity {partition}/{key} not found")

    def query_all(self, partition: str) -> list[Mapping[str, Any]]:
        try:
            return list(
                self.client.query_entities(
                    query_filter="PartitionKey eq @pk", parameters={"pk": partition}
                )
            )
        except ResourceNotFoundError:
            # tabela powstaje przy pierwszym zapisie
            return []

    def delete(self, partition: str, key: str) -> None:
        self.client.delete_entity(partition_key=partition, row_key=key)


class ProductTable(TableStore):
    def __init__(self, service: TableServiceClient, table_name: str = PRODUCT_TABLE):
        super().__init__(service, table_name)

    def create_product(self, product: Product) -> Product:
        product = product.model_copy(
            update={
                "partition_key": PRODUCT_PARTITION,
                "row_key": str(uuid.uuid4()),
                "created_date": product.created_date or datetime.now(timezone.utc),
            }
        )
        self.insert(PRODUCT_PARTITION, product.row_key, product.to_entity())
        logger.info(f"Product {product.row_key} created")
        return product

    def get_product(self, product_id: str) -> Product:
        try:
            entity = self.get(PRODUCT_PARTITION, product_id)
        except NotFound:
            raise NotFound("Product not found")
        return decode_entity(Product, entity, PRODUCT_COERCERS)

    def list_products(self, category: str | None = None) -> list[Product]:
        products = [
            decode_entity(Product, entity, PRODUCT_COERCERS)
            for entity in self.query_all(PRODUCT_PARTITION)
        ]
        # filtr po dekodowaniu, zeby stare rekordy z innymi typami tez sie liczyly
        if category:
            products = [p for p in products if p.category == category]
        return products

    def update_product(self, product: Product) -> Product:
        self.put(PRODUCT_PARTITION, product.row_key, product.to_entity(), etag=product.etag)
        return product

    def delete_product(self, product_id: str) -> None:
        self.delete(PRODUCT_PARTITION, product_id)


class CustomerProfileTable(TableStore):
    def __init__(self, service: TableServiceClient, table_name: str = CUSTOMER_PROFILE_TABLE):
        super().__init__(service, table_name)

    def create_profile(self, profile: CustomerProfile) -> CustomerProfile:
        profile = profile.model_copy(
            update={
                "partition_key": CUSTOMER_PARTITION,
                "row_key": str(uuid.uuid4()),
                "created_date": profile.created_date or datetime.now(timezone.utc),
            }
        )
        self.insert(CUSTOMER_PARTITION, profile.row_key, profile.to_entity())
        logger.info(f"Customer profile {profile.row_key} created")
        return profile

    def get_profile(self, profile_id: str) -> CustomerProfile:
        try:
            entity = self.get(CUSTOMER_PARTITION, profile_id)
        except NotFound:
            raise NotFound("Customer not found")
        return decode_entity(CustomerProfile, entity, CUSTOMER_PROFILE_COERCERS)

    def list_profiles(self) -> list[CustomerProfile]:
        return [
            decode_entity(CustomerProfile, entity, CUSTOMER_PROFILE_COERCERS)
            for entity in self.query_all(CUSTOMER_PARTITION)
        ]

    def update_profile(self, profile: CustomerProfile) -> CustomerProfile:
        self.put(CUSTOMER_PARTITION, profile.row_key, profile.to_entity(), etag=profile.etag)
        return profile

    def delete_profile(self, profile_id: str) -> None:
        self.delete(CUSTOMER_PARTITION, profile_id)
