# app/domain/messages.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated

from pydantic import AliasChoices, AliasGenerator, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel, to_pascal


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


#kwoty na kolejce jako liczba json, nie string.
#przez float: dokladne do 15 cyfr znaczacych (13 cyfr calkowitych przy groszach)
JsonNumber = Annotated[Decimal, PlainSerializer(lambda v: float(v), return_type=float, when_used="json")]


class QueueMessage(BaseModel):
    """
    Payload na kolejce. Zapis w camelCase, odczyt przyjmuje tez PascalCase
    (starszy producent) i snake_case.
    """

    model_config = ConfigDict(
        alias_generator=AliasGenerator(
            validation_alias=lambda name: AliasChoices(to_camel(name), to_pascal(name), name),
            serialization_alias=to_camel,
        ),
        populate_by_name=True,
    )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, payload: str):
        return cls.model_validate_json(payload)


class OrderMessage(QueueMessage):
    order_id: str = ""
    customer_id: str = ""
    product_ids: list[str] = Field(default_factory=list)
    total_amount: JsonNumber = Decimal("0")
    order_date: datetime = Field(default_factory=_utcnow)
    status: str = "Pending"
    message: str = ""


class InventoryMessage(QueueMessage):
    product_id: str = ""
    action: str = ""  # UPDATE_STOCK, LOW_STOCK_ALERT, REORDER
    quantity: int = 0
    message: str = ""
    timestamp: datetime = Field(default_factory=_utcnow)


class ImageProcessingMessage(QueueMessage):
    image_name: str = ""
    image_url: str = ""
    processing_type: str = ""  # RESIZE, COMPRESS, WATERMARK
    status: str = "Processing"
    timestamp: datetime = Field(default_factory=_utcnow)
