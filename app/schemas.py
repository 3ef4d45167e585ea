# app/schemas.py
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

# JSON keys are camelCase, Python attributes stay snake_case
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class TransactionRecord(CamelModel):
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None
    date_of_sale: Optional[datetime] = None
    sold: Optional[bool] = None

    @field_serializer("date_of_sale")
    def serialize_date_of_sale(self, value: Optional[datetime]) -> Optional[datetime]:
        # Stored as naive UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

class Statistics(CamelModel):
    total_amount: float = 0
    sold_items: int = 0
    not_sold_items: int = 0

class PriceRangeCount(CamelModel):
    range: str
    count: int

class CategoryCount(CamelModel):
    category: Optional[str] = Field(default=None, alias="_id")
    item_count: int

class CombinedView(CamelModel):
    statistics: Statistics
    bar_chart: List[PriceRangeCount]
    pie_chart: List[CategoryCount]

class Message(BaseModel):
    message: str
