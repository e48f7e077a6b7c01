# storefront/schemas.py
from decimal import Decimal
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


# 🌍 Регион: какое поле цены читать и какой символ валюты показывать
class Region(str, Enum):
    US = "US"
    EU = "EU"

    @property
    def price_field(self) -> str:
        return REGION_PRICE_FIELD[self]

    @property
    def currency(self) -> str:
        return REGION_CURRENCY[self]


REGION_PRICE_FIELD = {
    Region.US: "price",
    Region.EU: "price-euro",
}

REGION_CURRENCY = {
    Region.US: "$",
    Region.EU: "€",
}


# 🛒 Добавление в корзину
class CartAddRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(alias="itemId", min_length=1)


class CartOut(BaseModel):
    items: Dict[str, int]


# 📦 Оформление заказа
class CheckoutLine(BaseModel):
    title: str
    quantity: int


class CheckoutSummary(BaseModel):
    region: Region
    currency: str
    total: Decimal
    items: List[CheckoutLine]
