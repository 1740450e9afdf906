# eshop/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

#Decimal in memory, plain number in JSON
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Part(CamelModel):
    """Catalog record, read-only."""

    id: int
    name: str
    description: str = ""
    manufacturer: str = ""
    category: str = ""
    price: Money = Field(..., ge=0)
    in_stock: bool
    stock_quantity: int = Field(..., ge=0)
    image_url: str = ""


class CartItem(CamelModel):
    """Cart line. Price is copied from the catalog when the line is created."""

    part_id: int
    name: str
    description: str
    manufacturer: str
    price: Money
    quantity: int = Field(..., ge=1)
    image_url: str


class Cart(CamelModel):
    id: str
    items: List[CartItem] = Field(default_factory=list)
    total_items: int = 0
    total_price: Money = Decimal("0")
    created_at: datetime
    updated_at: datetime


class Order(CamelModel):
    """Checkout result. Not stored anywhere."""

    order_id: str
    items: List[CartItem]
    total_items: int
    total_price: Money
    order_date: datetime
    status: str = "confirmed"


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool


class PartsPage(BaseModel):
    parts: List[Part]
    pagination: Pagination


class SearchPage(BaseModel):
    query: str
    parts: List[Part]
    pagination: Pagination


class CategoriesOut(BaseModel):
    categories: List[str]


class ManufacturersOut(BaseModel):
    manufacturers: List[str]


class AddItemIn(CamelModel):
    """Add-to-cart body. A missing partId is rejected by the service."""

    part_id: int | None = None
    quantity: int = 1


class UpdateItemIn(CamelModel):
    quantity: int | None = None


class CartActionOut(BaseModel):
    message: str
    cart: Cart


class CheckoutOut(BaseModel):
    message: str
    order: Order
    cart: Cart
