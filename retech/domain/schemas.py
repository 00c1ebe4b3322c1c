# retech/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ProductCategory(str, Enum):
    SMARTPHONES = "smartphones"
    LAPTOPS = "laptops"
    TABLETS = "tablets"
    ACCESSORIES = "accessories"
    GAMING = "gaming"
    AUDIO = "audio"
    MONITORS = "monitors"


class ProductCondition(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class OrderStatus(str, Enum):
    NEW = "NEW"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class DeliveryType(str, Enum):
    COURIER = "COURIER"
    PICKUP = "PICKUP"


class AppRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


SortBy = Literal["popular", "newest", "price_asc", "price_desc"]


# ---------------------------------------------------------------- products

class ProductBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200)
    category: ProductCategory
    brand: str = Field(..., min_length=1)
    model: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    old_price: Optional[Decimal] = Field(None, ge=0)
    currency: str = "UAH"
    condition: ProductCondition = ProductCondition.A
    storage: Optional[str] = None
    ram: Optional[str] = None
    cpu: Optional[str] = None
    gpu: Optional[str] = None
    screen_size: Optional[str] = None
    battery_health: Optional[int] = Field(None, ge=0, le=100)
    color: Optional[str] = None
    location_city: str = "Kyiv"
    warranty_months: int = Field(3, ge=0)
    description: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    is_available: bool = True
    stock_count: int = Field(0, ge=0)


class ProductCreate(ProductBase):
    """Schema for creating a catalog product (admin)."""


class ProductUpdate(BaseModel):
    """Partial update, only the fields that were sent are applied."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[ProductCategory] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    old_price: Optional[Decimal] = Field(None, ge=0)
    condition: Optional[ProductCondition] = None
    location_city: Optional[str] = None
    warranty_months: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    images: Optional[List[str]] = None
    is_available: Optional[bool] = None
    stock_count: Optional[int] = Field(None, ge=0)


class ProductOut(ProductBase):
    id: int
    rating_avg: Optional[Decimal] = None
    rating_count: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductFilters(BaseModel):
    """Catalog query predicates."""

    categories: List[ProductCategory] = Field(default_factory=list)
    brands: List[str] = Field(default_factory=list)
    conditions: List[ProductCondition] = Field(default_factory=list)
    cities: List[str] = Field(default_factory=list)
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    warranty_months: Optional[int] = None
    in_stock_only: bool = False
    search: str = ""
    sort_by: SortBy = "popular"


class FilterOptionsOut(BaseModel):
    brands: List[str]
    cities: List[str]
    min_price: Decimal
    max_price: Decimal


# ---------------------------------------------------------------- carts

class CreateCartIn(BaseModel):
    user_id: int = Field(..., gt=0)


class CartItemUpsert(BaseModel):
    """Upsert keyed by (cart_id, product_id), quantity replaces the stored one."""

    quantity: int = Field(..., gt=0)
    price_at_add: Decimal = Field(..., ge=0)


class CartItemQuantity(BaseModel):
    quantity: int = Field(..., gt=0)


class CartItemOut(BaseModel):
    id: int
    cart_id: int
    product_id: int
    quantity: int
    price_at_add: Decimal
    created_at: datetime
    product: Optional[ProductOut] = None

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime
    items: List[CartItemOut]

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------- orders

class CheckoutForm(BaseModel):
    """Contact and delivery details collected at checkout."""

    name: str = ""
    phone: str = ""
    delivery_type: DeliveryType = DeliveryType.COURIER
    city: Optional[str] = None
    address: Optional[str] = None
    comment: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Please enter your name")
        return v

    @field_validator("phone")
    @classmethod
    def _phone_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Please enter your phone number")
        return v

    @model_validator(mode="after")
    def _courier_needs_address(self):
        if self.delivery_type == DeliveryType.COURIER:
            if not (self.city or "").strip():
                raise ValueError("Please enter your city")
            if not (self.address or "").strip():
                raise ValueError("Please enter your address")
        return self


class OrderItemIn(BaseModel):
    product_id: Optional[int] = None
    title_snapshot: str = Field(..., min_length=1)
    price_snapshot: Decimal = Field(..., ge=0)
    quantity: int = Field(..., gt=0)


class OrderCreate(CheckoutForm):
    items: List[OrderItemIn] = Field(..., min_length=1)


class OrderItemOut(BaseModel):
    id: int
    order_id: int
    product_id: Optional[int]
    title_snapshot: str
    price_snapshot: Decimal
    quantity: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    user_id: Optional[int]
    status: OrderStatus
    total: Decimal
    currency: str
    delivery_type: DeliveryType
    name: str
    phone: str
    city: Optional[str] = None
    address: Optional[str] = None
    comment: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemOut] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class StockAdjustment(BaseModel):
    product_id: Optional[int] = None
    quantity: int = Field(..., gt=0)


# ---------------------------------------------------------------- users / admin

class UserCreate(BaseModel):
    id: int = Field(..., gt=0)
    name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)


class UserRead(BaseModel):
    id: int
    name: Optional[str] = None
    phone: Optional[str] = None
    is_admin: bool = False


class OrdersPerDay(BaseModel):
    date: str
    count: int


class DashboardStats(BaseModel):
    total_products: int
    in_stock: int
    today_orders: int
    revenue: Decimal
    orders_by_day: List[OrdersPerDay]
