# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Any, List, Optional
from decimal import Decimal
from datetime import datetime

from storefront.domain.enums import OrderStatus, ProductCategory


class ActionResult(BaseModel):
    """Wynik akcji: success + komunikat, przy bledzie rodzaj bledu."""

    success: bool
    message: str
    error: Optional[str] = None
    data: Optional[Any] = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "ActionResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, error) -> "ActionResult":
        return cls(success=False, message=error.message, error=error.kind)


# ---------- products ----------

class ProductOut(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    stock: int
    category: ProductCategory
    sizes: List[str] = []
    images: List[str] = []
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ProductUpdate(BaseModel):
    """Schema dla edycji produktu w panelu admina."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None
    sizes: Optional[List[str]] = None


# ---------- cart ----------

class CartItemIn(BaseModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, description="Quantity to add (must be > 0)")
    size: Optional[str] = None


class CartItemOut(BaseModel):
    product_id: int
    quantity: int
    size: Optional[str] = None
    product: ProductOut

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    cart_id: int | None = None
    items: List[CartItemOut]
    subtotal: Decimal
    shipping: Decimal
    total: Decimal


class CartCount(BaseModel):
    count: int


# ---------- orders ----------

class PlaceOrderIn(BaseModel):
    address: str = ""
    contact_no: str = ""


class OrderConfirmation(BaseModel):
    order_id: int
    total: Decimal


class OrderItemOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    size: str
    product: ProductOut

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    user_id: int
    total_price: Decimal
    location: str
    contact_no: str
    status: OrderStatus
    created_at: datetime
    items: List[OrderItemOut] = []
    customer_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ---------- users ----------

class UserRead(BaseModel):
    id: int
    external_id: str
    email: str
    full_name: str
    avatar_url: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AddressIn(BaseModel):
    address: str


class AddressOut(BaseModel):
    address: str

