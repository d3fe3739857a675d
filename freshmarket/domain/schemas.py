# freshmarket/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import List, Literal, Optional
from decimal import Decimal
from datetime import datetime


# najwiekszy id mieszczacy sie w kolumnie Integer (postgres int4)
MAX_ID = 2**31 - 1

PaymentMethod = Literal["bizum", "card"]
ContactSubject = Literal["order", "delivery", "product", "complaint", "other"]


class MessageOut(BaseModel):
    message: str


# users

class UserUpsert(BaseModel):
    """Schema for creating or updating a user after sign-in."""

    id: str = Field(..., min_length=1, max_length=255, description="Subject id from the auth provider")
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    profile_image_url: Optional[str] = None


class UserRead(BaseModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# catalog

class CategoryCreate(BaseModel):
    """Schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class CategoryOut(BaseModel):
    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class ProductOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    unit: str
    image_url: Optional[str] = None
    category_id: int
    is_organic: bool
    in_stock: bool
    category: CategoryOut

    model_config = ConfigDict(from_attributes=True)


# cart

class CartItemIn(BaseModel):
    """Schema for adding a product to the cart."""

    product_id: int = Field(..., gt=0, le=MAX_ID, description="Product id (must be > 0)")
    quantity: int = Field(1, gt=0, le=MAX_ID, description="Quantity (must be > 0)")


class CartItemUpdate(BaseModel):
    quantity: int = Field(..., ge=1, le=MAX_ID, description="New quantity (at least 1)")


class CartItemOut(BaseModel):
    """Cart row with its product (response)."""

    id: int
    user_id: str
    product_id: int
    quantity: int
    product: ProductOut
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class QuoteLineIn(BaseModel):
    product_id: int = Field(..., gt=0, le=MAX_ID)
    quantity: int = Field(..., gt=0, le=MAX_ID)


class QuoteIn(BaseModel):
    """Guest cart contents to price."""

    items: List[QuoteLineIn] = Field(default_factory=list)
    discount_code: Optional[str] = Field(None, max_length=50)


class CartTotalsOut(BaseModel):
    subtotal: Decimal
    delivery_fee: Decimal
    discount: Decimal
    total: Decimal
    item_count: int
    has_discount: bool
    has_free_delivery: bool
    discount_code_valid: Optional[bool] = None


# orders

class OrderCreate(BaseModel):
    """Schema for placing an order from the current cart."""

    payment_method: PaymentMethod
    delivery_address: Optional[str] = Field(None, max_length=500)


class OrderItemOut(BaseModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: Decimal
    product: ProductOut

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Order with its line items (response)."""

    id: int
    user_id: str
    status: str
    subtotal: Decimal
    delivery_fee: Decimal
    discount: Decimal
    total: Decimal
    payment_method: str
    delivery_address: Optional[str] = None
    created_at: datetime
    items: List[OrderItemOut]

    model_config = ConfigDict(from_attributes=True)


# contact

class ContactMessageIn(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    subject: ContactSubject
    message: str = Field(..., min_length=10, max_length=5000)


class ContactMessageOut(BaseModel):
    message: str
    id: int
