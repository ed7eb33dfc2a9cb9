"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    address: str
    city: str
    postal_code: str
    country: str


class LineItemSchema(BaseModel):
    id: str | None = None
    product_id: str
    color: str = ""
    quantity: int
    price: float


class PaymentDetailsSchema(BaseModel):
    card_number: str | None = None
    expiry_date: str | None = None
    cvv: str | None = None


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    user_id: str | None = None
    payment_method: str
    payment_details: PaymentDetailsSchema | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "payment_method": "creditcard",
                    "payment_details": {
                        "card_number": "4242424242424242",
                        "expiry_date": "12/29",
                        "cvv": "123",
                    },
                }
            ]
        }
    }


class UpdateOrderRequest(BaseModel):
    order_id: str | None = None
    status: str | None = None
    note: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"order_id": "ord-001", "status": "Cancelled", "note": "Customer requested cancellation"},
            ]
        }
    }


class DeleteOrderRequest(BaseModel):
    order_id: str | None = None


class CancelOrderRequest(BaseModel):
    note: str | None = None


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    color: str = ""
    quantity: int = Field(ge=1, default=1)
    price: float = Field(ge=0)


class UpdateCartRequest(BaseModel):
    item_id: str
    action: str

    model_config = {"json_schema_extra": {"examples": [{"item_id": "item-001", "action": "increase"}]}}


# ---------------------------------------------------------------------------
# Customer / Product / Review Request Schemas
# ---------------------------------------------------------------------------
class RegisterCustomerRequest(BaseModel):
    email: str
    name: str


class ShippingInfoRequest(AddressSchema):
    pass


class AddProductRequest(BaseModel):
    name: str
    price: float = Field(ge=0)
    stock: int = Field(ge=0)
    description: str | None = None
    category_id: str | None = None
    images: list[str] = []
    colors: list[str] = []


class RestockRequest(BaseModel):
    quantity: int = Field(ge=1)


class SubmitReviewRequest(BaseModel):
    product_id: str
    order_id: str
    rating: int = Field(ge=1, le=5)
    comment: str


class EditReviewRequest(BaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    comment: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    success: bool = True
    message: str = "ok"


class IdResponse(BaseModel):
    success: bool = True
    id: str


class OrderSchema(BaseModel):
    id: str
    user_id: str
    items: list[LineItemSchema]
    total_price: float
    shipping_fee: float
    payment_method: str
    card_last4: str | None = None
    shipping_address: AddressSchema | None = None
    status: str
    note: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderCreatedResponse(BaseModel):
    success: bool = True
    message: str = "Order created successfully"
    order: OrderSchema


class OrderResponse(BaseModel):
    success: bool = True
    order: OrderSchema


class OrderListResponse(BaseModel):
    success: bool = True
    count: int
    orders: list[OrderSchema]


class MonthlySalesSchema(BaseModel):
    date: str
    total_sales: float


class SalesStatsResponse(BaseModel):
    success: bool = True
    message: str | None = None
    sales_data: list[MonthlySalesSchema]


class CartSchema(BaseModel):
    id: str
    user_id: str
    items: list[LineItemSchema]


class CartResponse(BaseModel):
    success: bool = True
    message: str | None = None
    cart: CartSchema | None = None


class CartCountResponse(BaseModel):
    cart_item_count: int


class CustomerSchema(BaseModel):
    user_id: str
    email: str
    name: str
    role: str
    shipping_info: AddressSchema | None = None


class ProductSchema(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    stock: int
    category_id: str | None = None
    images: list[str]
    colors: list[str]
    average_rating: float
    num_reviews: int


class ReviewSchema(BaseModel):
    id: str
    product_id: str
    order_id: str
    user_id: str
    name: str | None = None
    rating: int
    comment: str
    created_at: datetime | None = None


class ReviewListResponse(BaseModel):
    success: bool = True
    reviews: list[ReviewSchema]
