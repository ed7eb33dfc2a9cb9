"""FastAPI routes for the Storefront — orders, carts, reviews, products, customers."""

import json
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.api.dependencies import CurrentUser, current_user, require_admin
from storefront.api.schemas import (
    AddProductRequest,
    AddToCartRequest,
    CancelOrderRequest,
    CartCountResponse,
    CartResponse,
    CustomerSchema,
    DeleteOrderRequest,
    EditReviewRequest,
    IdResponse,
    OrderCreatedResponse,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductSchema,
    RegisterCustomerRequest,
    RestockRequest,
    ReviewListResponse,
    SalesStatsResponse,
    ShippingInfoRequest,
    StatusResponse,
    SubmitReviewRequest,
    UpdateCartRequest,
    UpdateOrderRequest,
)
from storefront.cart.items import AddToCart, UpdateCartItem, cart_for
from storefront.customer.customer import Customer
from storefront.customer.management import RegisterCustomer, UpdateShippingInfo
from storefront.order.creation import PlaceOrder
from storefront.order.order import Order
from storefront.order.statistics import delivered_sales_by_month
from storefront.order.status import CancelOrder, CompleteOrder, DeleteOrder, UpdateOrderStatus
from storefront.product.management import AddProduct, DeleteProduct, RestockProduct
from storefront.product.product import Product
from storefront.review.management import EditReview, RemoveReview, SubmitReview
from storefront.review.review import Review
from storefront.utils.queries import fetch_all


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------
def _address(value):
    if value is None:
        return None
    return {
        "address": value.address,
        "city": value.city,
        "postal_code": value.postal_code,
        "country": value.country,
    }


def _items(items):
    return [
        {
            "id": str(item.id),
            "product_id": str(item.product_id),
            "color": item.color or "",
            "quantity": item.quantity,
            "price": item.price,
        }
        for item in items
    ]


def order_to_dict(order: Order) -> dict:
    card_number = order.payment_details.card_number if order.payment_details else None
    return {
        "id": str(order.id),
        "user_id": str(order.user_id),
        "items": _items(order.items),
        "total_price": order.total_price,
        "shipping_fee": order.shipping_fee,
        "payment_method": order.payment_method,
        "card_last4": card_number[-4:] if card_number else None,
        "shipping_address": _address(order.shipping_address),
        "status": order.status,
        "note": order.note,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


def cart_to_dict(cart) -> dict:
    return {"id": str(cart.id), "user_id": str(cart.user_id), "items": _items(cart.items)}


def product_to_dict(product: Product) -> dict:
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "stock": product.stock,
        "category_id": str(product.category_id) if product.category_id else None,
        "images": product.image_list,
        "colors": product.color_list,
        "average_rating": product.average_rating,
        "num_reviews": product.num_reviews,
    }


def review_to_dict(review: Review) -> dict:
    return {
        "id": str(review.id),
        "product_id": str(review.product_id),
        "order_id": str(review.order_id),
        "user_id": str(review.user_id),
        "name": review.name,
        "rating": review.rating,
        "comment": review.comment,
        "created_at": review.created_at,
    }


def _newest_first(orders):
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("/create", status_code=201, response_model=OrderCreatedResponse)
async def create_order(body: PlaceOrderRequest, user: CurrentUser = Depends(current_user)) -> OrderCreatedResponse:
    if body.user_id and body.user_id != user.user_id:
        raise HTTPException(status_code=403, detail="Orders can only be placed for your own cart")

    details = body.payment_details
    command = PlaceOrder(
        user_id=user.user_id,
        payment_method=body.payment_method,
        card_number=details.card_number if details else None,
        expiry_date=details.expiry_date if details else None,
        cvv=details.cvv if details else None,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderCreatedResponse(order=order_to_dict(order))


@order_router.get("", response_model=OrderListResponse)
async def my_orders(user: CurrentUser = Depends(current_user)) -> OrderListResponse:
    orders = _newest_first(fetch_all(Order, user_id=user.user_id))
    if not orders:
        raise ObjectNotFoundError({"order": ["No orders found for this user"]})
    return OrderListResponse(count=len(orders), orders=[order_to_dict(o) for o in orders])


@order_router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: str, body: CancelOrderRequest | None = None, user: CurrentUser = Depends(current_user)
) -> OrderResponse:
    command = CancelOrder(order_id=order_id, user_id=user.user_id, note=body.note if body else None)
    current_domain.process(command, asynchronous=False)
    return OrderResponse(order=order_to_dict(current_domain.repository_for(Order).get(order_id)))


@order_router.put("/{order_id}/complete", response_model=OrderResponse)
async def complete_order(order_id: str, user: CurrentUser = Depends(current_user)) -> OrderResponse:
    current_domain.process(CompleteOrder(order_id=order_id, user_id=user.user_id), asynchronous=False)
    return OrderResponse(order=order_to_dict(current_domain.repository_for(Order).get(order_id)))


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@admin_router.get("/orders", response_model=OrderListResponse)
async def all_orders() -> OrderListResponse:
    orders = _newest_first(fetch_all(Order))
    return OrderListResponse(count=len(orders), orders=[order_to_dict(o) for o in orders])


@admin_router.put("/orders/update", response_model=OrderResponse)
async def update_order(body: UpdateOrderRequest) -> OrderResponse:
    if not body.order_id or not body.status:
        raise ValidationError({"order": ["Order ID and status are required."]})

    command = UpdateOrderStatus(order_id=body.order_id, status=body.status, note=body.note)
    current_domain.process(command, asynchronous=False)
    return OrderResponse(order=order_to_dict(current_domain.repository_for(Order).get(body.order_id)))


@admin_router.delete("/orders/delete", response_model=StatusResponse)
async def delete_order(body: DeleteOrderRequest) -> StatusResponse:
    if not body.order_id:
        raise ValidationError({"order_id": ["Order ID is required."]})

    current_domain.process(DeleteOrder(order_id=body.order_id), asynchronous=False)
    return StatusResponse(message="Order deleted successfully.")


@admin_router.get("/orders/delivered-stats", response_model=SalesStatsResponse)
async def delivered_stats(
    start_date: datetime | None = Query(None, alias="startDate"),
    end_date: datetime | None = Query(None, alias="endDate"),
) -> SalesStatsResponse:
    sales = delivered_sales_by_month(start_date, end_date)
    if not sales:
        return SalesStatsResponse(message="No sales data found.", sales_data=[])
    return SalesStatsResponse(sales_data=sales)


@admin_router.get("/reviews/all", response_model=ReviewListResponse)
async def all_reviews() -> ReviewListResponse:
    return ReviewListResponse(reviews=[review_to_dict(r) for r in fetch_all(Review)])


@admin_router.post("/products", status_code=201, response_model=IdResponse)
async def add_product(body: AddProductRequest) -> IdResponse:
    command = AddProduct(
        name=body.name,
        price=body.price,
        stock=body.stock,
        description=body.description,
        category_id=body.category_id,
        images=json.dumps(body.images),
        colors=json.dumps(body.colors),
    )
    return IdResponse(id=current_domain.process(command, asynchronous=False))


@admin_router.put("/products/{product_id}/restock", response_model=StatusResponse)
async def restock_product(product_id: str, body: RestockRequest) -> StatusResponse:
    current_domain.process(RestockProduct(product_id=product_id, quantity=body.quantity), asynchronous=False)
    return StatusResponse()


@admin_router.delete("/products/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(message="Product deleted successfully")


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.post("/add", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, user: CurrentUser = Depends(current_user)) -> CartResponse:
    command = AddToCart(
        user_id=user.user_id,
        product_id=body.product_id,
        color=body.color,
        quantity=body.quantity,
        price=body.price,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse(message="Item added to cart", cart=cart_to_dict(cart_for(user.user_id)))


@cart_router.put("/update", response_model=CartResponse)
async def update_cart(body: UpdateCartRequest, user: CurrentUser = Depends(current_user)) -> CartResponse:
    command = UpdateCartItem(user_id=user.user_id, item_id=body.item_id, action=body.action)
    if not current_domain.process(command, asynchronous=False):
        return CartResponse(message="Cart is empty and has been deleted")
    return CartResponse(message="Cart updated", cart=cart_to_dict(cart_for(user.user_id)))


@cart_router.get("/items", response_model=CartResponse)
async def cart_items(user: CurrentUser = Depends(current_user)) -> CartResponse:
    cart = cart_for(user.user_id)
    if cart is None:
        raise ObjectNotFoundError({"cart": ["Cart not found"]})
    return CartResponse(cart=cart_to_dict(cart))


@cart_router.get("/count", response_model=CartCountResponse)
async def cart_count(user: CurrentUser = Depends(current_user)) -> CartCountResponse:
    cart = cart_for(user.user_id)
    return CartCountResponse(cart_item_count=cart.item_count if cart else 0)


# ---------------------------------------------------------------------------
# Review Router
# ---------------------------------------------------------------------------
review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@review_router.post("", status_code=201, response_model=IdResponse)
async def submit_review(body: SubmitReviewRequest, user: CurrentUser = Depends(current_user)) -> IdResponse:
    command = SubmitReview(
        user_id=user.user_id,
        product_id=body.product_id,
        order_id=body.order_id,
        rating=body.rating,
        comment=body.comment,
    )
    return IdResponse(id=current_domain.process(command, asynchronous=False))


@review_router.get("/all", response_model=ReviewListResponse)
async def my_reviews(user: CurrentUser = Depends(current_user)) -> ReviewListResponse:
    return ReviewListResponse(reviews=[review_to_dict(r) for r in fetch_all(Review, user_id=user.user_id)])


@review_router.put("/{review_id}", response_model=StatusResponse)
async def edit_review(
    review_id: str, body: EditReviewRequest, user: CurrentUser = Depends(current_user)
) -> StatusResponse:
    command = EditReview(review_id=review_id, user_id=user.user_id, rating=body.rating, comment=body.comment)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Review updated successfully")


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def remove_review(review_id: str, user: CurrentUser = Depends(current_user)) -> StatusResponse:
    command = RemoveReview(review_id=review_id, user_id=user.user_id, is_admin=user.is_admin)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Review deleted successfully")


# ---------------------------------------------------------------------------
# Product Router (read side)
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("/{product_id}", response_model=ProductSchema)
async def get_product(product_id: str) -> ProductSchema:
    return ProductSchema(**product_to_dict(current_domain.repository_for(Product).get(product_id)))


@product_router.get("/{product_id}/reviews", response_model=ReviewListResponse)
async def product_reviews(product_id: str) -> ReviewListResponse:
    return ReviewListResponse(reviews=[review_to_dict(r) for r in fetch_all(Review, product_id=product_id)])


# ---------------------------------------------------------------------------
# Customer Router
# ---------------------------------------------------------------------------
customer_router = APIRouter(prefix="/me", tags=["customers"])


@customer_router.post("", status_code=201, response_model=IdResponse)
async def register(body: RegisterCustomerRequest, user: CurrentUser = Depends(current_user)) -> IdResponse:
    command = RegisterCustomer(user_id=user.user_id, email=body.email, name=body.name, role=user.role)
    return IdResponse(id=current_domain.process(command, asynchronous=False))


@customer_router.get("", response_model=CustomerSchema)
async def profile(user: CurrentUser = Depends(current_user)) -> CustomerSchema:
    customer = current_domain.repository_for(Customer).get(user.user_id)
    return CustomerSchema(
        user_id=str(customer.user_id),
        email=customer.email,
        name=customer.name,
        role=customer.role,
        shipping_info=_address(customer.shipping_info),
    )


@customer_router.put("/shipping", response_model=StatusResponse)
async def update_shipping(body: ShippingInfoRequest, user: CurrentUser = Depends(current_user)) -> StatusResponse:
    command = UpdateShippingInfo(
        user_id=user.user_id,
        address=body.address,
        city=body.city,
        postal_code=body.postal_code,
        country=body.country,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Shipping information updated")
