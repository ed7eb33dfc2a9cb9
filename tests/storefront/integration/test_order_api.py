from protean import current_domain
from storefront.product.product import Product

USER = {"X-User-Id": "user-001", "X-User-Role": "user"}
ADMIN = {"X-User-Id": "admin-001", "X-User-Role": "admin"}


def _fill_cart(client, product_id, quantity=2):
    response = client.post(
        "/cart/add",
        json={"product_id": product_id, "color": "Red", "quantity": quantity, "price": 500.0},
        headers=USER,
    )
    assert response.status_code == 200


def _create(client, **body):
    return client.post("/orders/create", json={"payment_method": "cashondelivery", **body}, headers=USER)


class TestCreateOrder:
    def test_creates_order(self, client, shopper, product_id):
        _fill_cart(client, product_id)

        response = _create(client)

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Order created successfully"
        assert data["order"]["total_price"] == 1100
        assert data["order"]["status"] == "Pending"
        assert data["order"]["shipping_address"]["city"] == "Bengaluru"
        assert current_domain.repository_for(Product).get(product_id).stock == 8
        assert client.get("/cart/items", headers=USER).status_code == 404

    def test_card_number_is_masked(self, client, shopper, product_id):
        _fill_cart(client, product_id)
        response = _create(
            client,
            payment_method="creditcard",
            payment_details={"card_number": "4242424242424242", "expiry_date": "12/29", "cvv": "123"},
        )
        order = response.json()["order"]
        assert order["card_last4"] == "4242"
        assert "cvv" not in order

    def test_empty_cart(self, client, shopper):
        response = _create(client)
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Your cart is empty. Please add items to your cart.",
            "errors": {"cart": ["Your cart is empty. Please add items to your cart."]},
        }

    def test_incomplete_card(self, client, shopper, product_id):
        _fill_cart(client, product_id)
        response = _create(client, payment_method="creditcard", payment_details={"card_number": "4242"})
        assert response.status_code == 400
        assert response.json()["message"] == "Complete payment details are required for credit card payment method."

    def test_insufficient_stock(self, client, shopper, product_id):
        _fill_cart(client, product_id, quantity=2)
        product = current_domain.repository_for(Product).get(product_id)
        product.decrement_stock(9)
        current_domain.repository_for(Product).add(product)

        response = _create(client)

        assert response.status_code == 400
        assert response.json()["message"] == "Insufficient stock for product: Trail Runner"

    def test_cannot_order_for_another_user(self, client, shopper, product_id):
        _fill_cart(client, product_id)
        response = _create(client, user_id="user-999")
        assert response.status_code == 403

    def test_requires_identity(self, client):
        response = client.post("/orders/create", json={"payment_method": "cashondelivery"})
        assert response.status_code == 401
        assert response.json()["success"] is False


class TestMyOrders:
    def test_newest_first(self, client, shopper, product_id):
        _fill_cart(client, product_id, quantity=1)
        first = _create(client).json()["order"]["id"]
        _fill_cart(client, product_id, quantity=1)
        second = _create(client).json()["order"]["id"]

        response = client.get("/orders", headers=USER)

        assert response.status_code == 200
        assert [o["id"] for o in response.json()["orders"]] == [second, first]

    def test_no_orders(self, client, shopper):
        response = client.get("/orders", headers=USER)
        assert response.status_code == 404
        assert response.json()["message"] == "No orders found for this user"


class TestCustomerCancel:
    def test_cancel_pending(self, client, shopper, product_id):
        _fill_cart(client, product_id)
        order_id = _create(client).json()["order"]["id"]

        response = client.put(f"/orders/{order_id}/cancel", headers=USER)

        assert response.status_code == 200
        assert response.json()["order"]["status"] == "Cancelled"
        assert response.json()["order"]["note"] == "Cancelled by user"
        assert current_domain.repository_for(Product).get(product_id).stock == 10

    def test_cancel_shipped_rejected(self, client, shopper, product_id):
        _fill_cart(client, product_id)
        order_id = _create(client).json()["order"]["id"]
        client.put("/admin/orders/update", json={"order_id": order_id, "status": "Shipped"}, headers=ADMIN)

        response = client.put(f"/orders/{order_id}/cancel", json={"note": "changed my mind"}, headers=USER)

        assert response.status_code == 400

    def test_complete_delivered(self, client, shopper, product_id):
        _fill_cart(client, product_id)
        order_id = _create(client).json()["order"]["id"]
        client.put("/admin/orders/update", json={"order_id": order_id, "status": "Delivered"}, headers=ADMIN)

        response = client.put(f"/orders/{order_id}/complete", headers=USER)

        assert response.status_code == 200
        assert response.json()["order"]["status"] == "Completed"
