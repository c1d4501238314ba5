"""Cart endpoints via TestClient: get-or-create, add/update/remove, booking, clear."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select, update

from pocketcashier.data.models import CartModel, CartItemModel, CartBookingModel

from conftest import BUSINESS_ID, OTHER_BUSINESS_ID


def _get_cart(client, token=None, business_id=BUSINESS_ID):
    body = {"businessId": business_id}
    if token:
        body["sessionToken"] = token
    response = client.post("/get-or-create-cart", json=body)
    assert response.status_code == 200
    return response.json()


def _add_mug(client, token, quantity=1):
    response = client.post(
        "/add-cart-item",
        json={
            "sessionToken": token,
            "businessId": BUSINESS_ID,
            "itemType": "product",
            "itemId": "prod-mug",
            "quantity": quantity,
        },
    )
    assert response.status_code == 200
    return response.json()


def _item_count(db):
    db.expire_all()
    return db.execute(select(func.count(CartItemModel.id))).scalar_one()


class TestGetOrCreateCart:
    def test_missing_business_id_is_400(self, client):
        response = client.post("/get-or-create-cart", json={"sessionToken": "tok"})
        assert response.status_code == 400
        assert response.json() == {"error": "businessId is required"}

    def test_generates_token_when_absent(self, client):
        body = _get_cart(client)
        assert body["cart"]["session_token"]
        assert body["cart"]["status"] == "active"
        assert body["items"] == []
        assert body["booking"] is None

    def test_same_token_returns_same_cart(self, client):
        first = _get_cart(client, token="tok-1")
        second = _get_cart(client, token="tok-1")
        assert first["cart"]["id"] == second["cart"]["id"]

    def test_expired_cart_is_not_reused(self, client, db):
        first = _get_cart(client, token="tok-exp")
        db.execute(
            update(CartModel)
            .where(CartModel.id == first["cart"]["id"])
            .values(expires_at=datetime.now(timezone.utc) - timedelta(minutes=1))
        )
        db.commit()

        second = _get_cart(client, token="tok-exp")
        assert second["cart"]["id"] != first["cart"]["id"]

    def test_returns_items_and_booking(self, client):
        _add_mug(client, "tok-full", quantity=2)
        body = _get_cart(client, token="tok-full")
        assert len(body["items"]) == 1
        assert body["items"][0]["line_total_cents"] == 1000

    def test_preflight_is_permissive(self, client):
        response = client.options(
            "/get-or-create-cart",
            headers={
                "Origin": "https://shop.example",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


class TestAddCartItem:
    def test_adds_product_with_server_price(self, client, db):
        body = _add_mug(client, "tok-add", quantity=3)
        assert body["success"] is True

        db.expire_all()
        item = db.execute(select(CartItemModel)).scalar_one()
        assert item.unit_price_cents == 500
        assert item.line_total_cents == 1500
        assert item.title_snapshot == "Mug"
        assert item.cart_id == body["cartId"]

    def test_adding_again_increments_quantity(self, client, db):
        _add_mug(client, "tok-inc", quantity=1)
        _add_mug(client, "tok-inc", quantity=2)

        db.expire_all()
        item = db.execute(select(CartItemModel)).scalar_one()
        assert item.quantity == 3
        assert item.line_total_cents == 1500

    def test_service_price_converted_from_dollars(self, client, db):
        response = client.post(
            "/add-cart-item",
            json={
                "sessionToken": "tok-svc",
                "businessId": BUSINESS_ID,
                "itemType": "service",
                "itemId": "svc-cut",
                "quantity": 1,
            },
        )
        assert response.status_code == 200

        db.expire_all()
        item = db.execute(select(CartItemModel)).scalar_one()
        assert item.service_id == "svc-cut"
        assert item.unit_price_cents == 2550

    def test_inactive_product_is_404(self, client):
        response = client.post(
            "/add-cart-item",
            json={
                "sessionToken": "tok-x",
                "businessId": BUSINESS_ID,
                "itemType": "product",
                "itemId": "prod-old",
                "quantity": 1,
            },
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found or inactive"}

    def test_cannot_mix_businesses(self, client):
        _add_mug(client, "tok-mix")
        response = client.post(
            "/add-cart-item",
            json={
                "sessionToken": "tok-mix",
                "businessId": OTHER_BUSINESS_ID,
                "itemType": "product",
                "itemId": "prod-mug",
                "quantity": 1,
            },
        )
        assert response.status_code == 400
        assert "different businesses" in response.json()["error"]

    def test_unknown_item_type_is_400(self, client):
        response = client.post(
            "/add-cart-item",
            json={
                "sessionToken": "tok-t",
                "businessId": BUSINESS_ID,
                "itemType": "gift",
                "itemId": "prod-mug",
                "quantity": 1,
            },
        )
        assert response.status_code == 400


class TestUpdateCartItem:
    @pytest.mark.parametrize("quantity", [1, 2, 7, 250])
    def test_line_total_is_price_times_quantity(self, client, db, quantity):
        _add_mug(client, "tok-upd")
        item_id = _get_cart(client, token="tok-upd")["items"][0]["id"]

        response = client.post(
            "/update-cart-item",
            json={"sessionToken": "tok-upd", "itemId": item_id, "quantity": quantity},
        )
        assert response.status_code == 200
        assert response.json() == {"success": True}

        db.expire_all()
        item = db.get(CartItemModel, item_id)
        assert item.quantity == quantity
        assert item.line_total_cents == 500 * quantity

    @pytest.mark.parametrize("quantity", [0, -1, -20])
    def test_non_positive_quantity_is_400_without_mutation(self, client, db, quantity):
        _add_mug(client, "tok-bad", quantity=2)
        item_id = _get_cart(client, token="tok-bad")["items"][0]["id"]

        response = client.post(
            "/update-cart-item",
            json={"sessionToken": "tok-bad", "itemId": item_id, "quantity": quantity},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Quantity must be greater than 0"}

        db.expire_all()
        item = db.get(CartItemModel, item_id)
        assert item.quantity == 2
        assert item.line_total_cents == 1000

    def test_fractional_quantity_is_400(self, client):
        response = client.post(
            "/update-cart-item",
            json={"sessionToken": "tok", "itemId": "x", "quantity": 1.5},
        )
        assert response.status_code == 400
        assert "error" in response.json()

    def test_unknown_cart_is_404(self, client):
        response = client.post(
            "/update-cart-item",
            json={"sessionToken": "nope", "itemId": "x", "quantity": 1},
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Cart not found"}

    def test_item_from_another_cart_is_404(self, client):
        _add_mug(client, "tok-a")
        foreign_item = _get_cart(client, token="tok-a")["items"][0]["id"]
        _get_cart(client, token="tok-b")

        response = client.post(
            "/update-cart-item",
            json={"sessionToken": "tok-b", "itemId": foreign_item, "quantity": 4},
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Item not found in cart"}


class TestRemoveCartItem:
    def test_removes_item(self, client, db):
        _add_mug(client, "tok-rm")
        item_id = _get_cart(client, token="tok-rm")["items"][0]["id"]

        response = client.post("/remove-cart-item", json={"sessionToken": "tok-rm", "itemId": item_id})
        assert response.status_code == 200
        assert _item_count(db) == 0

    def test_no_cart_is_404(self, client):
        response = client.post("/remove-cart-item", json={"sessionToken": "ghost", "itemId": "x"})
        assert response.status_code == 404


class TestAddCartBooking:
    def _booking(self, **overrides):
        body = {
            "sessionToken": "tok-book",
            "businessId": BUSINESS_ID,
            "serviceId": "svc-cut",
            "startTime": "2026-11-02T10:00:00Z",
            "endTime": "2026-11-02T10:30:00Z",
            "timezone": "America/New_York",
            "customerName": "Dana",
        }
        body.update(overrides)
        return body

    def test_attaches_single_booking(self, client, db):
        assert client.post("/add-cart-booking", json=self._booking()).status_code == 200
        assert client.post(
            "/add-cart-booking", json=self._booking(startTime="2026-11-02T11:00:00Z")
        ).status_code == 200

        db.expire_all()
        bookings = db.execute(select(CartBookingModel)).scalars().all()
        assert len(bookings) == 1
        assert bookings[0].start_time == "2026-11-02T11:00:00Z"
        assert bookings[0].status == "draft"

        body = _get_cart(client, token="tok-book")
        assert body["booking"]["service_id"] == "svc-cut"

    def test_unknown_service_is_404(self, client):
        response = client.post("/add-cart-booking", json=self._booking(serviceId="svc-nope"))
        assert response.status_code == 404

    def test_missing_fields_is_400(self, client):
        response = client.post("/add-cart-booking", json=self._booking(timezone=None))
        assert response.status_code == 400


class TestClearCart:
    def test_clear_abandons_and_empties(self, client, db):
        _add_mug(client, "tok-clear", quantity=2)
        client.post("/add-cart-booking", json={
            "sessionToken": "tok-clear",
            "businessId": BUSINESS_ID,
            "serviceId": "svc-cut",
            "startTime": "a",
            "endTime": "b",
            "timezone": "UTC",
        })
        cart_id = _get_cart(client, token="tok-clear")["cart"]["id"]

        response = client.post("/clear-cart", json={"sessionToken": "tok-clear"})
        assert response.status_code == 200
        assert response.json() == {"success": True}

        db.expire_all()
        cart = db.get(CartModel, cart_id)
        assert cart is not None
        assert cart.status == "abandoned"
        assert _item_count(db) == 0
        assert db.get(CartBookingModel, cart_id) is None

    def test_clear_is_idempotent(self, client):
        _get_cart(client, token="tok-empty")

        first = client.post("/clear-cart", json={"sessionToken": "tok-empty"})
        second = client.post("/clear-cart", json={"sessionToken": "tok-empty"})

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["success"] is True
        assert second.json()["success"] is True

    def test_clear_requires_token(self, client):
        response = client.post("/clear-cart", json={})
        assert response.status_code == 400

    def test_new_cart_after_clear(self, client):
        first = _get_cart(client, token="tok-again")
        client.post("/clear-cart", json={"sessionToken": "tok-again"})
        second = _get_cart(client, token="tok-again")
        assert second["cart"]["id"] != first["cart"]["id"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
