"""
Tests de componente del endpoint /api/cart.

Recorren la API, el servicio y el store en memoria reales (sin mocks) para
validar el flujo completo de cada operación y el formato de los errores.
"""
from fastapi.testclient import TestClient

from app.api import deps
from app.core.config import Settings
from app.crud.cart_store import MemoryCartStore
from app.main import app
from app.services.cart_service import CartService

CART_URL = "/api/cart"


def add(client, product_id="b1", quantity=1, price=10, user_id=None):
    params = {"userId": user_id} if user_id else None
    return client.post(
        CART_URL,
        params=params,
        json={"productId": product_id, "quantity": quantity, "price": price},
    )


class BrokenStore(MemoryCartStore):
    async def get(self, user_id):
        raise RuntimeError("store unavailable")


class TestShoppingFlow:

    def test_add_update_delete_scenario(self, test_client: TestClient):
        response = add(test_client, "b1", 2, 10)
        assert response.status_code == 200
        assert response.json() == {
            "message": "Item added to cart successfully",
            "item": {"productId": "b1", "quantity": 2, "price": 10},
        }

        cart = test_client.get(CART_URL).json()
        assert cart == {
            "items": [{"productId": "b1", "quantity": 2, "price": 10}],
            "totalItems": 1,
            "totalPrice": 20,
        }

        response = test_client.put(CART_URL, json={"productId": "b1", "quantity": 5})
        assert response.status_code == 200
        assert response.json() == {
            "message": "Cart item updated successfully",
            "item": {"productId": "b1", "quantity": 5},
        }
        cart = test_client.get(CART_URL).json()
        assert cart["items"][0]["quantity"] == 5
        assert cart["totalPrice"] == 50

        response = test_client.delete(CART_URL, params={"itemId": "b1"})
        assert response.status_code == 200
        assert response.json() == {
            "message": "Item removed from cart successfully",
            "itemId": "b1",
        }
        cart = test_client.get(CART_URL).json()
        assert cart == {"items": [], "totalItems": 0, "totalPrice": 0}

    def test_repeated_add_accumulates_with_first_price(self, test_client: TestClient):
        add(test_client, "b1", 1, 10)
        response = add(test_client, "b1", 2, 15)

        # la respuesta devuelve la entrada tal cual, no la línea resultante
        assert response.json()["item"]["price"] == 15

        cart = test_client.get(CART_URL).json()
        assert cart["items"] == [{"productId": "b1", "quantity": 3, "price": 10}]
        assert cart["totalPrice"] == 30

    def test_totals(self, test_client: TestClient):
        add(test_client, "a", 2, 10)
        add(test_client, "b", 1, 5)

        cart = test_client.get(CART_URL).json()
        assert cart["totalItems"] == 2
        assert cart["totalPrice"] == 25

    def test_update_to_zero_removes_item(self, test_client: TestClient):
        add(test_client, "a", 2, 10)
        add(test_client, "b", 1, 5)

        response = test_client.put(CART_URL, json={"productId": "a", "quantity": 0})

        assert response.status_code == 200
        items = test_client.get(CART_URL).json()["items"]
        assert [i["productId"] for i in items] == ["b"]


class TestUserIdentity:

    def test_missing_user_id_shares_default_cart(self, test_client: TestClient):
        add(test_client, "b1")

        assert len(test_client.get(CART_URL, params={"userId": "default-user"}).json()["items"]) == 1
        assert len(test_client.get(CART_URL, params={"userId": ""}).json()["items"]) == 1

    def test_carts_are_separated_by_user_id(self, test_client: TestClient):
        add(test_client, "b1", user_id="alice")

        assert test_client.get(CART_URL, params={"userId": "bob"}).json()["items"] == []
        assert test_client.get(CART_URL).json()["items"] == []
        assert len(test_client.get(CART_URL, params={"userId": "alice"}).json()["items"]) == 1

    def test_user_id_can_be_required(self, test_client: TestClient):
        app.dependency_overrides[deps.get_settings] = lambda: Settings(REQUIRE_USER_ID=True)

        response = test_client.get(CART_URL)
        assert response.status_code == 400
        assert response.json()["details"][0]["path"] == ["userId"]

        assert test_client.get(CART_URL, params={"userId": "alice"}).status_code == 200


class TestValidationErrors:

    def test_post_quantity_zero_returns_400(self, test_client: TestClient):
        response = add(test_client, "b1", 0, 10)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid input"
        assert body["details"][0]["path"] == ["quantity"]
        assert body["details"][0]["message"] == "Quantity must be at least 1"

    def test_put_negative_quantity_returns_400(self, test_client: TestClient):
        add(test_client, "b1")

        response = test_client.put(CART_URL, json={"productId": "b1", "quantity": -1})

        assert response.status_code == 400
        assert response.json()["details"][0]["message"] == "Quantity cannot be negative"

    def test_post_string_quantity_returns_400(self, test_client: TestClient):
        response = test_client.post(CART_URL, json={"productId": "b1", "quantity": "2", "price": 1})
        assert response.status_code == 400

    def test_post_fractional_quantity_returns_400(self, test_client: TestClient):
        response = test_client.post(CART_URL, json={"productId": "b1", "quantity": 1.5, "price": 1})
        assert response.status_code == 400


    def test_post_without_body_returns_400(self, test_client: TestClient):
        response = test_client.post(CART_URL)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"

    def test_malformed_json_returns_400(self, test_client: TestClient):
        response = test_client.post(
            CART_URL,
            content=b'{"productId": "b1",',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"

    def test_delete_without_item_id_returns_400(self, test_client: TestClient):
        add(test_client, "b1")

        response = test_client.delete(CART_URL)

        assert response.status_code == 400
        assert response.json()["details"][0]["path"] == ["itemId"]

    def test_invalid_post_leaves_cart_unchanged(self, test_client: TestClient):
        add(test_client, "b1", 1, 10)
        add(test_client, "b2", -3, 10)
        add(test_client, "", 1, 10)

        cart = test_client.get(CART_URL).json()
        assert cart["items"] == [{"productId": "b1", "quantity": 1, "price": 10}]


class TestIntegralFloatQuantity:

    def test_post_integral_float_quantity_is_stored_as_int(self, test_client: TestClient):
        response = test_client.post(CART_URL, json={"productId": "b1", "quantity": 2.0, "price": 10})

        assert response.status_code == 200
        item = response.json()["item"]
        assert item["quantity"] == 2
        assert isinstance(item["quantity"], int)

        cart = test_client.get(CART_URL).json()
        assert cart["items"] == [{"productId": "b1", "quantity": 2, "price": 10}]
        assert cart["totalPrice"] == 20

    def test_put_integral_float_quantity(self, test_client: TestClient):
        add(test_client, "b1", 1, 10)

        response = test_client.put(CART_URL, json={"productId": "b1", "quantity": 4.0})

        assert response.status_code == 200
        assert test_client.get(CART_URL).json()["items"][0]["quantity"] == 4


class TestNotFoundErrors:

    def test_put_without_cart_returns_404(self, test_client: TestClient):
        response = test_client.put(CART_URL, json={"productId": "b1", "quantity": 1})

        assert response.status_code == 404
        assert response.json() == {"error": "Cart not found"}

    def test_put_unknown_item_returns_404(self, test_client: TestClient):
        add(test_client, "b1")

        response = test_client.put(CART_URL, json={"productId": "zz", "quantity": 1})

        assert response.status_code == 404
        assert response.json() == {"error": "Item not found in cart"}

    def test_delete_without_cart_returns_404(self, test_client: TestClient):
        response = test_client.delete(CART_URL, params={"itemId": "b1", "userId": "ghost"})

        assert response.status_code == 404
        assert response.json() == {"error": "Cart not found"}

    def test_not_found_for_unknown_users_leaves_no_state(self, test_client: TestClient, cart_store):
        for n in range(5):
            test_client.put(CART_URL, params={"userId": f"anon-{n}"}, json={"productId": "b1", "quantity": 1})
            test_client.delete(CART_URL, params={"userId": f"anon-{n}", "itemId": "b1"})

        assert cart_store._carts == {}
        assert cart_store._locks == {}

    def test_delete_unknown_item_returns_404(self, test_client: TestClient):
        add(test_client, "b1")

        response = test_client.delete(CART_URL, params={"itemId": "zz"})

        assert response.status_code == 404
        assert response.json() == {"error": "Item not found in cart"}


class TestUnexpectedErrors:

    def test_store_failure_returns_500_with_details(self, test_client: TestClient):
        app.dependency_overrides[deps.get_cart_service] = lambda: CartService(BrokenStore())

        response = test_client.get(CART_URL)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to fetch cart items",
            "details": "store unavailable",
        }

    def test_add_failure_returns_500(self, test_client: TestClient):
        app.dependency_overrides[deps.get_cart_service] = lambda: CartService(BrokenStore())

        response = add(test_client, "b1")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to add item to cart"

    def test_validation_runs_before_store_access(self, test_client: TestClient):
        app.dependency_overrides[deps.get_cart_service] = lambda: CartService(BrokenStore())

        response = add(test_client, "b1", 0, 10)

        assert response.status_code == 400


def test_health_check(test_client: TestClient):
    response = test_client.get("/")

    assert response.status_code == 200
    assert "Bookstore API" in response.json()["message"]
