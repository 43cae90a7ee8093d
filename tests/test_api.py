import base64
import hashlib
import hmac
import json
import time

import pytest

from storefront.api.deps import get_image_client
from storefront.main import app
from storefront.utils import settings

USER = {"X-User-Id": "user_1"}
WEBHOOK_SECRET = "whsec_" + base64.b64encode(b"test-webhook-secret-000000000000").decode()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_principal_required(client):
    resp = client.get("/cart/")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Authentication required"


def test_checkout_over_http(client, make_user, make_product, stock_of):
    make_user()
    a = make_product("A", price="300", stock=5)
    b = make_product("B", price="150", stock=5)

    assert client.post("/cart/items", json={"product_id": a.id, "quantity": 2}, headers=USER).status_code == 200
    cart = client.post("/cart/items", json={"product_id": b.id, "quantity": 1}, headers=USER).json()
    assert cart["total"] == "800.00"
    assert client.get("/cart/count", headers=USER).json() == {"count": 3}

    resp = client.post("/orders/", json={"address": "12 Lake Road", "contact_no": "0123"}, headers=USER)

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["total"] == "800.00"
    order_id = body["data"]["order_id"]
    assert stock_of(a.id) == 3
    assert client.get("/cart/", headers=USER).json()["items"] == []
    assert client.get("/users/me/address", headers=USER).json() == {"address": "12 Lake Road"}

    orders = client.get("/orders/", headers=USER).json()["data"]
    assert [o["id"] for o in orders] == [order_id]
    assert orders[0]["status"] == "PENDING"

    assert client.post(f"/orders/{order_id}/cancel", headers=USER).json()["success"] is True
    again = client.post(f"/orders/{order_id}/cancel", headers=USER)
    assert again.status_code == 409
    assert again.json()["detail"]["error"] == "NotCancelable"


def test_order_errors_map_to_status(client, make_user):
    make_user()

    empty = client.post("/orders/", json={"address": "addr", "contact_no": "1"}, headers=USER)
    assert empty.status_code == 400
    assert empty.json()["detail"]["error"] == "EmptyCart"

    missing = client.get("/orders/99", headers=USER)
    assert missing.status_code == 404


def test_add_to_cart_over_stock(client, make_user, make_product):
    make_user()
    p = make_product("Lamp", stock=1)

    resp = client.post("/cart/items", json={"product_id": p.id, "quantity": 2}, headers=USER)

    assert resp.status_code == 409
    assert resp.json()["detail"] == "Insufficient stock for Lamp. Available: 1, Requested: 2"


def test_admin_orders(client, make_user, make_product, fill_cart, monkeypatch):
    make_user()
    fill_cart("user_1", (make_product(), 1))
    order_id = client.post("/orders/", json={"address": "a", "contact_no": "1"}, headers=USER).json()["data"]["order_id"]

    monkeypatch.setattr("storefront.api.deps.ADMIN_API_KEY", "secret")
    assert client.get("/admin/orders").status_code == 403

    admin = {"X-Admin-Key": "secret"}
    listed = client.get("/admin/orders", headers=admin).json()["data"]
    assert listed[0]["customer_name"] == "Jane Doe"

    assert client.post(f"/admin/orders/{order_id}/deliver", headers=admin).status_code == 200
    again = client.post(f"/admin/orders/{order_id}/deliver", headers=admin)
    assert again.status_code == 409
    assert again.json()["detail"]["message"] == "Order is already completed"


def test_admin_create_product_multipart(client):
    class FakeImageClient:
        def upload(self, content, file_name):
            return f"https://img.example.com/{file_name}"

    app.dependency_overrides[get_image_client] = lambda: FakeImageClient()
    try:
        resp = client.post(
            "/admin/products",
            data={"name": "Scarf", "price": "450", "stock": "3", "category": "ACCESSORIES", "sizes": ["One"]},
            files=[("images", ("scarf.jpg", b"jpeg-bytes", "image/jpeg"))],
        )
        bad = client.post(
            "/admin/products",
            data={"name": "Sofa", "price": "450", "stock": "3", "category": "FURNITURE"},
        )
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 201
    assert resp.json()["images"] == ["https://img.example.com/scarf.jpg"]
    assert resp.json()["sizes"] == ["One"]
    assert bad.status_code == 400

    product_id = resp.json()["id"]
    patched = client.patch(f"/admin/products/{product_id}", json={"stock": 10})
    assert patched.json()["stock"] == 10
    assert client.get("/products/", params={"category": "ACCESSORIES"}).json()[0]["name"] == "Scarf"


def test_wishlist_over_http(client, make_user, make_product):
    make_user()
    p = make_product("Ring")

    assert client.post(f"/wishlist/{p.id}", headers=USER).status_code == 201
    assert client.post(f"/wishlist/{p.id}", headers=USER).status_code == 409
    assert [x["name"] for x in client.get("/wishlist/", headers=USER).json()] == ["Ring"]
    assert client.delete(f"/wishlist/{p.id}", headers=USER).status_code == 200


def _signed_headers(body: str, secret: str = WEBHOOK_SECRET) -> dict:
    msg_id = "msg_123"
    timestamp = str(int(time.time()))
    key = base64.b64decode(secret.split("_", 1)[1])
    digest = hmac.new(key, f"{msg_id}.{timestamp}.{body}".encode(), hashlib.sha256).digest()
    return {
        "svix-id": msg_id,
        "svix-timestamp": timestamp,
        "svix-signature": "v1," + base64.b64encode(digest).decode(),
        "content-type": "application/json",
    }


@pytest.fixture
def webhook_secret(monkeypatch):
    monkeypatch.setattr(settings, "WEBHOOK_SECRET", WEBHOOK_SECRET)


def test_identity_webhook_creates_user(client, webhook_secret):
    body = json.dumps(
        {
            "type": "user.created",
            "data": {
                "id": "user_1",
                "first_name": "Jane",
                "last_name": "Doe",
                "image_url": None,
                "email_addresses": [{"email_address": "jane@example.com"}],
            },
        }
    )

    resp = client.post("/webhooks/identity", content=body, headers=_signed_headers(body))

    assert resp.status_code == 200
    assert resp.text == "User has been created!"
    assert client.get("/users/me", headers=USER).json()["full_name"] == "Jane Doe"


def test_identity_webhook_rejects_bad_requests(client, webhook_secret, monkeypatch):
    body = json.dumps({"type": "user.created", "data": {"id": "user_1"}})

    assert client.post("/webhooks/identity", content=body).status_code == 400

    headers = _signed_headers(body)
    headers["svix-signature"] = "v1," + base64.b64encode(b"forged").decode()
    assert client.post("/webhooks/identity", content=body, headers=headers).status_code == 400

    assert client.post("/webhooks/identity", content="{not json", headers=_signed_headers("{not json")).status_code == 400

    # poprawny json, ale nie obiekt
    assert client.post("/webhooks/identity", content="[1, 2]", headers=_signed_headers("[1, 2]")).status_code == 400

    monkeypatch.setattr(settings, "WEBHOOK_SECRET", None)
    assert client.post("/webhooks/identity", content=body, headers=_signed_headers(body)).status_code == 500


def test_identity_webhook_dispatches_on_request_body(client, webhook_secret, make_user, monkeypatch):
    from storefront.api.routers import webhooks

    make_user()
    # svix 2.x: verify() tylko sprawdza podpis i zwraca None
    monkeypatch.setattr(webhooks.Webhook, "verify", lambda self, body, headers: None)
    body = json.dumps(
        {
            "type": "user.updated",
            "data": {
                "id": "user_1",
                "first_name": "Janet",
                "last_name": "Doe",
                "image_url": "https://img.example.com/j.png",
                "email_addresses": [{"email_address": "janet@example.com"}],
            },
        }
    )

    resp = client.post("/webhooks/identity", content=body, headers=_signed_headers(body))

    assert resp.status_code == 200
    assert resp.text == "User has been updated!"
    me = client.get("/users/me", headers=USER).json()
    assert me["full_name"] == "Janet Doe"
    assert me["email"] == "janet@example.com"
