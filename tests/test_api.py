from decimal import Decimal

import pytest
from azure.core.exceptions import ResourceNotFoundError

CATALOG = {
    "P1": {
        "PartitionKey": "Product",
        "RowKey": "P1",
        "ProductName": "Kubek",
        "Price": 10.0,
        "StockQuantity": 50,
        "Category": "Kuchnia",
        "IsAvailable": True,
    },
    "P2": {
        "PartitionKey": "Product",
        "RowKey": "P2",
        "ProductName": "Talerz",
        "Price": "5.00",
        "StockQuantity": 50,
        "Category": "Kuchnia",
        "IsAvailable": True,
    },
}


def _get_entity(partition_key, row_key):
    if row_key not in CATALOG:
        raise ResourceNotFoundError("missing")
    return CATALOG[row_key]


@pytest.fixture
def catalog(storage):
    storage.products.client.get_entity.side_effect = _get_entity
    storage.products.client.query_entities.return_value = list(CATALOG.values())
    return storage.products


@pytest.fixture
def queue_client(storage):
    return storage.queues.service.get_queue_client.return_value


def place_order(client, customer_id):
    client.post(f"/carts/{customer_id}/items", json={"product_id": "P1", "quantity": 2})
    client.post(f"/carts/{customer_id}/items", json={"product_id": "P2", "quantity": 1})
    return client.post(f"/orders/?customer_id={customer_id}", json={"shipping_address": "Rynek 1"})


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_register_and_login(client):
    response = client.post(
        "/auth/register", json={"email": "ola@example.com", "password": "sekret123"}
    )
    assert response.status_code == 201
    assert response.json()["username"] == "ola"

    duplicate = client.post(
        "/auth/register", json={"email": "ola@example.com", "password": "sekret123"}
    )
    assert duplicate.status_code == 409

    login = client.post("/auth/login", json={"email": "ola@example.com", "password": "sekret123"})
    assert login.status_code == 200
    assert login.json()["customer"]["first_name"] == "Customer"

    bad = client.post("/auth/login", json={"email": "ola@example.com", "password": "zle"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid email or password"


def test_cart_and_checkout_flow(client, catalog, queue_client, customer):
    cid = customer.id

    response = place_order(client, cid)

    assert response.status_code == 201
    order = response.json()
    assert Decimal(order["total_amount"]) == Decimal("25.00")
    assert order["status"] == "PENDING"
    assert order["order_number"].startswith("ORD-")
    assert len(order["items"]) == 2
    queue_client.send_message.assert_called_once()

    assert client.get(f"/carts/{cid}/count").json()["count"] == 0

    again = client.post(f"/orders/?customer_id={cid}", json={})
    assert again.status_code == 400
    assert again.json()["detail"] == "Cart is empty"

    listed = client.get(f"/orders/?customer_id={cid}").json()
    assert [o["id"] for o in listed] == [order["id"]]


def test_cart_item_commands(client, catalog, customer):
    cid = customer.id
    item = client.post(f"/carts/{cid}/items", json={"product_id": "P1", "quantity": 1}).json()

    updated = client.put(f"/carts/items/{item['id']}", json={"quantity": 3})
    assert updated.status_code == 200
    assert updated.json()["quantity"] == 3

    rejected = client.put(f"/carts/items/{item['id']}", json={"quantity": 0})
    assert rejected.status_code == 400

    cart = client.get(f"/carts/{cid}").json()
    assert Decimal(cart["total_amount"]) == Decimal("30.00")
    assert cart["total_items"] == 3

    assert client.delete(f"/carts/items/{item['id']}").status_code == 200
    assert client.delete(f"/carts/items/{item['id']}").status_code == 404
    assert client.delete(f"/carts/{cid}/items").json()["success"] is True


def test_adding_unknown_product_is_404(client, catalog, customer):
    response = client.post(f"/carts/{customer.id}/items", json={"product_id": "P9"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Product not found"


def test_order_visibility(client, catalog, customer, other_customer):
    order_id = place_order(client, customer.id).json()["id"]

    assert client.get(f"/orders/{order_id}?customer_id={customer.id}").status_code == 200
    assert client.get(f"/orders/{order_id}?customer_id={other_customer.id}").status_code == 403
    assert client.get(f"/orders/999?customer_id={customer.id}").status_code == 404


def test_admin_status_changes(client, catalog, customer, admin):
    order_id = place_order(client, customer.id).json()["id"]
    url = f"/admin/orders/{order_id}/status"

    forbidden = client.put(f"{url}?admin_user_id={customer.user_id}", json={"status": "SHIPPED"})
    assert forbidden.status_code == 403

    invalid = client.put(f"{url}?admin_user_id={admin.id}", json={"status": "LOST"})
    assert invalid.status_code == 400
    assert invalid.json()["detail"] == "Invalid order status"

    processed = client.put(f"{url}?admin_user_id={admin.id}", json={"status": "processed"})
    assert processed.status_code == 200
    assert processed.json()["status"] == "PROCESSED"
    assert processed.json()["processed_by"] == admin.id
    assert processed.json()["processed_date"] is not None

    cancel = client.post(f"/orders/{order_id}/cancel?customer_id={customer.id}")
    assert cancel.status_code == 400
    assert cancel.json()["detail"] == "Only pending orders can be cancelled"


def test_admin_order_queries(client, catalog, customer, other_customer, admin):
    first = place_order(client, customer.id).json()
    second = place_order(client, other_customer.id).json()
    client.post(f"/orders/{second['id']}/cancel?customer_id={other_customer.id}")

    params = f"admin_user_id={admin.id}"
    assert len(client.get(f"/admin/orders/?{params}").json()) == 2
    pending = client.get(f"/admin/orders/?{params}&status=pending").json()
    assert [o["id"] for o in pending] == [first["id"]]

    by_number = client.get(f"/admin/orders/by-number/{first['order_number']}?{params}")
    assert by_number.json()["id"] == first["id"]

    stats = client.get(f"/admin/orders/statistics?{params}").json()
    assert stats["total_orders"] == 2
    assert stats["cancelled_orders"] == 1
    assert Decimal(stats["total_revenue"]) == Decimal("25.00")

    assert client.get(f"/admin/orders/999?{params}").status_code == 404
    assert client.get(f"/admin/orders/?admin_user_id={customer.user_id}").status_code == 403


def test_products_listing(client, catalog):
    products = client.get("/products/").json()

    assert {p["row_key"] for p in products} == {"P1", "P2"}
    assert client.get("/products/categories").json() == ["Kuchnia"]
    assert client.get("/products/P2").json()["price"] == 5.0


def test_product_writes_require_admin(client, catalog, customer):
    payload = {"product_name": "Lampa", "price": 99.0, "stock_quantity": 1, "category": "Dom"}

    response = client.post(f"/products/?admin_user_id={customer.user_id}", json=payload)

    assert response.status_code == 403
    catalog.client.create_entity.assert_not_called()


def test_create_product_as_admin(client, catalog, admin):
    payload = {"product_name": "Lampa", "price": 99.0, "stock_quantity": 1, "category": "Dom"}

    response = client.post(f"/products/?admin_user_id={admin.id}", json=payload)

    assert response.status_code == 201
    assert response.json()["product_name"] == "Lampa"
    catalog.client.create_entity.assert_called_once()


def test_queue_endpoints(client, queue_client):
    sent = client.post("/queues/inventory", json={"productId": "P1", "action": "LOW_STOCK_ALERT"})
    assert sent.json()["message"] == "Inventory message sent successfully!"

    queue_client.receive_message.return_value = None
    assert client.post("/queues/orders/process").json()["message"] == "No order messages to process."

    assert client.delete("/queues/payments").status_code == 400


def test_media_upload(client, storage):
    blob = storage.blobs.container.get_blob_client.return_value
    blob.url = "https://acc.blob.core.windows.net/multimedia/images/1_cat.jpg"

    response = client.post("/media/images", files={"file": ("cat.jpg", b"jpeg", "image/jpeg")})

    assert response.status_code == 201
    assert response.json()["message"] == blob.url

    empty = client.post("/media/images", files={"file": ("cat.jpg", b"", "image/jpeg")})
    assert empty.status_code == 400


def test_contract_upload(client, storage):
    response = client.post(
        "/contracts/",
        data={"contract_name": "Umowa serwisowa", "customer_id": "C1", "contract_type": "Service"},
        files={"file": ("umowa.pdf", b"%PDF", "application/pdf")},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["file_path"] == f"contracts/customer-contracts/{body['contract_id']}_umowa.pdf"
    assert body["status"] == "Draft"


def test_cart_of_unknown_customer_is_404(client, catalog):
    response = client.get("/carts/999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Customer not found"

    added = client.post("/carts/999/items", json={"product_id": "P1", "quantity": 1})
    assert added.status_code == 404
    assert added.json()["detail"] == "Customer not found"


def test_get_cart_creates_empty_cart(client, customer):
    response = client.get(f"/carts/{customer.id}")

    assert response.status_code == 200
    assert response.json()["items"] == []
    assert response.json()["total_items"] == 0
