"""
End-to-end catalog scenarios across several endpoints.

Each test drives the API the way the mobile app does: register, scan,
organise into categories, and read the dashboard.
"""


def add_product(client, headers, barcode, name, category=None):
    body = {"barcode": barcode, "name": name}
    if category:
        body["category"] = category
    response = client.post("/api/products", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_users_are_isolated(client, register_user):
    """Two users never see or touch each other's records."""
    alice = register_user("alice")
    bob = register_user("bob")

    mine = add_product(client, alice, "12345678", "Tea", "Drinks")
    theirs = add_product(client, bob, "12345678", "Coffee")
    assert mine["id"] != theirs["id"]

    assert client.get(f"/api/products/{mine['id']}", headers=bob).status_code == 404
    assert client.put(
        f"/api/products/{mine['id']}", json={"name": "Hacked"}, headers=bob
    ).status_code == 404
    assert client.delete(f"/api/products/{mine['id']}", headers=bob).status_code == 404

    bob_products = client.get("/api/products", headers=bob).json()["data"]
    assert [p["name"] for p in bob_products] == ["Coffee"]
    bob_barcode = client.get("/api/products/barcode/12345678", headers=bob).json()["data"]
    assert bob_barcode["id"] == theirs["id"]

    assert client.get(f"/api/products/{mine['id']}", headers=alice).json()["data"]["name"] == "Tea"


def test_kanban_reorganisation(client, auth_headers):
    """Create columns, move cards, then drop a column."""
    for name in ("Pantry", "Fridge"):
        client.post("/api/categories", json={"name": name}, headers=auth_headers)

    milk = add_product(client, auth_headers, "40000001", "Milk")
    rice = add_product(client, auth_headers, "40000002", "Rice")

    client.put(f"/api/products/{milk['id']}", json={"category": "Fridge"}, headers=auth_headers)
    client.put(f"/api/products/{rice['id']}", json={"category": "Pantry"}, headers=auth_headers)

    stats = client.get("/api/products/stats/analytics", headers=auth_headers).json()["data"]
    assert stats["categoryCounts"] == {"Fridge": 1, "Pantry": 1}

    client.delete("/api/categories/Fridge", headers=auth_headers)

    stats = client.get("/api/products/stats/analytics", headers=auth_headers).json()["data"]
    assert stats["categoryCounts"] == {"Uncategorized": 1, "Pantry": 1}
    assert stats["totalProducts"] == 2

    names = client.get("/api/categories", headers=auth_headers).json()["data"]
    assert names == ["Uncategorized", "Pantry"]


def test_stats_match_product_list(client, auth_headers):
    """Category counts always sum to the total and to the list length."""
    add_product(client, auth_headers, "50000001", "A", "X")
    add_product(client, auth_headers, "50000002", "B", "Y")
    add_product(client, auth_headers, "50000003", "C")

    stats = client.get("/api/products/stats/analytics", headers=auth_headers).json()["data"]
    products = client.get("/api/products", headers=auth_headers).json()
    assert sum(stats["categoryCounts"].values()) == stats["totalProducts"] == products["count"]


def test_scan_existing_barcode(client, auth_headers):
    """Scanning a known barcode twice surfaces the stored product."""
    stored = add_product(client, auth_headers, "60000001", "Beans")
    response = client.post(
        "/api/products",
        json={"barcode": "60000001", "name": "Beans again"},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["data"]["name"] == "Beans"

    found = client.get("/api/products/barcode/60000001", headers=auth_headers).json()["data"]
    assert found == stored


def test_login_token_survives_new_client(app, register_user):
    """Tokens are stateless: a fresh client with the header is authenticated."""
    from fastapi.testclient import TestClient

    headers = register_user("carol")
    fresh = TestClient(app)
    response = fresh.get("/api/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["data"]["username"] == "carol"
