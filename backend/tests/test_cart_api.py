"""Cart endpoints via TestClient."""

from conftest import CUSTOMER, make_customer, make_listing

from storefront.repositories import carts as carts_repo


def _add(client, product_id, quantity=1, user_id=CUSTOMER):
    return client.post("/cart", json={"userId": user_id, "productId": product_id, "quantity": quantity})


def _items(response):
    return {it["productId"]: it["quantity"] for it in response.json()["items"]}


class TestAddItem:
    def test_first_add_creates_cart_with_one_item(self, client, db, customer, ring):
        response = _add(client, ring, 2)
        assert response.status_code == 200
        body = response.json()
        assert body["userId"] == CUSTOMER
        assert _items(response) == {ring: 2}
        assert db.raw("carts", CUSTOMER)["items"] == {ring: {"quantity": 2}}

    def test_add_existing_product_increments_quantity(self, client, customer, ring):
        _add(client, ring, 2)
        response = _add(client, ring, 3)
        assert response.status_code == 200
        assert _items(response) == {ring: 5}
        assert len(response.json()["items"]) == 1

    def test_add_new_product_appends_one_item(self, client, customer, ring, necklace):
        _add(client, ring, 1)
        response = _add(client, necklace, 4)
        assert _items(response) == {ring: 1, necklace: 4}

    def test_repeated_adds_never_duplicate_a_product(self, client, customer, ring, necklace):
        for pid, qty in [(ring, 1), (necklace, 2), (ring, 3), (ring, 1), (necklace, 1)]:
            response = _add(client, pid, qty)
        ids = [it["productId"] for it in response.json()["items"]]
        assert sorted(ids) == sorted({ring, necklace})
        assert _items(response) == {ring: 5, necklace: 3}

    def test_quantity_defaults_to_one(self, client, customer, ring):
        response = client.post("/cart", json={"userId": CUSTOMER, "productId": ring})
        assert _items(response) == {ring: 1}

    def test_response_resolves_product(self, client, customer, ring):
        item = _add(client, ring, 1).json()["items"][0]
        assert item["product"]["id"] == ring
        assert item["product"]["title"] == "Solitaire Diamond Ring"
        assert item["product"]["price"] == 250.0
        assert item["product"]["metalType"] == "gold"

    def test_unknown_product_is_404(self, client, db, customer):
        response = _add(client, "missing-product", 1)
        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found"
        assert db.raw("carts", CUSTOMER) is None

    def test_unknown_user_is_404(self, client, db, ring):
        response = _add(client, ring, 1, user_id="ghost")
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"
        assert db.raw("carts", "ghost") is None

    def test_zero_quantity_is_400(self, client, customer, ring):
        assert _add(client, ring, 0).status_code == 400

    def test_missing_product_id_is_400(self, client, customer):
        response = client.post("/cart", json={"userId": CUSTOMER, "quantity": 1})
        assert response.status_code == 400
        assert "productId" in response.json()["detail"]


class TestGetCart:
    def test_empty_when_no_cart(self, client, customer):
        response = client.get(f"/cart/{CUSTOMER}")
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_returns_added_item(self, client, customer, ring):
        _add(client, ring, 2)
        response = client.get(f"/cart/{CUSTOMER}")
        assert response.status_code == 200
        assert _items(response) == {ring: 2}

    def test_unknown_user_is_404(self, client):
        assert client.get("/cart/ghost").status_code == 404

    def test_deleted_listing_is_unresolved(self, client, db, customer, ring):
        _add(client, ring, 1)
        db.collection("listings").document(ring).delete()
        item = client.get(f"/cart/{CUSTOMER}").json()["items"][0]
        assert item["productId"] == ring
        assert item["product"] is None

    def test_carts_are_per_user(self, client, db, customer, ring):
        other = make_customer(db, "cust002", "Ravi", "ravi@example.com")
        _add(client, ring, 2)
        _add(client, ring, 7, user_id=other)
        assert _items(client.get(f"/cart/{CUSTOMER}")) == {ring: 2}
        assert _items(client.get(f"/cart/{other}")) == {ring: 7}


class TestRemoveItem:
    def test_removes_the_item(self, client, customer, ring, necklace):
        _add(client, ring, 1)
        _add(client, necklace, 1)
        response = client.delete(f"/cart/{CUSTOMER}/{ring}")
        assert response.status_code == 200
        assert _items(response) == {necklace: 1}

    def test_is_idempotent(self, client, customer, ring, necklace):
        _add(client, ring, 1)
        _add(client, necklace, 2)
        once = client.delete(f"/cart/{CUSTOMER}/{ring}")
        twice = client.delete(f"/cart/{CUSTOMER}/{ring}")
        assert twice.status_code == 200
        assert _items(once) == _items(twice) == {necklace: 2}

    def test_absent_product_is_noop(self, client, customer, ring):
        _add(client, ring, 3)
        response = client.delete(f"/cart/{CUSTOMER}/never-added")
        assert response.status_code == 200
        assert _items(response) == {ring: 3}

    def test_no_cart_is_404(self, client, customer, ring):
        response = client.delete(f"/cart/{CUSTOMER}/{ring}")
        assert response.status_code == 404
        assert response.json()["detail"] == "Cart not found"

    def test_unknown_user_is_404(self, client, ring):
        response = client.delete(f"/cart/ghost/{ring}")
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"


class TestSetQuantity:
    def test_overwrites_quantity(self, client, customer, ring):
        _add(client, ring, 2)
        response = client.patch(f"/cart/{CUSTOMER}/{ring}", json={"quantity": 9})
        assert response.status_code == 200
        assert _items(response) == {ring: 9}

    def test_below_one_is_400_and_cart_unchanged(self, client, db, customer, ring):
        _add(client, ring, 2)
        before = db.raw("carts", CUSTOMER)
        for q in (0, -3):
            response = client.patch(f"/cart/{CUSTOMER}/{ring}", json={"quantity": q})
            assert response.status_code == 400
            assert response.json()["detail"] == "Invalid quantity"
        assert db.raw("carts", CUSTOMER) == before

    def test_missing_quantity_is_400(self, client, customer, ring):
        _add(client, ring, 2)
        assert client.patch(f"/cart/{CUSTOMER}/{ring}", json={}).status_code == 400

    def test_item_not_in_cart_is_404(self, client, customer, ring, necklace):
        _add(client, ring, 2)
        response = client.patch(f"/cart/{CUSTOMER}/{necklace}", json={"quantity": 1})
        assert response.status_code == 404
        assert response.json()["detail"] == "Item not found in cart"

    def test_no_cart_is_404(self, client, customer, ring):
        response = client.patch(f"/cart/{CUSTOMER}/{ring}", json={"quantity": 1})
        assert response.status_code == 404

    def test_unknown_user_is_404(self, client, ring):
        response = client.patch(f"/cart/ghost/{ring}", json={"quantity": 1})
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    def test_concurrent_change_is_409(self, client, db, customer, ring, necklace, monkeypatch):
        _add(client, ring, 2)
        stale = carts_repo.load(db, CUSTOMER)
        _add(client, necklace, 1)  # someone else writes after our read
        monkeypatch.setattr(carts_repo, "load", lambda _db, _uid: stale)

        response = client.patch(f"/cart/{CUSTOMER}/{ring}", json={"quantity": 7})
        assert response.status_code == 409
        assert db.raw("carts", CUSTOMER)["items"][ring] == {"quantity": 2}


class TestOddProductIds:
    def test_ids_needing_quoted_field_paths(self, client, db, customer):
        pid = make_listing(db, title="Ruby Studs", category="earrings")
        db_id = "9-ruby.studs"
        # Re-home the listing under an id that is not a plain identifier
        db.collection("listings").document(db_id).set(db.raw("listings", pid))
        _add(client, db_id, 2)
        assert _items(client.patch(f"/cart/{CUSTOMER}/{db_id}", json={"quantity": 4})) == {db_id: 4}
        assert _items(client.delete(f"/cart/{CUSTOMER}/{db_id}")) == {}
