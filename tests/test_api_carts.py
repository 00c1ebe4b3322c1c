"""Cart endpoints: upsert semantics, stock clamping and ownership."""

from decimal import Decimal

USER = 5


def _cart(api, user_id=USER):
    return api.post("/carts/", json={"user_id": user_id}).json()


class TestCartEndpoints:
    def test_missing_cart_is_404(self, api):
        assert api.get("/carts/me", params={"user_id": USER}).status_code == 404

    def test_create_is_idempotent_per_user(self, api):
        first = _cart(api)
        second = _cart(api)
        assert first["id"] == second["id"]
        assert api.get("/carts/me", params={"user_id": USER}).json()["id"] == first["id"]

    def test_upsert_replaces_quantity(self, api, make_product):
        phone = make_product(stock_count=10)
        cart = _cart(api)
        url = f"/carts/{cart['id']}/items/{phone.id}"

        api.put(url, params={"user_id": USER}, json={"quantity": 2, "price_at_add": "1000.00"})
        body = api.put(url, params={"user_id": USER}, json={"quantity": 3, "price_at_add": "1000.00"}).json()

        assert len(body["items"]) == 1
        assert body["items"][0]["quantity"] == 3
        assert body["items"][0]["product"]["id"] == phone.id

    def test_upsert_clamps_to_stock(self, api, make_product):
        phone = make_product(stock_count=2)
        cart = _cart(api)

        body = api.put(
            f"/carts/{cart['id']}/items/{phone.id}",
            params={"user_id": USER},
            json={"quantity": 5, "price_at_add": "1000.00"},
        ).json()

        assert body["items"][0]["quantity"] == 2

    def test_out_of_stock_rejected(self, api, make_product):
        phone = make_product(stock_count=0)
        cart = _cart(api)
        resp = api.put(
            f"/carts/{cart['id']}/items/{phone.id}",
            params={"user_id": USER},
            json={"quantity": 1, "price_at_add": "1000.00"},
        )
        assert resp.status_code == 400

    def test_price_at_add_kept_on_later_upserts(self, api, make_product):
        phone = make_product(stock_count=10)
        cart = _cart(api)
        url = f"/carts/{cart['id']}/items/{phone.id}"

        api.put(url, params={"user_id": USER}, json={"quantity": 1, "price_at_add": "900.00"})
        body = api.put(url, params={"user_id": USER}, json={"quantity": 2, "price_at_add": "1000.00"}).json()

        assert Decimal(body["items"][0]["price_at_add"]) == Decimal("900.00")

    def test_patch_remove_and_clear(self, api, make_product):
        a = make_product(stock_count=10)
        b = make_product(stock_count=10)
        cart = _cart(api)
        for p in (a, b):
            api.put(
                f"/carts/{cart['id']}/items/{p.id}",
                params={"user_id": USER},
                json={"quantity": 1, "price_at_add": "1000.00"},
            )

        body = api.patch(
            f"/carts/{cart['id']}/items/{a.id}", params={"user_id": USER}, json={"quantity": 4}
        ).json()
        assert {i["product_id"]: i["quantity"] for i in body["items"]} == {a.id: 4, b.id: 1}

        body = api.delete(f"/carts/{cart['id']}/items/{a.id}", params={"user_id": USER}).json()
        assert [i["product_id"] for i in body["items"]] == [b.id]

        body = api.delete(f"/carts/{cart['id']}/items", params={"user_id": USER}).json()
        assert body["items"] == []

    def test_foreign_cart_forbidden(self, api, make_product):
        phone = make_product()
        cart = _cart(api)
        resp = api.put(
            f"/carts/{cart['id']}/items/{phone.id}",
            params={"user_id": USER + 1},
            json={"quantity": 1, "price_at_add": "1000.00"},
        )
        assert resp.status_code == 403

    def test_non_positive_quantity_rejected(self, api, make_product):
        phone = make_product()
        cart = _cart(api)
        resp = api.put(
            f"/carts/{cart['id']}/items/{phone.id}",
            params={"user_id": USER},
            json={"quantity": 0, "price_at_add": "1000.00"},
        )
        assert resp.status_code == 422
