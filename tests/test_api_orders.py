"""Order endpoints."""

from decimal import Decimal

BUYER = 8


def _order_body(*lines, **overrides):
    body = {
        "name": "Taras",
        "phone": "+380671234567",
        "delivery_type": "COURIER",
        "city": "Lviv",
        "address": "Rynok 1",
        "items": [
            {"product_id": p.id, "title_snapshot": p.title, "price_snapshot": str(p.price), "quantity": q}
            for p, q in lines
        ],
    }
    body.update(overrides)
    return body


class TestCreateOrder:
    def test_places_order(self, api, make_product, stock_of):
        phone = make_product(price=Decimal("4000.00"), stock_count=3)

        resp = api.post("/orders/", params={"user_id": BUYER}, json=_order_body((phone, 2)))

        assert resp.status_code == 201
        order = resp.json()
        assert order["status"] == "NEW"
        assert Decimal(order["total"]) == Decimal("8200.00")
        assert order["items"][0]["title_snapshot"] == phone.title
        assert stock_of(phone.id) == 1

    def test_courier_needs_address(self, api, make_product):
        phone = make_product()
        resp = api.post("/orders/", params={"user_id": BUYER}, json=_order_body((phone, 1), address=""))
        assert resp.status_code == 422

    def test_pickup_without_address(self, api, make_product):
        phone = make_product(price=Decimal("100.00"))
        resp = api.post(
            "/orders/",
            params={"user_id": BUYER},
            json=_order_body((phone, 1), delivery_type="PICKUP", city=None, address=None),
        )
        assert resp.status_code == 201
        assert Decimal(resp.json()["total"]) == Decimal("100.00")

    def test_empty_items_rejected(self, api):
        resp = api.post("/orders/", params={"user_id": BUYER}, json=_order_body())
        assert resp.status_code == 422


class TestOrderHistory:
    def test_lists_only_own_orders(self, api, make_product):
        phone = make_product(stock_count=10)
        mine = api.post("/orders/", params={"user_id": BUYER}, json=_order_body((phone, 1))).json()
        api.post("/orders/", params={"user_id": BUYER + 1}, json=_order_body((phone, 1)))

        history = api.get("/orders/", params={"user_id": BUYER}).json()
        assert [o["id"] for o in history] == [mine["id"]]

    def test_single_order_access(self, api, make_product, admin_id):
        phone = make_product()
        order = api.post("/orders/", params={"user_id": BUYER}, json=_order_body((phone, 1))).json()

        assert api.get(f"/orders/{order['id']}", params={"user_id": BUYER}).status_code == 200
        assert api.get(f"/orders/{order['id']}", params={"user_id": BUYER + 1}).status_code == 403
        assert api.get(f"/orders/{order['id']}", params={"user_id": admin_id}).status_code == 200
        assert api.get("/orders/999", params={"user_id": BUYER}).status_code == 404
