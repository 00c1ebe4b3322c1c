"""Back-office calls from the storefront client."""

from decimal import Decimal

import pytest

from retech.client import AdminBackOffice, Checkout, OrderHistory, StorefrontCart, StorefrontError

FORM = {"name": "Andrii", "phone": "0670000000", "delivery_type": "PICKUP"}


def _place_order(storefront, product, quantity=1):
    StorefrontCart(storefront).add_to_cart(product, quantity)
    return Checkout(storefront).place_order(FORM)


class TestBackOffice:
    def test_identity_carries_admin_hint(self, storefront, admin_id):
        assert storefront.sign_in(admin_id).is_admin is True

    def test_non_admin_rejected_by_api(self, storefront):
        storefront.sign_in(2)
        with pytest.raises(StorefrontError) as exc:
            AdminBackOffice(storefront).orders()
        assert exc.value.status_code == 403

    def test_cancel_restocks_and_refreshes_caches(self, storefront, admin_id, make_product, stock_of):
        model = make_product(stock_count=4)
        storefront.sign_in(admin_id)
        order = _place_order(storefront, storefront.api.get_product(model.id), 3)
        assert stock_of(model.id) == 1

        office = AdminBackOffice(storefront)
        assert [o["status"] for o in office.orders()] == ["NEW"]

        office.update_order_status(order["id"], "CANCELLED")

        assert [o["status"] for o in office.orders()] == ["CANCELLED"]
        assert OrderHistory(storefront).orders()[0]["status"] == "CANCELLED"
        assert stock_of(model.id) == 4

    def test_invalid_transition(self, storefront, admin_id, make_product):
        storefront.sign_in(admin_id)
        order = _place_order(storefront, storefront.api.get_product(make_product().id))
        office = AdminBackOffice(storefront)

        with pytest.raises(StorefrontError) as exc:
            office.update_order_status(order["id"], "DONE")
        assert exc.value.status_code == 409

    def test_product_management(self, storefront, admin_id):
        storefront.sign_in(admin_id)
        office = AdminBackOffice(storefront)

        created = office.create_product(
            {"title": "Galaxy S21", "slug": "galaxy-s21", "category": "smartphones", "brand": "Samsung", "price": "12500.00", "stock_count": 1}
        )
        assert [p["id"] for p in office.products()] == [created["id"]]

        updated = office.update_product(created["id"], {"price": "11000.00"})
        assert Decimal(updated["price"]) == Decimal("11000.00")

        office.delete_product(created["id"])
        assert office.products() == []

    def test_stats(self, storefront, admin_id, make_product):
        storefront.sign_in(admin_id)
        _place_order(storefront, storefront.api.get_product(make_product(price=Decimal("250.00")).id), 2)

        stats = AdminBackOffice(storefront).stats()
        assert stats["today_orders"] == 1
        assert Decimal(stats["revenue"]) == Decimal("500.00")


class TestIdentitySwitch:
    def test_viewed_order_not_served_to_next_user(self, storefront, make_product):
        storefront.sign_in(7)
        order = _place_order(storefront, storefront.api.get_product(make_product().id))
        assert OrderHistory(storefront).order(order["id"])["user_id"] == 7

        storefront.sign_out()
        storefront.sign_in(8)

        with pytest.raises(StorefrontError) as exc:
            OrderHistory(storefront).order(order["id"])
        assert exc.value.status_code == 403

    def test_switching_user_drops_admin_caches(self, storefront, admin_id, make_product):
        storefront.sign_in(admin_id)
        _place_order(storefront, storefront.api.get_product(make_product().id))
        assert len(AdminBackOffice(storefront).orders()) == 1
        assert len(AdminBackOffice(storefront).products()) == 1

        storefront.sign_in(2)

        for read in (AdminBackOffice(storefront).orders, AdminBackOffice(storefront).products):
            with pytest.raises(StorefrontError) as exc:
                read()
            assert exc.value.status_code == 403
        assert OrderHistory(storefront).orders() == []
