"""Catalog read endpoints."""

from decimal import Decimal


class TestCatalog:
    def test_hides_unavailable(self, api, make_product):
        visible = make_product()
        make_product(is_available=False)

        ids = [p["id"] for p in api.get("/products/").json()]
        assert ids == [visible.id]

    def test_filters(self, api, make_product):
        laptop = make_product(category="laptops", brand="Lenovo", price=Decimal("15000"), location_city="Lviv")
        make_product(category="smartphones", brand="Apple", price=Decimal("9000"))
        make_product(category="laptops", brand="Dell", price=Decimal("30000"), stock_count=0)

        def ids(**params):
            return [p["id"] for p in api.get("/products/", params=params).json()]

        assert ids(categories="laptops", max_price="20000") == [laptop.id]
        assert ids(brands=["Lenovo"], cities=["Lviv"]) == [laptop.id]
        assert len(ids(categories="laptops", in_stock_only=True)) == 1
        assert ids(search="lenov") == [laptop.id]

    def test_sorting(self, api, make_product):
        cheap = make_product(price=Decimal("100"), rating_count=1)
        mid = make_product(price=Decimal("500"), rating_count=None)
        pricey = make_product(price=Decimal("900"), rating_count=50)

        def ids(sort_by):
            return [p["id"] for p in api.get("/products/", params={"sort_by": sort_by}).json()]

        assert ids("price_asc") == [cheap.id, mid.id, pricey.id]
        assert ids("price_desc") == [pricey.id, mid.id, cheap.id]
        assert ids("popular") == [pricey.id, cheap.id, mid.id]

    def test_by_slug_and_id(self, api, make_product):
        phone = make_product(slug="pixel-7")
        assert api.get("/products/by-slug/pixel-7").json()["id"] == phone.id
        assert api.get(f"/products/{phone.id}").json()["slug"] == "pixel-7"
        assert api.get("/products/by-slug/nope").status_code == 404

    def test_similar_and_featured(self, api, make_product):
        a = make_product(category="audio")
        b = make_product(category="audio", old_price=Decimal("2000"), rating_avg=Decimal("4.5"))
        make_product(category="monitors")

        assert [p["id"] for p in api.get(f"/products/{a.id}/similar").json()] == [b.id]
        assert [p["id"] for p in api.get("/products/featured").json()] == [b.id]

    def test_filter_options(self, api, make_product):
        make_product(brand="Sony", location_city="Odesa", price=Decimal("300"))
        make_product(brand="Apple", location_city="Kyiv", price=Decimal("1200"))

        opts = api.get("/products/filter-options").json()
        assert opts["brands"] == ["Apple", "Sony"]
        assert opts["cities"] == ["Kyiv", "Odesa"]
        assert Decimal(opts["min_price"]) == Decimal("300")
        assert Decimal(opts["max_price"]) == Decimal("1200")

    def test_health(self, api):
        assert api.get("/health").json() == {"status": "ok"}
