# retech/data/seed.py
from decimal import Decimal

from retech.data.database import Base, SessionLocal, engine
from retech.data.models.product import ProductModel
from retech.data.models.user import UserRoleModel
import retech.data.models  # noqa: F401

DEMO_PRODUCTS = [
    dict(title="iPhone 13 128GB", slug="iphone-13-128gb", category="smartphones", brand="Apple",
         model="iPhone 13", price=Decimal("18999"), old_price=Decimal("21999"), condition="A",
         storage="128GB", battery_health=91, location_city="Kyiv", warranty_months=6,
         stock_count=5, rating_avg=Decimal("4.80"), rating_count=42),
    dict(title="Galaxy S21 256GB", slug="galaxy-s21-256gb", category="smartphones", brand="Samsung",
         model="S21", price=Decimal("12499"), condition="B", storage="256GB", battery_health=87,
         location_city="Lviv", warranty_months=3, stock_count=3, rating_avg=Decimal("4.40"), rating_count=17),
    dict(title="ThinkPad T14 Gen 2", slug="thinkpad-t14-gen-2", category="laptops", brand="Lenovo",
         model="T14", price=Decimal("16900"), old_price=Decimal("18500"), condition="A", ram="16GB",
         cpu="Ryzen 5 PRO 5650U", location_city="Kyiv", warranty_months=12, stock_count=2),
    dict(title="AirPods Pro", slug="airpods-pro", category="audio", brand="Apple", price=Decimal("3999"),
         condition="B", location_city="Odesa", warranty_months=3, stock_count=10, rating_count=8),
    dict(title="Dell U2720Q", slug="dell-u2720q", category="monitors", brand="Dell", price=Decimal("9800"),
         condition="C", screen_size="27", location_city="Kharkiv", warranty_months=6, stock_count=1),
]

ADMIN_USER_ID = 1


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        # only seed an empty catalog
        if db.query(ProductModel).first():
            return
        db.add_all(ProductModel(**p) for p in DEMO_PRODUCTS)
        db.add(UserRoleModel(user_id=ADMIN_USER_ID, role="admin"))
        db.commit()
    finally:
        db.close()


if __name__ == "__main__":
    seed()
