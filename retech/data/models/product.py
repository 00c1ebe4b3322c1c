# retech/data/models/product.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, JSON
from sqlalchemy.orm import relationship

from retech.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    category = Column(String, nullable=False, index=True)
    brand = Column(String, nullable=False)
    model = Column(String, nullable=True)

    price = Column(Numeric(12, 2), nullable=False)
    old_price = Column(Numeric(12, 2), nullable=True)
    currency = Column(String, nullable=False, default="UAH")

    condition = Column(String(1), nullable=False, default="A")  # A, B, C
    storage = Column(String, nullable=True)
    ram = Column(String, nullable=True)
    cpu = Column(String, nullable=True)
    gpu = Column(String, nullable=True)
    screen_size = Column(String, nullable=True)
    battery_health = Column(Integer, nullable=True)
    color = Column(String, nullable=True)
    location_city = Column(String, nullable=False, default="Kyiv")
    warranty_months = Column(Integer, nullable=False, default=3)
    description = Column(Text, nullable=True)
    images = Column(JSON, nullable=False, default=list)

    is_available = Column(Boolean, nullable=False, default=True)
    stock_count = Column(Integer, nullable=False, default=0)
    rating_avg = Column(Numeric(3, 2), nullable=True)
    rating_count = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)

    cart_items = relationship("CartItemModel", back_populates="product")
