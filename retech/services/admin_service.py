# retech/services/admin_service.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.orm import Session

from retech.domain.schemas import OrderStatus
from retech.repos.order_repo import OrderRepo
from retech.repos.product_repo import ProductRepo

DASHBOARD_DAYS = 14


class AdminService:
    def __init__(self, db: Session):
        self.orders = OrderRepo(db)
        self.products = ProductRepo(db)

    def dashboard_stats(self, now: datetime | None = None) -> Dict[str, Any]:
        now = now or datetime.now(timezone.utc)
        today = now.date()
        first_day = today - timedelta(days=DASHBOARD_DAYS - 1)

        orders = self.orders.list_orders()
        revenue = sum(
            (Decimal(o.total) for o in orders if o.status != OrderStatus.CANCELLED.value),
            Decimal("0.00"),
        )

        per_day = {first_day + timedelta(days=n): 0 for n in range(DASHBOARD_DAYS)}
        for o in orders:
            day = o.created_at.date()
            if day in per_day:
                per_day[day] += 1

        return {
            "total_products": self.products.count_products(),
            "in_stock": self.products.count_in_stock(),
            "today_orders": per_day[today],
            "revenue": revenue,
            "orders_by_day": [{"date": d.isoformat(), "count": c} for d, c in per_day.items()],
        }
