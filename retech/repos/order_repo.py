# retech/repos/order_repo.py
from datetime import datetime
from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from retech.data.models.order import OrderModel
from retech.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def add_order_items(self, items: Sequence[OrderItemModel]) -> List[OrderItemModel]:
        self.db.add_all(items)
        self.db.commit()
        return list(items)

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(selectinload(OrderModel.items))
        ).scalar_one_or_none()

    def get_order_items(self, order_id: int) -> List[OrderItemModel]:
        return list(
            self.db.execute(
                select(OrderItemModel)
                .where(OrderItemModel.order_id == order_id)
                .order_by(OrderItemModel.id)
            ).scalars().all()
        )

    def list_orders(self, user_id: int | None = None, since: datetime | None = None) -> List[OrderModel]:
        stmt = select(OrderModel).options(selectinload(OrderModel.items))
        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
        if since is not None:
            stmt = stmt.where(OrderModel.created_at >= since)
        stmt = stmt.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def update_order_status(self, order_id: int, status: str) -> OrderModel | None:
        order = self.get_order(order_id)
        if order:
            order.status = status
            self.db.commit()
            self.db.refresh(order)
        return order
