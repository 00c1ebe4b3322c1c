# retech/services/inventory_service.py
from typing import Iterable

from sqlalchemy.orm import Session

from retech.domain.schemas import StockAdjustment
from retech.repos.product_repo import ProductRepo
from retech.utils.logging import get_logger

logger = get_logger(__name__)


class InventoryService:
    """
    Stock adjustment procedure.
    Runs without per-row ownership checks (the buyer does not own product rows),
    one commit per call.
    """

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepo(db)

    def adjust_stock(self, items: Iterable[StockAdjustment], increase: bool) -> None:
        items = [i for i in items if i.product_id is not None]
        if not items:
            return

        products = self.products.get_products(i.product_id for i in items)
        direction = "+" if increase else "-"

        try:
            for item in items:
                product = products.get(item.product_id)
                if product is None:
                    logger.warning(f"adjust_stock: product {item.product_id} not found, skipping")
                    continue

                before = product.stock_count
                if increase:
                    product.stock_count = before + item.quantity
                else:
                    product.stock_count = max(0, before - item.quantity)

                logger.info(
                    "Stock adjusted",
                    product_id=product.id,
                    change=f"{direction}{item.quantity}",
                    before=before,
                    after=product.stock_count,
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
