# retech/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.orm import Session

from retech.data.models.cart import CartModel
from retech.repos.cart_repo import CartRepo
from retech.repos.product_repo import ProductRepo
from retech.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Durable cart of an authenticated identity.
    commands (create, upsert, update, remove, clear) change state,
    queries (get) only read. Quantities are clamped to live stock,
    the store is the final authority on the ceiling.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query
    def get_cart_for_user(self, user_id: int) -> Dict[str, Any] | None:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            return None
        return self._to_dict(cart)

    #commands
    def create_cart(self, user_id: int) -> Dict[str, Any]:
        existing = self.repo.get_cart_by_user(user_id)
        if existing:
            logger.info(f"User {user_id} already has cart {existing.id}")
            return self._to_dict(existing)

        created = self.repo.create_cart(CartModel(user_id=user_id))
        logger.info(f"Created cart {created.id} for user {user_id}")
        return self._to_dict(created)

    def upsert_item(
        self,
        user_id: int,
        cart_id: int,
        product_id: int,
        quantity: int,
        price_at_add: Decimal,
    ) -> Dict[str, Any]:
        """Insert or replace the line for (cart_id, product_id)."""
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        cart = self._owned_cart(cart_id, user_id)
        product = self.products.get_product(product_id)
        if not product:
            raise ValueError("Product does not exist")

        clamped = min(quantity, product.stock_count)
        if clamped <= 0:
            raise ValueError("Product is out of stock")
        if clamped != quantity:
            logger.info(f"Clamped product {product_id} in cart {cart_id} from {quantity} to stock {clamped}")

        self.repo.upsert_cart_item(cart.id, product_id, clamped, Decimal(str(price_at_add)))
        self._commit()

        logger.info(f"Cart {cart_id}: product {product_id} set to {clamped}")
        return self._reload(cart)

    def update_quantity(self, user_id: int, cart_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        cart = self._owned_cart(cart_id, user_id)
        item = self.repo.get_cart_item(cart_id, product_id)
        if not item:
            raise ValueError("Product is not in the cart")

        stock = item.product.stock_count if item.product else 0
        clamped = min(quantity, stock)
        if clamped <= 0:
            logger.info(f"Cart {cart_id}: product {product_id} has no stock left, removing line")
            self.repo.delete_cart_item(cart_id, product_id)
        else:
            item.quantity = clamped
        self._commit()

        return self._reload(cart)

    def remove_item(self, user_id: int, cart_id: int, product_id: int) -> Dict[str, Any]:
        cart = self._owned_cart(cart_id, user_id)
        logger.info(f"Removing product {product_id} from cart {cart_id}")
        self.repo.delete_cart_item(cart_id, product_id)
        self._commit()
        return self._reload(cart)

    def clear_cart(self, user_id: int, cart_id: int) -> Dict[str, Any]:
        cart = self._owned_cart(cart_id, user_id)
        removed = self.repo.clear_cart(cart_id)
        self._commit()
        logger.info(f"Cleared cart {cart_id} ({removed} lines)")
        return self._reload(cart)

    def clear_user_cart(self, user_id: int) -> None:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            return
        self.repo.clear_cart(cart.id)
        self._commit()

    #helpers
    def _owned_cart(self, cart_id: int, user_id: int) -> CartModel:
        cart = self.repo.get_cart(cart_id)
        if not cart:
            raise ValueError("Cart does not exist")
        if cart.user_id != user_id:
            raise PermissionError("No access to this cart")
        return cart

    def _commit(self):
        try:
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

    def _reload(self, cart: CartModel) -> Dict[str, Any]:
        self.repo.db.refresh(cart)
        return self._to_dict(cart)

    def _to_dict(self, cart: CartModel) -> Dict[str, Any]:
        items = self.repo.get_cart_items(cart.id)
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "created_at": cart.created_at,
            "updated_at": cart.updated_at,
            "items": [
                {
                    "id": i.id,
                    "cart_id": i.cart_id,
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "price_at_add": i.price_at_add,
                    "created_at": i.created_at,
                    "product": i.product,
                }
                for i in items
            ],
        }
