# retech/repos/cart_repo.py
from decimal import Decimal
from typing import List

from sqlalchemy import select, delete
from sqlalchemy.orm import Session, selectinload

from retech.data.models.cart import CartModel
from retech.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel)
            .where(CartModel.user_id == user_id)
            .options(selectinload(CartModel.items).selectinload(CartItemModel.product))
        ).scalar_one_or_none()

    def get_cart_items(self, cart_id: int) -> List[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .options(selectinload(CartItemModel.product))
                .order_by(CartItemModel.id)
            ).scalars().all()
        )

    def get_cart_item(self, cart_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def upsert_cart_item(self, cart_id: int, product_id: int, quantity: int, price_at_add: Decimal) -> CartItemModel:
        item = self.get_cart_item(cart_id, product_id)
        if item:
            # replace, never add up
            item.quantity = quantity
        else:
            item = CartItemModel(
                cart_id=cart_id,
                product_id=product_id,
                quantity=quantity,
                price_at_add=price_at_add,
            )
            self.db.add(item)
        return item

    def delete_cart_item(self, cart_id: int, product_id: int) -> int:
        res = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        )
        return res.rowcount

    def clear_cart(self, cart_id: int) -> int:
        res = self.db.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart_id))
        return res.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
