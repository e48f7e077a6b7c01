# storefront/store.py
from abc import ABC, abstractmethod
from typing import Dict

import structlog
from fastapi import Request
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker

from .models import CartItem

logger = structlog.get_logger(__name__)


class CartStore(ABC):
    """Per-user item quantities. Quantities only ever go up, one at a time."""

    @abstractmethod
    async def add_item(self, user_id: str, item_id: str) -> None:
        ...

    @abstractmethod
    async def get_items(self, user_id: str) -> Dict[str, int]:
        ...


class InMemoryCartStore(CartStore):
    """Carts live in a dict for the lifetime of the process. No locking."""

    def __init__(self):
        self._carts: Dict[str, Dict[str, int]] = {}

    async def add_item(self, user_id: str, item_id: str) -> None:
        cart = self._carts.setdefault(user_id, {})
        cart[item_id] = cart.get(item_id, 0) + 1

    async def get_items(self, user_id: str) -> Dict[str, int]:
        return dict(self._carts.get(user_id, {}))


class SqlCartStore(CartStore):
    def __init__(self, session_maker: async_sessionmaker):
        self._session_maker = session_maker

    async def add_item(self, user_id: str, item_id: str) -> None:
        async with self._session_maker() as session:
            res = await session.execute(
                select(CartItem).where(CartItem.user_id == user_id, CartItem.item_id == item_id)
            )
            existing = res.scalar_one_or_none()
            if existing:
                existing.quantity = existing.quantity + 1
                await session.commit()
                return

            session.add(CartItem(user_id=user_id, item_id=item_id, quantity=1))
            try:
                await session.commit()
            except IntegrityError:
                # another request inserted the row first
                await session.rollback()
                res = await session.execute(
                    select(CartItem).where(CartItem.user_id == user_id, CartItem.item_id == item_id)
                )
                row = res.scalar_one()
                row.quantity = row.quantity + 1
                await session.commit()
                logger.info("cart_item_insert_conflict", user_id=user_id, item_id=item_id)

    async def get_items(self, user_id: str) -> Dict[str, int]:
        async with self._session_maker() as session:
            res = await session.execute(
                select(CartItem.item_id, CartItem.quantity)
                .where(CartItem.user_id == user_id)
                .order_by(CartItem.id)
            )
            return {item_id: quantity for item_id, quantity in res.all()}


def get_cart_store(request: Request) -> CartStore:
    return request.app.state.cart_store
