from sqlalchemy import CheckConstraint, Column, Index, Integer, String, UniqueConstraint

from .database import Base


# 🛒 One row per (user, item)
class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False)
    item_id = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("user_id", "item_id", name="uq_cart_user_item"),
        CheckConstraint("quantity >= 0", name="ck_cartitem_quantity_nonneg"),
        Index("ix_cart_items_user", "user_id"),
    )
