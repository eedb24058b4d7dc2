from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from shopping_list.db.base import Base


# =========================================================
# Namespaces (one per customer)
# =========================================================
class ShoppingNamespace(Base):
    __tablename__ = "shopping_namespaces"

    namespace: Mapped[str] = mapped_column(String(64), primary_key=True)
    created_ts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


# =========================================================
# Items
# =========================================================
class ShoppingItem(Base):
    """
    One row per (namespace, name).
    quantity is merged on duplicate create, price is fixed at creation.
    """
    __tablename__ = "shopping_items"
    __table_args__ = (
        UniqueConstraint("namespace", "name", name="uq_shopping_items_namespace_name"),
        Index("ix_shopping_items_namespace_created", "namespace", "created_ns"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    namespace: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("shopping_namespaces.namespace"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    created_ts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_ns: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
