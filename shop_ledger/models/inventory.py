"""
Inventory tables.

For an inventory item the "balance" is quantity_in_stock, a
non-negative integer. Stock movements are recorded in
inventory_history as signed quantity changes.
"""

from sqlalchemy import Integer, String, Text, Float, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shop_ledger.models.base import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    item_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone_brand: Mapped[str] = mapped_column(String(50), nullable=False)
    item_type: Mapped[str] = mapped_column(String(50), nullable=False)
    buying_price: Mapped[float] = mapped_column(Float, nullable=False)
    selling_price: Mapped[float] = mapped_column(Float, nullable=False)
    quantity_in_stock: Mapped[int | None] = mapped_column(Integer, default=0)
    low_stock_threshold: Mapped[int | None] = mapped_column(Integer)
    supplier_info: Mapped[str | None] = mapped_column(Text)
    barcode: Mapped[str | None] = mapped_column(String(64), index=True)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)

    history: Mapped[list["InventoryHistory"]] = relationship(
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="InventoryHistory.seq",
    )

    def __repr__(self) -> str:
        return f"<InventoryItem {self.item_name} x{self.quantity_in_stock}>"


class InventoryHistory(Base):
    __tablename__ = "inventory_history"

    seq: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False)
    item_id: Mapped[str] = mapped_column(
        ForeignKey("inventory_items.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    date: Mapped[str] = mapped_column(String(40), nullable=False)
    event_type: Mapped[str] = mapped_column(String(50), nullable=False)
    quantity_change: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    related_id: Mapped[str | None] = mapped_column(String(36))

    item: Mapped["InventoryItem"] = relationship(back_populates="history")

    def __repr__(self) -> str:
        return (
            f"<InventoryHistory {self.event_type} {self.quantity_change:+d}>"
        )
