"""
Supplier ledger tables.

Same shape as the client tables, plus the supplier's preferred
payment method. The balance here is what the shop owes.
"""

from decimal import Decimal

from sqlalchemy import (
    Integer, String, Text, Boolean, Numeric, ForeignKey,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shop_ledger.models.base import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_name: Mapped[str | None] = mapped_column(String(200))
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    address: Mapped[str | None] = mapped_column(String(255))
    notes: Mapped[str | None] = mapped_column(Text)
    preferred_payment_method: Mapped[str | None] = mapped_column(String(30))
    credit_balance: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), default=Decimal("0")
    )
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)

    payments: Mapped[list["SupplierPayment"]] = relationship(
        back_populates="supplier", cascade="all, delete-orphan"
    )
    history: Mapped[list["SupplierHistory"]] = relationship(
        back_populates="supplier",
        cascade="all, delete-orphan",
        order_by="SupplierHistory.seq",
    )

    def __repr__(self) -> str:
        return f"<Supplier {self.name} ({self.credit_balance})>"


class SupplierPayment(Base):
    __tablename__ = "supplier_payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    supplier_id: Mapped[str] = mapped_column(
        ForeignKey("suppliers.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    method: Mapped[str] = mapped_column(String(30), nullable=False)
    date: Mapped[str] = mapped_column(String(40), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    session_id: Mapped[str | None] = mapped_column(String(36))
    received_by: Mapped[str | None] = mapped_column(String(100))

    supplier: Mapped["Supplier"] = relationship(back_populates="payments")


class SupplierHistory(Base):
    __tablename__ = "supplier_history"

    seq: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False)
    supplier_id: Mapped[str] = mapped_column(
        ForeignKey("suppliers.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    date: Mapped[str] = mapped_column(String(40), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0")
    )
    related_id: Mapped[str | None] = mapped_column(String(36))
    changed_by: Mapped[str | None] = mapped_column(String(100))

    supplier: Mapped["Supplier"] = relationship(back_populates="history")

    def __repr__(self) -> str:
        return f"<SupplierHistory {self.type} {self.amount}>"
