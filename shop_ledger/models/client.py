"""
Client ledger tables.

A client carries an outstanding balance (what the client owes the
shop). Every change to that balance is paired with one row in
client_history; payments additionally land in client_payments.
"""

from decimal import Decimal

from sqlalchemy import (
    Integer, String, Text, Boolean, Numeric, ForeignKey,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shop_ledger.models.base import Base


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_name: Mapped[str | None] = mapped_column(String(200))
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    address: Mapped[str | None] = mapped_column(String(255))
    notes: Mapped[str | None] = mapped_column(Text)
    credit_balance: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), default=Decimal("0")
    )
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)

    # Deleting a client removes its ledger trail with it
    payments: Mapped[list["ClientPayment"]] = relationship(
        back_populates="client", cascade="all, delete-orphan"
    )
    history: Mapped[list["ClientHistory"]] = relationship(
        back_populates="client",
        cascade="all, delete-orphan",
        order_by="ClientHistory.seq",
    )

    def __repr__(self) -> str:
        return f"<Client {self.name} ({self.credit_balance})>"


class ClientPayment(Base):
    __tablename__ = "client_payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    client_id: Mapped[str] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    method: Mapped[str] = mapped_column(String(30), nullable=False)
    date: Mapped[str] = mapped_column(String(40), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    session_id: Mapped[str | None] = mapped_column(String(36))
    received_by: Mapped[str | None] = mapped_column(String(100))

    client: Mapped["Client"] = relationship(back_populates="payments")


class ClientHistory(Base):
    """
    Append-only record of one change to a client's balance.

    seq is the insertion order; history is never updated in place.
    """

    __tablename__ = "client_history"

    seq: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False)
    client_id: Mapped[str] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"),
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

    client: Mapped["Client"] = relationship(back_populates="history")

    def __repr__(self) -> str:
        return f"<ClientHistory {self.type} {self.amount}>"
