"""SQLAlchemy model definitions."""
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import List

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

CENTS = Decimal("0.01")
# Largest amount a Numeric(10, 2) column holds.
MAX_VALUE = Decimal("99999999.99")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """SQLAlchemy Declarative Base."""


class Category(Base):
    """A named grouping for transactions."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Not unique: concurrent imports may legitimately produce duplicates.
    # Binary collation on MySQL so lookups match titles exactly, case included.
    title: Mapped[str] = mapped_column(
        String(255).with_variant(String(255, collation="utf8mb4_bin"), "mysql"),
        nullable=False,
        index=True,
    )

    transactions: Mapped[List["Transaction"]] = relationship(back_populates="category")

    def __repr__(self) -> str:
        return f"Category(id={self.id!r}, title={self.title!r})"


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    OUTCOME = "outcome"


class Transaction(Base):
    """A single income or outcome entry."""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("value >= 0", name="ck_transaction_value_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[TransactionType] = mapped_column(
        SAEnum(
            TransactionType,
            name="transaction_type",
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )
    value: Mapped[Decimal] = mapped_column(
        Numeric(10, 2, asdecimal=True), nullable=False, default=Decimal("0.00")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), nullable=False)
    category: Mapped[Category] = relationship(back_populates="transactions")

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self.id!r}, title={self.title!r}, "
            f"type={self.type!r}, value={self.value!r})"
        )


@dataclass(frozen=True)
class Balance:
    """Net position derived from the persisted transactions."""

    income: Decimal = Decimal("0.00")
    outcome: Decimal = Decimal("0.00")

    @property
    def total(self) -> Decimal:
        return (self.income - self.outcome).quantize(CENTS)
