"""Pydantic models."""
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import CENTS, MAX_VALUE, TransactionType


class CategoryRead(BaseModel):
    """Category output model."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str


class CategoryListResult(BaseModel):
    """Structured response for listing categories."""

    total: int = Field(description="Total number of categories.")
    categories: List[CategoryRead] = Field(default_factory=list)


class TransactionCreate(BaseModel):
    """Input model for recording a single transaction."""

    title: str = Field(..., description="Short description of the transaction.")
    value: Decimal = Field(
        ..., ge=0, le=MAX_VALUE, description="Amount, never negative."
    )
    type: TransactionType = Field(..., description="Either income or outcome.")
    category: str = Field(..., description="Category title, created when missing.")

    @field_validator("title", "category")
    @classmethod
    def must_not_be_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("value")
    @classmethod
    def round_to_cents(cls, value: Decimal) -> Decimal:
        try:
            return value.quantize(CENTS)
        except InvalidOperation as exc:
            raise ValueError("value cannot be rounded to cents") from exc


class TransactionRead(BaseModel):
    """Representation of a recorded transaction."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    type: TransactionType
    value: Decimal
    category_id: int
    category: Optional[CategoryRead] = Field(
        default=None, description="Category the transaction belongs to."
    )
    created_at: datetime = Field(description="Timestamp when the transaction was created.")
    updated_at: datetime = Field(description="Timestamp when the transaction was last updated.")


class BalanceRead(BaseModel):
    """Income and outcome totals with their difference."""

    model_config = ConfigDict(from_attributes=True)

    income: Decimal
    outcome: Decimal
    total: Decimal


class TransactionListResult(BaseModel):
    """Every recorded transaction together with the current balance."""

    transactions: List[TransactionRead] = Field(default_factory=list)
    balance: BalanceRead


class ImportResult(BaseModel):
    """Outcome of a CSV import."""

    transactions: List[TransactionRead] = Field(
        default_factory=list, description="Transactions inserted by the import."
    )
    created_categories: List[CategoryRead] = Field(
        default_factory=list, description="Categories that did not exist before the import."
    )
    skipped_rows: int = Field(
        default=0, description="Data rows dropped for missing or malformed fields."
    )
    source_removed: bool = Field(
        default=True, description="Whether the source CSV file was deleted afterwards."
    )
