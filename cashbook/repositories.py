"""Data access layer for categories and transactions."""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, TypedDict

from sqlalchemy import asc, case, func, select
from sqlalchemy.orm import Session, selectinload

from .models import CENTS, Balance, Category, Transaction, TransactionType


class CategoryRepository:
    """Category store bound to a single session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_title(self, title: str) -> Optional[Category]:
        """Fetch the first category with exactly this title."""
        stmt = select(Category).where(Category.title == title).order_by(asc(Category.id))
        return self.session.scalars(stmt).first()

    def find_by_titles(self, titles: Iterable[str]) -> List[Category]:
        """Fetch every category whose title is in ``titles``."""
        title_list = list(titles)
        if not title_list:
            return []
        stmt = (
            select(Category)
            .where(Category.title.in_(title_list))
            .order_by(asc(Category.id))
        )
        return list(self.session.scalars(stmt).all())

    def list(self) -> List[Category]:
        stmt = select(Category).order_by(asc(Category.title), asc(Category.id))
        return list(self.session.scalars(stmt).all())

    def create(self, title: str) -> Category:
        return Category(title=title)

    def create_many(self, titles: Iterable[str]) -> List[Category]:
        return [Category(title=title) for title in titles]

    def save(self, categories: Category | Sequence[Category]) -> None:
        """Write one or more categories, populating their ids."""
        if isinstance(categories, Category):
            self.session.add(categories)
        else:
            self.session.add_all(categories)
        self.session.flush()


class TransactionFields(TypedDict):
    title: str
    type: TransactionType
    value: Decimal
    category: Category


class TransactionRepository:
    """Transaction store bound to a single session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        *,
        title: str,
        type: TransactionType,
        value: Decimal,
        category_id: int | None = None,
        category: Category | None = None,
    ) -> Transaction:
        transaction = Transaction(title=title, type=type, value=value)
        if category is not None:
            transaction.category = category
        else:
            transaction.category_id = category_id
        return transaction

    def create_many(self, rows: Iterable[TransactionFields]) -> List[Transaction]:
        return [self.create(**row) for row in rows]

    def save(self, transactions: Transaction | Sequence[Transaction]) -> None:
        """Write one or more transactions in a single flush."""
        if isinstance(transactions, Transaction):
            self.session.add(transactions)
        else:
            self.session.add_all(transactions)
        self.session.flush()

    def list(self) -> List[Transaction]:
        stmt = (
            select(Transaction)
            .options(selectinload(Transaction.category))
            .order_by(asc(Transaction.created_at), asc(Transaction.id))
        )
        return list(self.session.scalars(stmt).all())

    def get_balance(self) -> Balance:
        """Sum incomes and outcomes in one aggregate query."""
        stmt = select(
            func.coalesce(
                func.sum(
                    case((Transaction.type == TransactionType.INCOME, Transaction.value), else_=0)
                ),
                0,
            ).label("income"),
            func.coalesce(
                func.sum(
                    case((Transaction.type == TransactionType.OUTCOME, Transaction.value), else_=0)
                ),
                0,
            ).label("outcome"),
        )
        row = self.session.execute(stmt).one()
        return Balance(income=_to_cents(row.income), outcome=_to_cents(row.outcome))


def _to_cents(value: object) -> Decimal:
    # SQLite hands back floats for aggregated NUMERIC columns.
    return Decimal(str(value or 0)).quantize(CENTS)
