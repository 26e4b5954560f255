"""Recording and listing transactions."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session, sessionmaker

from ..database import SessionLocal, session_scope
from ..errors import InsufficientBalanceError
from ..models import TransactionType
from ..repositories import CategoryRepository, TransactionRepository
from ..schemas import BalanceRead, TransactionCreate, TransactionListResult, TransactionRead
from .categories import get_or_create_category

logger = logging.getLogger(__name__)


class CreateTransactionService:
    """Record a single transaction, refusing outcomes the balance cannot cover.

    The category is looked up by exact title and created when missing. The
    category write, the balance read and the transaction write share one unit
    of work, so a rejected outcome leaves no new category behind either.

    The balance is read without locking: two concurrent outcomes may both
    pass the check against the same stale total.
    """

    def __init__(self, session_factory: sessionmaker[Session] = SessionLocal) -> None:
        self.session_factory = session_factory

    def execute(self, payload: TransactionCreate | Mapping[str, Any]) -> TransactionRead:
        data = (
            payload
            if isinstance(payload, TransactionCreate)
            else TransactionCreate.model_validate(payload)
        )

        with session_scope(self.session_factory) as session:
            categories = CategoryRepository(session)
            transactions = TransactionRepository(session)

            category = get_or_create_category(categories, data.category)

            balance = transactions.get_balance()
            if data.type is TransactionType.OUTCOME and data.value > balance.total:
                logger.warning(
                    "Rejected outcome %r of %s: balance is %s",
                    data.title,
                    data.value,
                    balance.total,
                )
                raise InsufficientBalanceError(
                    f"Insufficient balance: outcome of {data.value} exceeds "
                    f"the available total of {balance.total}"
                )

            transaction = transactions.create(
                title=data.title,
                type=data.type,
                value=data.value,
                category_id=category.id,
            )
            transactions.save(transaction)
            session.refresh(transaction)
            result = TransactionRead.model_validate(transaction)

        logger.info(
            "Recorded %s %r of %s in category %r",
            data.type.value,
            data.title,
            data.value,
            data.category,
        )
        return result


class BalanceService:
    def __init__(self, session_factory: sessionmaker[Session] = SessionLocal) -> None:
        self.session_factory = session_factory

    def execute(self) -> BalanceRead:
        with session_scope(self.session_factory) as session:
            balance = TransactionRepository(session).get_balance()
        return BalanceRead.model_validate(balance)


class ListTransactionsService:
    """Return every transaction together with the current balance."""

    def __init__(self, session_factory: sessionmaker[Session] = SessionLocal) -> None:
        self.session_factory = session_factory

    def execute(self) -> TransactionListResult:
        with session_scope(self.session_factory) as session:
            transactions = TransactionRepository(session)
            records = [TransactionRead.model_validate(item) for item in transactions.list()]
            balance = transactions.get_balance()
        return TransactionListResult(
            transactions=records, balance=BalanceRead.model_validate(balance)
        )
