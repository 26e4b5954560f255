"""Bookkeeping workflows."""

from .categories import ListCategoriesService, get_or_create_category, unique_titles
from .imports import ImportTransactionsService
from .transactions import BalanceService, CreateTransactionService, ListTransactionsService

__all__ = [
    "BalanceService",
    "CreateTransactionService",
    "ImportTransactionsService",
    "ListCategoriesService",
    "ListTransactionsService",
    "get_or_create_category",
    "unique_titles",
]
